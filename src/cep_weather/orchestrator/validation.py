"""
cep_weather.orchestrator.validation

Postal code (CEP) input validation.
"""

from __future__ import annotations

import re
from typing import Any

# `\d` would also accept non-ASCII digits; `\Z` rejects a trailing newline that `$` lets through.
_CEP_RE = re.compile(r"[0-9]{8}\Z")


def is_valid_postal_code(value: Any) -> bool:
    return isinstance(value, str) and _CEP_RE.match(value) is not None
