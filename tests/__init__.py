"""Test suite for cep_weather."""
