"""Protomatter test suite."""
