"""Utility and administration commands."""
