"""Shared library code for atpath."""
