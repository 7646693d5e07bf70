"""Gatehouse command-line interface."""
