"""Gatehouse application layer."""
