"""Gatehouse infrastructure layer."""
