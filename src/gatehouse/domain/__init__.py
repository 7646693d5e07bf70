"""Gatehouse domain layer."""
