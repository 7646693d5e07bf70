"""Gatehouse HTTP API."""
