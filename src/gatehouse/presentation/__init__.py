"""Gatehouse presentation layer (HTTP API and CLI)."""
