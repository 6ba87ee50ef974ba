"""Marketplace bounded context."""
