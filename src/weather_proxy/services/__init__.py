"""Upstream client and response translation."""
