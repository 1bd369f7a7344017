"""Upstream access: shared HTTP clients and the Home Assistant client."""
