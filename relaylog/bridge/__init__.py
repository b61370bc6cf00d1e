"""Bridges to external collaborators (remote chat transport)."""
