"""Routing — endpoint declarations, precedence ordering, and matching.

Endpoints are registered during setup, sorted once into a deterministic
dispatch order, and compiled into an immutable route table when the app
freezes.
"""
