"""Shared constants for Extrec."""
