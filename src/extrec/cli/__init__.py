"""Command-line interface for Extrec."""
