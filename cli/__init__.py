"""Command line interface for matnet."""
