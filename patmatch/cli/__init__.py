"""Command-line interface for patmatch."""
