"""Command-line interface for lsmcp."""
