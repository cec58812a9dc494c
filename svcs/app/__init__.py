"""Command-line entry points for SVCS."""
