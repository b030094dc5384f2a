"""Command-line interface for openflow-git."""
