"""Command-line interface for vCloud Director metadata."""
