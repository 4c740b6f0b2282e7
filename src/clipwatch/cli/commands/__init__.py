"""CLI commands for clipwatch."""
