"""Command line interface for the Claude CLI SDK."""
