"""Output rendering for the CLI."""
