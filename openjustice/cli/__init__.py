"""Command-line interface for the openjustice SDK."""
