"""CLI layer for pocketledger application."""
