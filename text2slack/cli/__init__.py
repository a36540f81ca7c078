"""CLI module for text2slack."""
