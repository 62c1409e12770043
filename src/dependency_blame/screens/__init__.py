"""Textual screens for the interactive mode."""
