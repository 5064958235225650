"""Core runtime helpers: logging and application lifecycle."""
