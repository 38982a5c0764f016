"""Core types: models and errors."""
