"""Core models and utilities."""
