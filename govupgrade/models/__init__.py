"""Analysis result models."""
