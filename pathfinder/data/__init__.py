"""Bundled roadmap content."""
