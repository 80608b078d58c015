"""Terminal rendering with rich."""
