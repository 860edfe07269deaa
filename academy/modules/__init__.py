"""Domain modules package."""
