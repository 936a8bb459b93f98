"""Provider registry package."""
