"""Infrastructure layer: logging and provider adapters."""
