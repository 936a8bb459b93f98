"""Core layer: result types, errors, configuration, and the container."""
