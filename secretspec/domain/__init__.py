"""Domain layer: value objects, entities, errors, protocols, and the provider registry."""
