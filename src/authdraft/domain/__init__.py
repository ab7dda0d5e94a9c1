"""Domain layer: model, ports and the conversion core."""
