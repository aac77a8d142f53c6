"""Data layer: models, error types and the ingredient risk registry."""
