"""Domain layer: models, judge and scraping primitives."""
