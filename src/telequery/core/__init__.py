"""Core query engine: models, generation, filtering, aggregation, paging."""
