"""Web framework adapters for the query engine."""
