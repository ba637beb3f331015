"""
Pure computation layer: derived fields, aggregation and list search.

Nothing in this package touches the database or the request context.
"""
