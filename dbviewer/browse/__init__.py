"""Table browsing: introspection, paginated reads and their CLI."""
