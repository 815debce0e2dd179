"""REST API for word-space queries."""
