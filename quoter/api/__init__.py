"""HTTP API for the quoting service."""
