"""HTTP API for the calculator."""
