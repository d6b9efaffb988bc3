"""HTTP API for Cooked Court."""
