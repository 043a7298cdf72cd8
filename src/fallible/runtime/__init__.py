"""Runtime services."""
