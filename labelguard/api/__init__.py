"""HTTP API for labelguard."""
