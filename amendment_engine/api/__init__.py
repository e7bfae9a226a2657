"""HTTP API for the amendment engine (FastAPI)."""
