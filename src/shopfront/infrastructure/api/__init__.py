"""HTTP API for Shopfront (FastAPI)."""
