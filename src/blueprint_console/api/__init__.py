"""HTTP surface of the blueprint console (FastAPI)."""
