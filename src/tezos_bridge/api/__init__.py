"""HTTP API — FastAPI application exposing the account bridge."""
