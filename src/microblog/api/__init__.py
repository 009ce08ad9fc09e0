"""API layer: dependencies and versioned routers."""
