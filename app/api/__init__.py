"""HTTP layer: versioned routers and exception handlers."""
