"""HTTP layer: users blueprint, health checks and error handlers."""
