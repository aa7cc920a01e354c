"""HTTP API: app factory (finflow.api.app), routers and error handlers."""
