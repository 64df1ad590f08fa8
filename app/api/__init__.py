"""
HTTP layer: dependencies in `app.api.deps`, versioned routers below.
"""
