"""Core application modules: logging, middleware and exception handlers."""
