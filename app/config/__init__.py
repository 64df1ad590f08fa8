"""
Configuration package for the HR management backend.

Environment-driven settings live in `app.config.settings`; everything else
(database engine, logging) is configured from the values exposed here.
"""

from app.config.settings import Settings, get_settings, settings

__all__ = ['Settings', 'get_settings', 'settings']
