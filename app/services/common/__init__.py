# app/services/common/__init__.py
"""
Shared service-layer infrastructure.

- **unit_of_work**: Transaction boundary & repository factory
- **security**: Password hashing (bcrypt) and JWT token management
- **permissions**: Typed permissions, roles and authorization predicates
- **errors**: Service-layer exception hierarchy

Example usage:
    >>> from app.services.common import security
    >>> from app.services.common.unit_of_work import UnitOfWork
    >>>
    >>> with UnitOfWork(session_factory) as uow:
    ...     user = uow.get_repo(UserRepository).get_by_email(email)
    >>>
    >>> token = security.create_access_token(
    ...     subject=user.id,
    ...     jwt_settings=settings.jwt_settings,
    ... )

This package must stay importable from `app.models`, so `UnitOfWork` is
imported from its own module.
"""
from __future__ import annotations

from . import errors, permissions, security

__all__ = [
    "errors",
    "permissions",
    "security",
]
