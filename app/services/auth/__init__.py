"""
Authentication service layer.

- AuthService: login, refresh, principal resolution, password flows
- RegistrationService: public self-registration
"""

from app.services.auth.auth_service import FORGOT_PASSWORD_MESSAGE, AuthService
from app.services.auth.registration_service import RegistrationService

__all__ = [
    "AuthService",
    "FORGOT_PASSWORD_MESSAGE",
    "RegistrationService",
]
