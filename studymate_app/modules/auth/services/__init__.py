from .auth_service import AuthService
from .password_reset_service import PasswordResetService

__all__ = ['AuthService', 'PasswordResetService']
