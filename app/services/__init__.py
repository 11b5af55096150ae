"""
Application services.
"""

from app.services.auth_service import AuthService
from app.services.reset_delivery import ResetTokenSender, LogResetTokenSender

__all__ = ["AuthService", "ResetTokenSender", "LogResetTokenSender"]
