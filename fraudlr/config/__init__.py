"""
Configuration module - Base settings class for environment configuration.
"""

from fraudlr.config.base_settings import BaseAppSettings

__all__ = ["BaseAppSettings"]
