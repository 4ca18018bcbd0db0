"""
Core module - configuration, logging and error handling shared by every layer.
"""
from nexusai.core.config import Settings, get_settings
from nexusai.core.errors import ApiError

__all__ = ["Settings", "get_settings", "ApiError"]
