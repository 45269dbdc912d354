"""
Core module initialization.
Exports configuration, logging and error utilities.
"""

from tiffin.core.config import get_settings, Settings, EnvironmentMode
from tiffin.core.errors import TiffinError

__all__ = ["get_settings", "Settings", "EnvironmentMode", "TiffinError"]
