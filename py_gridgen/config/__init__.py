"""
Configuration for grid generation.
"""

from .settings import Settings

settings = Settings()

__all__ = ["Settings", "settings"]
