"""Configuration module for the user API clients."""
from .settings import UserApiSettings, load_settings

__all__ = ["UserApiSettings", "load_settings"]
