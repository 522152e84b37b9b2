"""Config subpackage - settings and path configuration."""
from .settings import Settings, get_settings, normalize_location

__all__ = ['Settings', 'get_settings', 'normalize_location']
