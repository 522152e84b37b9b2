"""Data subpackage - menu catalog loading."""
from .catalog import MenuCatalog, get_file_hash

__all__ = ['MenuCatalog', 'get_file_hash']
