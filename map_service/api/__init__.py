"""
API Module - HTTP surface for the map service
"""

from .server import MapServer
from .auth import ApiKeyGuard

__all__ = ["MapServer", "ApiKeyGuard"]
