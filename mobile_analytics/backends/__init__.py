"""HTTP transport for metrics submission"""

from .http import HTTPClient

__all__ = ['HTTPClient']
