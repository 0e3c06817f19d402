"""
Middleware package for the Realty Flow API.
"""

from .request_logging import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware"]
