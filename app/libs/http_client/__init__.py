"""HTTP Client module."""

from .client import HttpClient
from .middleware import logging_middleware, raise_for_status_middleware
from .models import Request, Response
from .types import Middleware, NextFn

__all__ = [
    "HttpClient",
    "Request",
    "Response",
    "Middleware",
    "NextFn",
    "logging_middleware",
    "raise_for_status_middleware",
]
