"""Adapters - I/O implementations of ports."""

from .notice_api import ApiError, AuthenticationError, NoticeApiAdapter

__all__ = [
    "NoticeApiAdapter",
    "AuthenticationError",
    "ApiError",
]
