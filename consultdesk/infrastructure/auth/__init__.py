"""
Tenant identification for the web layer.
"""

from .dependencies import get_current_user_id, CurrentUserId, USER_ID_HEADER

__all__ = [
    "get_current_user_id",
    "CurrentUserId",
    "USER_ID_HEADER",
]
