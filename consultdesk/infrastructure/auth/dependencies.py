"""
Authentication dependencies for FastAPI.
Every request names its tenant in the X-User-Id header; all reads and
writes are scoped to that owner id.
"""

import re
from typing import Annotated, Optional
from fastapi import Depends
from fastapi.security import APIKeyHeader

from consultdesk.infrastructure.web.middleware.error_handler import UnauthorizedException


USER_ID_HEADER = "X-User-Id"

# Security scheme
user_id_header = APIKeyHeader(name=USER_ID_HEADER, auto_error=False)

_USER_ID_PATTERN = re.compile(r'^[A-Za-z0-9_.@:-]{1,128}$')


async def get_current_user_id(
    user_id: Annotated[Optional[str], Depends(user_id_header)]
) -> str:
    """
    FastAPI dependency to get the current tenant's user ID.

    Raises:
        UnauthorizedException: if the header is missing or malformed
    """
    if not user_id or not user_id.strip():
        raise UnauthorizedException(f"Missing {USER_ID_HEADER} header")

    user_id = user_id.strip()
    if not _USER_ID_PATTERN.match(user_id):
        raise UnauthorizedException(f"Malformed {USER_ID_HEADER} header")
    return user_id


CurrentUserId = Annotated[str, Depends(get_current_user_id)]
