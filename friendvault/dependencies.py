"""Identity resolution at the transport boundary.

The caller asserts its user id in a header and the value is trusted as-is.
Swapping this for verified credentials only has to change this module; the
services receive a plain UUID either way.
"""

import uuid

from fastapi import Request

from friendvault.config import settings
from friendvault.exceptions import UnauthorizedError


async def get_current_user_id(request: Request) -> uuid.UUID:
    raw = request.headers.get(settings.IDENTITY_HEADER)
    if not raw:
        raise UnauthorizedError(
            f"Unauthorized: '{settings.IDENTITY_HEADER}' header missing. Please authenticate."
        )
    try:
        return uuid.UUID(raw.strip())
    except ValueError:
        raise UnauthorizedError(f"Unauthorized: '{settings.IDENTITY_HEADER}' is not a valid user id.")
