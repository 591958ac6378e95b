"""
API dependencies for authentication and the per-request context.
"""

import logging
from typing import Annotated
from uuid import uuid4

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import AuthenticationError
from core.security.tokens import TokenService
from infrastructure.config.settings import Settings, get_settings
from infrastructure.database.connection import get_db
from infrastructure.logging_config import RequestLoggerAdapter
from services.context import RequestContext

logger = logging.getLogger("brandwrite.request")

token_service = TokenService(
    secret_key=get_settings().jwt_secret_key,
    algorithm=get_settings().jwt_algorithm,
    access_token_expire_minutes=get_settings().jwt_access_token_expire_minutes,
)


async def get_current_user_id(
    authorization: Annotated[str | None, Header()] = None,
) -> str:
    """
    Dependency returning the authenticated caller's provider user ID.

    The token is issued by the identity provider; only its signature, expiry
    and ``sub`` claim are checked here.
    """
    token = None
    if authorization and authorization.startswith("Bearer "):
        parts = authorization.split(" ", 1)
        token = parts[1] if len(parts) > 1 and parts[1] else None

    if not token:
        raise AuthenticationError()

    payload = token_service.verify_access_token(token)
    if not payload:
        raise AuthenticationError("Invalid or expired token")

    return payload.sub


async def get_request_context(
    request: Request,
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> RequestContext:
    """Build the request context from the auth identity, session and settings."""
    request_id = getattr(request.state, "request_id", None) or str(uuid4())
    return RequestContext(
        user_id=user_id,
        request_id=request_id,
        db=db,
        settings=settings,
        logger=RequestLoggerAdapter(
            logger, {"request_id": request_id, "user_id": user_id}
        ),
    )


CurrentContext = Annotated[RequestContext, Depends(get_request_context)]
