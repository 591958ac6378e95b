"""
Per-request context handed to every service.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.config.settings import Settings


@dataclass(frozen=True)
class RequestContext:
    """Everything a service needs for one request, passed explicitly."""

    user_id: str
    request_id: str
    db: AsyncSession
    settings: Settings
    logger: logging.LoggerAdapter
