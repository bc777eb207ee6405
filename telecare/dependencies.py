"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from telecare.core.redis_client import CacheManager, get_redis_client
from telecare.database import get_db


def get_cache_manager() -> CacheManager:
    """Get a cache manager bound to the shared Redis client."""
    return CacheManager(get_redis_client())


# Type aliases for dependency injection
DatabaseSession = Annotated[AsyncSession, Depends(get_db)]
CacheManagerDep = Annotated[CacheManager | None, Depends(get_cache_manager)]
