"""Request-level dependencies shared by the v1 routers."""
from dependency_injector.wiring import Provide, inject
from fastapi import Depends, HTTPException, Query, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from src.app.config import Settings
from src.app.containers import Container
from src.app.logging import get_logger
from src.shared.auth import AuthProvider
from src.shared.exceptions import Unauthenticated

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


class PageParams(BaseModel):
    page: int
    page_size: int


@inject
async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    auth_provider: AuthProvider = Depends(Provide[Container.auth_provider]),
) -> str:
    """
    Resolve the caller from the bearer token.

    Raises:
        HTTPException 401: If the token is missing or unknown
    """
    token = credentials.credentials if credentials else None
    try:
        return await auth_provider.require_user_id(token)
    except Unauthenticated as e:
        logger.warning(f"Rejected request: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )


@inject
async def get_page_params(
    page: int = Query(default=1, ge=1),
    page_size: int | None = Query(default=None, ge=1),
    settings: Settings = Depends(Provide[Container.config]),
) -> PageParams:
    """Page and page size from the query string, capped at the configured maximum."""
    size = page_size or settings.pagination.default_page_size
    return PageParams(page=page, page_size=min(size, settings.pagination.max_page_size))
