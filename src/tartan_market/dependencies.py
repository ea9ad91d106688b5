"""FastAPI dependency injection: app.state.container holds singletons; Depends() resolves them.

Services are built per request around a request-scoped database session.
"""
from collections.abc import Generator
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from tartan_market.container import Container
from tartan_market.db.sessions import get_session
from tartan_market.errors import UnauthorizedError
from tartan_market.ids import ClerkID
from tartan_market.services import (ItemsService, SearchService,
                                    UploadsService, UsersService)
from tartan_market.stores import ListingStore, UserDirectory

# Clerk keeps the same-origin session token in this cookie.
SESSION_COOKIE = "__session"

bearer_scheme = HTTPBearer(auto_error=False)


def get_container(request: Request) -> Container:
    """Resolve the DI container created by create_app()."""
    return request.app.state.container


def get_db_session(
    container: Annotated[Container, Depends(get_container)],
) -> Generator[Session, None, None]:
    """One session per request.

    Stores commit their own writes so failures surface before the response
    is sent; on exit there is nothing left to commit.
    """
    with get_session(container.engine()) as session:
        yield session


def get_clerk_id(
    request: Request,
    container: Annotated[Container, Depends(get_container)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> ClerkID:
    """Authenticate the caller from a bearer token or the session cookie."""
    token = credentials.credentials if credentials else request.cookies.get(SESSION_COOKIE)
    if not token:
        raise UnauthorizedError()
    clerk_id = container.identity_provider().verify_session_token(token)
    if clerk_id is None:
        raise UnauthorizedError()
    return clerk_id


def get_users_service(
    container: Annotated[Container, Depends(get_container)],
    session: Annotated[Session, Depends(get_db_session)],
) -> UsersService:
    """Inject the users service (user directory + identity provider)."""
    return UsersService(
        UserDirectory(session),
        container.identity_provider(),
        default_avatar_url=container.settings().default_avatar_url,
    )


def get_items_service(
    session: Annotated[Session, Depends(get_db_session)],
) -> ItemsService:
    """Inject the items service (listing store + user directory)."""
    return ItemsService(ListingStore(session), UserDirectory(session))


def get_uploads_service(
    container: Annotated[Container, Depends(get_container)],
    session: Annotated[Session, Depends(get_db_session)],
) -> UploadsService:
    """Inject the uploads service (user directory + storage provider)."""
    settings = container.settings()
    return UploadsService(
        UserDirectory(session),
        container.storage_provider(),
        max_images=settings.max_upload_images,
        max_bytes=settings.max_upload_bytes,
    )


def get_search_service(
    container: Annotated[Container, Depends(get_container)],
) -> SearchService:
    """Inject the search service (search provider)."""
    return SearchService(
        container.search_provider(),
        default_limit=container.settings().search_default_limit,
    )


# Type aliases for route injection
CallerID = Annotated[ClerkID, Depends(get_clerk_id)]
UsersServiceDep = Annotated[UsersService, Depends(get_users_service)]
ItemsServiceDep = Annotated[ItemsService, Depends(get_items_service)]
UploadsServiceDep = Annotated[UploadsService, Depends(get_uploads_service)]
SearchServiceDep = Annotated[SearchService, Depends(get_search_service)]
