"""
Authentication and Authorization

Provides FastAPI dependencies that turn a bearer JWT into the authenticated
actor/organization context every mutating call needs. Token issuance lives in
the identity service; this module only validates and unpacks claims.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Annotated
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from cms.core.database import DbSession
from cms.core.exceptions import UnauthorizedError
from cms.core.security import decode_token

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class UserPrincipal:
    """
    Authenticated user principal.

    All user info is extracted from JWT claims (no database lookup required).
    """
    user_id: str
    organization_id: UUID
    email: str = ""
    name: str = ""


@dataclass
class ExecutionContext:
    """
    Request context: the authenticated actor, its organization scope and the
    database session for the request.
    """
    user: UserPrincipal
    org_id: UUID
    db: "AsyncSession"

    @property
    def user_id(self) -> str:
        """Actor id stamped into audit fields."""
        return self.user.user_id


async def get_current_user_optional(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> UserPrincipal | None:
    """
    Get the current user from JWT token (optional).

    Checks the Authorization: Bearer header first, then the access_token
    cookie. Returns None if no token is provided or the token is invalid.
    """
    token = None

    if credentials:
        token = credentials.credentials
    elif "access_token" in request.cookies:
        token = request.cookies["access_token"]

    if not token:
        return None

    payload = decode_token(token, expected_type="access")
    if payload is None:
        return None

    user_id = payload.get("sub")
    if not user_id:
        return None

    org_id_str = payload.get("org_id")
    if not org_id_str:
        logger.warning(f"Token for user {user_id} missing org_id claim")
        return None

    try:
        org_id = UUID(org_id_str)
    except (ValueError, TypeError, AttributeError):
        logger.warning(f"Token for user {user_id} has invalid org_id format: {org_id_str}")
        return None

    return UserPrincipal(
        user_id=str(user_id),
        organization_id=org_id,
        email=payload.get("email", ""),
        name=payload.get("name", ""),
    )


async def get_current_user(
    user: Annotated[UserPrincipal | None, Depends(get_current_user_optional)],
) -> UserPrincipal:
    """
    Get the current user from JWT token (required).

    Raises:
        UnauthorizedError: If not authenticated or token is invalid
    """
    if user is None:
        raise UnauthorizedError()
    return user


CurrentUser = Annotated[UserPrincipal, Depends(get_current_user)]


async def get_execution_context(user: CurrentUser, db: DbSession) -> ExecutionContext:
    """
    Build the execution context for HTTP requests.

    The organization scope is always the user's home organization; there is
    no cross-tenant access through this API.
    """
    return ExecutionContext(user=user, org_id=user.organization_id, db=db)


Context = Annotated[ExecutionContext, Depends(get_execution_context)]
