"""
FastAPI dependencies for authentication and authorization.

get_current_principal reads the optional bearer token; the ensure_* guards
run an authorization decision on it and reject the request when it denies.
"""

import logging
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from typing import Optional

from app.core.permissions import Decision, Principal, decide, decide_admin, decide_logged_in
from app.core.security import decode_token, principal_from_payload

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme (Authorization: Bearer <token>). A missing header
# is not an error here; the guards below decide what anonymous users may do.
optional_bearer = HTTPBearer(auto_error=False)


async def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_bearer),
) -> Optional[Principal]:
    """
    Extract the principal from the JWT, if one was provided.

    Returns None when no token was sent or the token is invalid/expired;
    invalid tokens are ignored rather than rejected.
    """
    if not credentials:
        return None

    try:
        payload = decode_token(credentials.credentials)
    except JWTError as e:
        logger.info(f"Ignoring invalid access token: {e}")
        return None

    return principal_from_payload(payload)


def raise_for_decision(decision: Decision) -> None:
    """
    Translate a denial into an HTTP error.

    Raises:
        HTTPException 401: No authenticated user
        HTTPException 403: User lacks admin rights or ownership
    """
    if decision is Decision.UNAUTHENTICATED:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if decision is Decision.UNAUTHORIZED:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to perform this action",
        )


async def ensure_logged_in(
    principal: Optional[Principal] = Depends(get_current_principal),
) -> Principal:
    """Require any logged-in user."""
    raise_for_decision(decide_logged_in(principal))
    return principal


async def ensure_admin(
    principal: Optional[Principal] = Depends(get_current_principal),
) -> Principal:
    """
    Require an admin user.

    Raises:
        HTTPException 401: Not logged in
        HTTPException 403: Logged in but not an admin
    """
    decision = decide_admin(principal)
    if decision is Decision.UNAUTHORIZED:
        logger.warning(f"Non-admin user {principal.username} attempted an admin action")
    raise_for_decision(decision)
    return principal


async def ensure_admin_or_user(
    username: str,
    principal: Optional[Principal] = Depends(get_current_principal),
) -> Principal:
    """
    Require an admin, or the user named by the {username} path parameter.
    """
    raise_for_decision(decide(principal, resource_owner=username))
    return principal
