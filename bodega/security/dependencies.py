"""
Authentication dependencies for FastAPI.

This module provides dependency functions for protecting routes and
extracting the authenticated operator.
"""

from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from bodega.fastapi.crud.operator import get_operator
from bodega.fastapi.dependencies.database import get_sync_db
from bodega.fastapi.models.operator import Operator
from bodega.security.auth import verify_access_token

# HTTP Bearer token scheme
security = HTTPBearer()


async def get_current_token(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> dict:
    """Extract and validate the JWT from the Authorization header."""
    return verify_access_token(credentials.credentials)


async def get_current_operator(
    token_data: dict = Depends(get_current_token),
    db: Session = Depends(get_sync_db)
) -> Operator:
    """
    Get the authenticated operator (admin or not).

    Raises:
        HTTPException: 401 if the token does not match an account,
            403 if the account is deactivated
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        operator_id = UUID(str(token_data.get("sub")))
    except ValueError:
        raise credentials_exception

    operator = get_operator(db, operator_id)
    if operator is None:
        raise credentials_exception

    if not operator.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Operator account is deactivated"
        )

    return operator


async def get_current_admin(
    current_operator: Operator = Depends(get_current_operator)
) -> Operator:
    """
    Get the authenticated operator, requiring admin access.

    The role is read from the database rather than the token so that
    revoking admin access takes effect immediately.
    """
    if not current_operator.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enough permissions. Admin access required."
        )
    return current_operator


# Convenience dependencies
RequireOperator = Depends(get_current_operator)
RequireAdmin = Depends(get_current_admin)
