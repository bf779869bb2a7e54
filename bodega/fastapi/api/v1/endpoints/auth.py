"""
Operator authentication endpoints.

This module provides FastAPI endpoints for logging in, bootstrapping the
first admin account and creating further operator accounts.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from bodega.fastapi.core.config import Settings
from bodega.fastapi.crud.operator import authenticate_operator, count_operators, create_operator
from bodega.fastapi.dependencies.database import get_sync_db
from bodega.fastapi.dependencies.settings import get_app_settings
from bodega.fastapi.models.operator import Operator
from bodega.fastapi.schemas.operator import OperatorCreate, OperatorLogin, OperatorRead, TokenResponse
from bodega.security.auth import create_operator_token
from bodega.security.dependencies import RequireAdmin, RequireOperator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["authentication"])


@router.post("/login", response_model=TokenResponse, summary="Operator Login")
async def login(
    credentials: OperatorLogin,
    db: Session = Depends(get_sync_db),
    settings: Settings = Depends(get_app_settings)
):
    """
    Authenticate an operator and return a JWT access token.

    **Returns:**
    - **access_token**: JWT token for authenticated requests
    - **expires_in**: Token lifetime in seconds
    - **operator**: Account information (without password)

    **Errors:**
    - **401**: Invalid credentials or inactive account
    """
    operator = authenticate_operator(db, credentials.username, credentials.password)
    if operator is None:
        logger.info("Failed login for '%s'", credentials.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Usuario o contraseña incorrectos",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not operator.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Operator account is deactivated",
        )

    access_token = create_operator_token(str(operator.id), operator.username, operator.role)

    return TokenResponse(
        access_token=access_token,
        token_type="bearer",
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        operator=OperatorRead.model_validate(operator)
    )


@router.post("/bootstrap", response_model=OperatorRead, summary="Bootstrap First Admin (Public)")
async def bootstrap_admin(
    operator_create: OperatorCreate,
    db: Session = Depends(get_sync_db)
):
    """
    Create the first account, always with admin access.

    Only works while no operator account exists.

    **Errors:**
    - **403**: Accounts already exist
    """
    if count_operators(db) > 0:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Bootstrap not allowed - operator accounts already exist."
        )

    data = operator_create.model_copy(update={"is_admin": True, "is_active": True})
    operator = create_operator(db, data)
    return OperatorRead.model_validate(operator)


@router.post("/register", response_model=OperatorRead, status_code=status.HTTP_201_CREATED,
             summary="Register Operator Account")
async def register_operator(
    operator_create: OperatorCreate,
    db: Session = Depends(get_sync_db),
    current_admin: Operator = RequireAdmin
):
    """
    Create an operator account (admin-only).

    **Errors:**
    - **403**: Caller is not an admin
    - **409**: Username already exists
    """
    operator = create_operator(db, operator_create)
    logger.info("Operator '%s' created by '%s'", operator.username, current_admin.username)
    return OperatorRead.model_validate(operator)


@router.get("/me", response_model=OperatorRead, summary="Get Current Operator")
async def get_me(current_operator: Operator = RequireOperator):
    """Return the authenticated account."""
    return OperatorRead.model_validate(current_operator)
