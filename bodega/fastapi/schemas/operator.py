"""
Operator schemas for request/response validation.

This module defines Pydantic models for authentication and for creating
operator accounts.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class OperatorBase(BaseModel):
    """Base operator schema with common fields."""

    username: str = Field(
        ...,
        min_length=3,
        max_length=50,
        description="Operator username (3-50 characters)",
        examples=["kiosko", "supervisor"]
    )


class OperatorCreate(OperatorBase):
    """Schema for creating a new operator account."""

    password: str = Field(
        ...,
        min_length=8,
        max_length=100,
        description="Password (minimum 8 characters)",
        examples=["SecurePassword123!"]
    )

    is_admin: bool = Field(
        default=False,
        description="Whether the account can open metrics and clear records"
    )

    is_active: bool = Field(
        default=True,
        description="Whether the account should be active"
    )


class OperatorRead(OperatorBase):
    """Schema for reading operator account information."""

    id: UUID = Field(..., description="Unique identifier for the operator")
    is_admin: bool = Field(..., description="Whether the account has admin access")
    is_active: bool = Field(..., description="Whether the account is active")
    created_at: datetime = Field(..., description="When the account was created")
    updated_at: datetime = Field(..., description="When the account was last updated")

    model_config = ConfigDict(from_attributes=True)


class OperatorLogin(BaseModel):
    """Schema for login requests."""

    username: str = Field(..., description="Operator username")
    password: str = Field(..., description="Operator password")


class TokenResponse(BaseModel):
    """Schema for a successful login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Token lifetime in seconds")
    operator: OperatorRead = Field(..., description="Authenticated account")
