"""Pydantic schemas for user API endpoints."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, EmailStr, Field


class UserRegisterRequest(BaseModel):
    """Request schema for user registration."""

    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)
    phone: List[Dict[str, Any]] = Field(default_factory=list)
    age: Optional[int] = Field(default=None, ge=0)
    address: List[Dict[str, Any]] = Field(default_factory=list)


class UserLoginRequest(BaseModel):
    """Request schema for user login."""

    email: str
    password: str


class ForgotPasswordRequest(BaseModel):
    """Request schema to start a password reset."""

    email: EmailStr


class UserUpdateRequest(BaseModel):
    """Request schema for profile edits; only supplied fields change."""

    first_name: Optional[str] = Field(default=None, min_length=1)
    last_name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=6)
    phone: Optional[List[Dict[str, Any]]] = None
    img_id: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=0)
    address: Optional[List[Dict[str, Any]]] = None
