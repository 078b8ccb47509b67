"""Pydantic request/response schemas for the Identity API."""

from datetime import datetime

from pydantic import BaseModel, Field

# --- Request Schemas ---


class LoginRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "email": "jane.doe@example.com",
                    "password": "s3cret-Passw0rd",
                }
            ]
        }
    }

    email: str = Field(..., min_length=1, max_length=254)
    password: str = Field(..., min_length=1)


class RegisterUserRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Jane Doe",
                    "email": "jane.doe@example.com",
                    "password": "s3cret-Passw0rd",
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=1, max_length=254)
    password: str = Field(..., min_length=1, max_length=72)


# --- Response Schemas ---


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    role: str
    created_at: datetime


class LoginResponse(BaseModel):
    token: str
    token_type: str = "Bearer"
    expires_in: int
    user: UserResponse


class MessageResponse(BaseModel):
    message: str
