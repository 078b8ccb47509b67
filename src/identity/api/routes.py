"""FastAPI endpoints for the Identity domain."""

from typing import Annotated

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from identity.api.dependencies import (
    AdminUser,
    CurrentUser,
    ensure_owner_or_admin,
    get_token_service,
)
from identity.api.schemas import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterUserRequest,
    UserResponse,
)
from identity.auth.blacklist import TokenBlacklist, get_token_blacklist
from identity.auth.login import Login, login, logout
from identity.auth.passwords import hash_password
from identity.auth.tokens import TokenService
from identity.user.management import DeleteUser, PromoteToAdmin
from identity.user.registration import RegisterUser
from identity.user.user import User
from shared.api import ResourceId

auth_router = APIRouter(prefix="/api/auth", tags=["auth"])
user_router = APIRouter(prefix="/api/users", tags=["users"])
setup_router = APIRouter(prefix="/api/setup", tags=["setup"])


def _user_response(user: User) -> UserResponse:
    return UserResponse(
        id=str(user.id),
        name=user.name,
        email=user.email,
        role=user.role,
        created_at=user.created_at,
    )


# --- Auth endpoints ---


@auth_router.post("/login", response_model=LoginResponse)
async def login_user(
    body: LoginRequest,
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> LoginResponse:
    token, user = login(Login(email=body.email, password=body.password), tokens)
    return LoginResponse(
        token=token,
        expires_in=tokens.settings.jwt_expiry_minutes * 60,
        user=_user_response(user),
    )


@auth_router.post("/logout", response_model=MessageResponse)
async def logout_user(
    claims: CurrentUser,
    blacklist: Annotated[TokenBlacklist, Depends(get_token_blacklist)],
) -> MessageResponse:
    logout(claims, blacklist)
    return MessageResponse(message="Logged out successfully")


# --- User endpoints ---


@user_router.post("/register", status_code=201, response_model=UserResponse)
async def register(body: RegisterUserRequest) -> UserResponse:
    command = RegisterUser(
        name=body.name,
        email=body.email,
        password_hash=hash_password(body.password),
    )
    user_id = current_domain.process(command, asynchronous=False)
    return _user_response(current_domain.repository_for(User).get_user(user_id))


@user_router.get("/email/{email}", response_model=UserResponse)
async def get_user_by_email(email: str, claims: CurrentUser) -> UserResponse:
    repo = current_domain.repository_for(User)
    user = repo.find_by_email(email)
    # Non-admins get 403 for any address but their own, registered or not
    ensure_owner_or_admin(claims, user.id if user else None)
    if user is None:
        user = repo.get_by_email(email)
    return _user_response(user)


@user_router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: ResourceId, claims: CurrentUser) -> UserResponse:
    ensure_owner_or_admin(claims, user_id)
    return _user_response(current_domain.repository_for(User).get_user(user_id))


@user_router.delete("/{user_id}", response_model=MessageResponse)
async def remove_user(user_id: ResourceId, claims: CurrentUser) -> MessageResponse:
    ensure_owner_or_admin(claims, user_id)
    current_domain.process(DeleteUser(user_id=user_id), asynchronous=False)
    return MessageResponse(message=f"User {user_id} deleted")


# --- Setup endpoints ---


@setup_router.post("/{email}", response_model=UserResponse)
async def promote_user(email: str, claims: AdminUser) -> UserResponse:
    user_id = current_domain.process(PromoteToAdmin(email=email), asynchronous=False)
    return _user_response(current_domain.repository_for(User).get_user(user_id))
