"""API router for user registration, authentication and account removal."""

from fastapi import APIRouter, BackgroundTasks, Depends

from ....application.services.account_service import AccountService
from ....application.services.password_reset_service import PasswordResetService
from ....core.dependencies import get_account_service, get_email_service, get_password_reset_service
from ....domain.models import IdentityContext
from ....services.email_service import EmailService
from ..dependencies import require_identity
from ..schemas.user_schemas import (
    ForgotPasswordRequest,
    UserLoginRequest,
    UserRegisterRequest,
    UserUpdateRequest,
)

router = APIRouter(prefix="/regal/api/user", tags=["users"])


@router.post("/register")
def register(
    payload: UserRegisterRequest,
    account_service: AccountService = Depends(get_account_service),
) -> dict:
    user = account_service.register(
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        password=payload.password,
        phone=payload.phone,
        age=payload.age,
        address=payload.address,
    )
    return {"message": "User registered successfully", "user": user.to_public()}


@router.post("/login")
def login(
    payload: UserLoginRequest,
    account_service: AccountService = Depends(get_account_service),
) -> dict:
    user, token = account_service.login(payload.email, payload.password)
    return {"message": "Login successful", "user": user.to_public(), "token": token}


@router.post("/forgot-password")
def forgot_password(
    payload: ForgotPasswordRequest,
    background_tasks: BackgroundTasks,
    reset_service: PasswordResetService = Depends(get_password_reset_service),
    email_service: EmailService = Depends(get_email_service),
) -> dict:
    """Store a new reset code and mail it after the response is sent."""
    user, code = reset_service.request_reset(payload.email)
    background_tasks.add_task(
        email_service.send_password_reset,
        user.email,
        code,
        reset_service.window_minutes,
    )
    return {"message": "Password reset code sent"}


@router.get("/me")
def get_profile(
    identity: IdentityContext = Depends(require_identity),
    account_service: AccountService = Depends(get_account_service),
) -> dict:
    user = account_service.get_profile(identity)
    return {"message": "User retrieved successfully", "user": user.to_public()}


@router.put("/edit")
def edit_profile(
    payload: UserUpdateRequest,
    identity: IdentityContext = Depends(require_identity),
    account_service: AccountService = Depends(get_account_service),
) -> dict:
    user = account_service.update_profile(identity, payload.model_dump(exclude_unset=True, exclude_none=True))
    return {"message": "User updated successfully", "user": user.to_public()}


@router.delete("/delete-account")
def delete_account(
    identity: IdentityContext = Depends(require_identity),
    account_service: AccountService = Depends(get_account_service),
) -> dict:
    report = account_service.delete_account(identity)
    return {
        "message": "Account deleted successfully",
        "companies_deleted": report.companies_deleted,
        "products_deleted": report.products_deleted,
    }
