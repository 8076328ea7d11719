from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.orm import Session

from sinceonearth.core.auth import CurrentUser, create_access_token, get_current_user
from sinceonearth.core.db import get_db
from sinceonearth.core.errors import (
    ConflictError,
    InvalidCredentialsError,
    InvalidInviteCodeError,
    NotFoundError,
)
from sinceonearth.schemas.auth import (
    AuthResponse,
    LoginRequest,
    PasswordChangeRequest,
    ProfileIconRequest,
    ProfileSetupRequest,
    ProfileUpdateRequest,
    ProfileUpdateResponse,
    RegisterRequest,
    SessionUser,
    UserProfileOut,
)
from sinceonearth.services import users as users_service

router = APIRouter(prefix="/auth", tags=["auth"])


# ----------------------------
# REGISTER
# ----------------------------
@router.post("/register", status_code=201)
def register(
    payload: RegisterRequest,
    db: Session = Depends(get_db),
):
    try:
        user = users_service.register_user(
            db,
            name=payload.name,
            username=payload.username,
            email=payload.email,
            password=payload.password,
            country=payload.country,
            invite_code=payload.invite_code,
        )
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except InvalidInviteCodeError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not user.approved:
        return {
            "message": "Registration successful. Your account is pending admin approval.",
            "requiresApproval": True,
        }

    return AuthResponse(
        message="Registration successful",
        token=create_access_token(user),
        user=SessionUser.model_validate(user),
    )


# ----------------------------
# LOGIN
# ----------------------------
@router.post("/login")
def login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
):
    try:
        user = users_service.authenticate(db, payload.email, payload.password)
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=401, detail=str(e))

    if not user.approved:
        logger.info(f"Login blocked, pending approval | user={user.id}")
        return JSONResponse(
            status_code=403,
            content={
                "message": "Your account is pending admin approval. Please check back later.",
                "requiresApproval": True,
            },
        )

    logger.info(f"Login | user={user.id}")
    return AuthResponse(
        message="Login successful",
        token=create_access_token(user),
        user=SessionUser.model_validate(user),
    )


# ----------------------------
# CURRENT USER
# ----------------------------
@router.get("/user", response_model=UserProfileOut)
def current_user(
    me: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        return users_service.get_user(db, me.user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


# ----------------------------
# PROFILE
# ----------------------------
@router.patch("/profile", response_model=ProfileUpdateResponse)
def update_profile(
    payload: ProfileUpdateRequest,
    me: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        user = users_service.update_profile(
            db,
            me.user_id,
            name=payload.name,
            username=payload.username,
            email=payload.email,
            country=payload.country,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return {"message": "Profile updated successfully", "user": UserProfileOut.model_validate(user)}


@router.patch("/password")
def change_password(
    payload: PasswordChangeRequest,
    me: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        users_service.change_password(db, me.user_id, payload.current_password, payload.new_password)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=401, detail=str(e))

    return {"message": "Password changed successfully"}


@router.delete("/account")
def delete_account(
    me: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        users_service.delete_user(db, me.user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return {"message": "Account deleted successfully"}


@router.post("/profile-setup", response_model=ProfileUpdateResponse)
def profile_setup(
    payload: ProfileSetupRequest,
    me: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        user = users_service.complete_profile_setup(db, me.user_id, payload.profile_icon, payload.profile_color)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return {"message": "Profile setup completed successfully", "user": UserProfileOut.model_validate(user)}


@router.patch("/profile-icon", response_model=ProfileUpdateResponse)
def profile_icon(
    payload: ProfileIconRequest,
    me: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        user = users_service.update_profile_icon(db, me.user_id, payload.profile_icon)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return {"message": "Profile icon updated successfully", "user": UserProfileOut.model_validate(user)}
