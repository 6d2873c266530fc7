import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ValidationError, field_validator

from krishi_setu.collections.cultivation_guide import delete_cultivation_guides_from_farmer_id
from krishi_setu.collections.farm import delete_farms_from_farmer_id
from krishi_setu.collections.transaction import delete_transactions_from_farmer_id
from krishi_setu.collections.user import (
    delete_user as db_delete_user,
)
from krishi_setu.collections.user import (
    get_user_from_id,
    get_user_from_phone,
    mark_user_verified,
    save_user,
    update_user_profile,
)
from krishi_setu.core.security import (
    create_access_token,
    get_current_farmer_id,
    get_otp,
    normalize_phone,
    validate_otp,
)
from krishi_setu.models.user import ProfileUpdate, User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


class PhoneRequest(BaseModel):
    phone: str

    @field_validator("phone")
    @classmethod
    def _normalize_phone(cls, value: str) -> str:
        return normalize_phone(value)


class OTPSendRequest(PhoneRequest):
    name: Optional[str] = None
    language: Optional[str] = None


class OTPVerifyRequest(PhoneRequest):
    otp: str


class OTPStatusResponse(BaseModel):
    message: str
    phone: str
    is_new_user: bool = False


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: User


def _issue_token(user: User) -> Token:
    claims = {"sub": user.id, "role": user.role.value, "language": user.language}
    return Token(access_token=create_access_token(claims), user=user)


def _user_not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")


async def _register_farmer(request: OTPSendRequest) -> User:
    if not request.name or not request.language:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Name and language are required for new users.",
        )
    try:
        farmer = User(phone=request.phone, name=request.name, language=request.language)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.errors(include_url=False, include_context=False),
        )
    saved = await save_user(farmer)
    logger.info("Registered farmer %s", saved.id)
    return saved


@router.post("/send-otp", response_model=OTPStatusResponse)
async def send_otp(request: OTPSendRequest):
    """
    Signup and login share this endpoint. An unknown phone number registers a
    new farmer, which needs a name and a language; a known number just gets an OTP.
    """
    farmer = await get_user_from_phone(request.phone)
    if farmer and request.name and request.language:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User already exists.",
        )

    is_new_user = farmer is None
    if is_new_user:
        await _register_farmer(request)

    await get_otp(request.phone)
    return OTPStatusResponse(
        message="User created. OTP sent successfully." if is_new_user else "OTP sent successfully.",
        phone=request.phone,
        is_new_user=is_new_user,
    )


@router.post("/verify-otp", response_model=Token)
async def verify_otp(request: OTPVerifyRequest):
    farmer = await get_user_from_phone(request.phone)
    if not farmer:
        raise _user_not_found()
    if not await validate_otp(request.phone, request.otp):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid OTP")

    if not farmer.is_verified:
        farmer = await mark_user_verified(farmer.id) or farmer
    return _issue_token(farmer)


@router.get("/user", response_model=User)
async def get_current_user(farmer_id: str = Depends(get_current_farmer_id)):
    farmer = await get_user_from_id(farmer_id)
    if not farmer:
        raise _user_not_found()
    return farmer


@router.patch("/user", response_model=Token)
async def update_current_user(
    update: ProfileUpdate, farmer_id: str = Depends(get_current_farmer_id)
):
    """
    Profile page edits. The token carries the language, so a fresh one is issued.
    """
    farmer = await update_user_profile(farmer_id, update)
    if not farmer:
        raise _user_not_found()
    return _issue_token(farmer)


@router.delete("/user", status_code=status.HTTP_204_NO_CONTENT)
async def delete_current_user(farmer_id: str = Depends(get_current_farmer_id)):
    """
    Deletes the account together with the farmer's farms, guides and ledger.
    """
    await asyncio.gather(
        delete_farms_from_farmer_id(farmer_id),
        delete_cultivation_guides_from_farmer_id(farmer_id),
        delete_transactions_from_farmer_id(farmer_id),
    )
    await db_delete_user(farmer_id)
    logger.info("Deleted account %s and its data", farmer_id)
