import logging
import re
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from .config import settings
from .languages import DEFAULT_LANGUAGE

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
TOKEN_TTL = timedelta(days=7)

# Login is OTP based; delivery is mocked until an SMS provider is wired in.
MOCK_OTP = "123456"

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/verify-otp")


def normalize_phone(phone: str) -> str:
    """Strip spaces, dashes and a leading +91 so one farmer maps to one number."""
    digits = re.sub(r"[\s\-()]", "", phone or "")
    if digits.startswith("+91"):
        digits = digits[3:]
    if not re.fullmatch(r"\d{10}", digits):
        raise ValueError("Phone number must have 10 digits.")
    return digits


def create_access_token(claims: dict, ttl: timedelta = TOKEN_TTL) -> str:
    issued_at = datetime.now(timezone.utc)
    payload = {**claims, "iat": issued_at, "exp": issued_at + ttl}
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=ALGORITHM)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def verify_jwt(token: str = Depends(oauth2_scheme)) -> dict:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except jwt.PyJWTError as e:
        logger.debug("Rejected access token: %s", e)
        raise _unauthorized("Could not validate credentials")
    if not payload.get("sub"):
        raise _unauthorized("Could not validate credentials")
    return payload


async def get_current_farmer_id(user_payload: dict = Depends(verify_jwt)) -> str:
    return user_payload["sub"]


async def get_current_language(user_payload: dict = Depends(verify_jwt)) -> str:
    """Language the farmer picked at signup, carried in the token."""
    return user_payload.get("language") or DEFAULT_LANGUAGE


async def get_otp(phone: str) -> str:
    """Mock function to generate and send an OTP."""
    logger.info("Sending OTP to %s", phone)
    return MOCK_OTP


async def validate_otp(phone: str, otp: str) -> bool:
    """Mock function to validate the provided OTP."""
    logger.info("Validating OTP for %s", phone)
    return otp == MOCK_OTP
