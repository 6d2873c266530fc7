from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch

import jwt
import pytest
from fastapi import HTTPException

from krishi_setu.core.config import settings
from krishi_setu.core.security import (
    ALGORITHM,
    MOCK_OTP,
    create_access_token,
    normalize_phone,
    verify_jwt,
)
from krishi_setu.models.user import User

ROUTES = "krishi_setu.api.rest_routes.auth"


@pytest.fixture
def user():
    return User(id="farmer-1", phone="9876543210", name="Gurpreet", language="pa")


class TestTokens:
    @pytest.mark.asyncio
    async def test_round_trip(self):
        token = create_access_token({"sub": "farmer-1", "language": "hi"})

        payload = await verify_jwt(token)

        assert payload["sub"] == "farmer-1"
        assert payload["language"] == "hi"

    @pytest.mark.asyncio
    async def test_expired_token(self):
        token = jwt.encode(
            {"sub": "farmer-1", "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
            settings.JWT_SECRET_KEY,
            algorithm=ALGORITHM,
        )

        with pytest.raises(HTTPException) as exc_info:
            await verify_jwt(token)

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Token has expired"

    @pytest.mark.asyncio
    async def test_token_without_subject(self):
        with pytest.raises(HTTPException) as exc_info:
            await verify_jwt(create_access_token({"language": "en"}))

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_garbage_token(self):
        with pytest.raises(HTTPException):
            await verify_jwt("not-a-token")


class TestSendOtp:
    def test_signup_creates_user(self, client):
        with patch(f"{ROUTES}.get_user_from_phone", new=AsyncMock(return_value=None)), patch(
            f"{ROUTES}.save_user", new=AsyncMock(side_effect=lambda user: user)
        ) as save:
            response = client.post(
                "/auth/send-otp", json={"phone": "9876543210", "name": "Asha", "language": "HI"}
            )

        assert response.status_code == 200
        assert response.json()["message"] == "User created. OTP sent successfully."
        assert save.await_args.args[0].language == "hi"

    def test_signup_requires_name_and_language(self, client):
        with patch(f"{ROUTES}.get_user_from_phone", new=AsyncMock(return_value=None)):
            response = client.post("/auth/send-otp", json={"phone": "9876543210"})

        assert response.status_code == 400

    def test_signup_with_unsupported_language(self, client):
        with patch(f"{ROUTES}.get_user_from_phone", new=AsyncMock(return_value=None)):
            response = client.post(
                "/auth/send-otp", json={"phone": "9876543210", "name": "Asha", "language": "fr"}
            )

        assert response.status_code == 422

    def test_signup_with_existing_phone(self, client, user):
        with patch(f"{ROUTES}.get_user_from_phone", new=AsyncMock(return_value=user)):
            response = client.post(
                "/auth/send-otp", json={"phone": user.phone, "name": "Asha", "language": "hi"}
            )

        assert response.status_code == 409

    def test_login(self, client, user):
        with patch(f"{ROUTES}.get_user_from_phone", new=AsyncMock(return_value=user)):
            response = client.post("/auth/send-otp", json={"phone": user.phone})

        assert response.json()["message"] == "OTP sent successfully."


class TestVerifyOtp:
    def test_valid_otp_returns_token(self, client, user):
        verified = user.model_copy(update={"is_verified": True})
        with patch(f"{ROUTES}.get_user_from_phone", new=AsyncMock(return_value=user)), patch(
            f"{ROUTES}.mark_user_verified", new=AsyncMock(return_value=verified)
        ) as mark:
            response = client.post("/auth/verify-otp", json={"phone": user.phone, "otp": MOCK_OTP})

        assert response.status_code == 200
        mark.assert_awaited_once_with("farmer-1")
        body = response.json()
        assert body["user"]["is_verified"] is True
        payload = jwt.decode(body["access_token"], settings.JWT_SECRET_KEY, algorithms=[ALGORITHM])
        assert payload["sub"] == "farmer-1"
        assert payload["role"] == "farmer"
        assert payload["language"] == "pa"

    def test_wrong_otp(self, client, user):
        with patch(f"{ROUTES}.get_user_from_phone", new=AsyncMock(return_value=user)):
            response = client.post("/auth/verify-otp", json={"phone": user.phone, "otp": "000000"})

        assert response.status_code == 401

    def test_unknown_phone(self, client):
        with patch(f"{ROUTES}.get_user_from_phone", new=AsyncMock(return_value=None)):
            response = client.post("/auth/verify-otp", json={"phone": "9000000000", "otp": MOCK_OTP})

        assert response.status_code == 404


class TestProfile:
    def test_update_profile_reissues_token(self, client, user):
        async def apply(farmer_id, update):
            return user.model_copy(update=update.model_dump(exclude_none=True))

        with patch(f"{ROUTES}.update_user_profile", new=AsyncMock(side_effect=apply)) as update:
            response = client.patch("/auth/user", json={"name": " Gurpreet Kaur ", "language": "en"})

        assert response.status_code == 200
        assert update.await_args.args[0] == "farmer-1"
        body = response.json()
        assert body["user"]["name"] == "Gurpreet Kaur"
        assert body["user"]["language"] == "en"
        payload = jwt.decode(body["access_token"], settings.JWT_SECRET_KEY, algorithms=[ALGORITHM])
        assert payload["language"] == "en"

    def test_update_profile_for_missing_user(self, client):
        with patch(f"{ROUTES}.update_user_profile", new=AsyncMock(return_value=None)):
            response = client.patch("/auth/user", json={"language": "hi"})

        assert response.status_code == 404

    def test_update_profile_rejects_bad_email(self, client):
        response = client.patch("/auth/user", json={"email": "not-an-email"})

        assert response.status_code == 422

    def test_delete_account_removes_owned_data(self, client):
        with patch(f"{ROUTES}.delete_farms_from_farmer_id", new=AsyncMock()) as farms, patch(
            f"{ROUTES}.delete_cultivation_guides_from_farmer_id", new=AsyncMock()
        ) as guides, patch(
            f"{ROUTES}.delete_transactions_from_farmer_id", new=AsyncMock()
        ) as transactions, patch(f"{ROUTES}.db_delete_user", new=AsyncMock(return_value=True)) as delete:
            response = client.delete("/auth/user")

        assert response.status_code == 204
        for mock in (farms, guides, transactions, delete):
            mock.assert_awaited_once_with("farmer-1")


class TestPhoneNumbers:
    @pytest.mark.parametrize("raw", ["9876543210", "+91 98765 43210", "98765-43210"])
    def test_normalize_phone(self, raw):
        assert normalize_phone(raw) == "9876543210"

    @pytest.mark.parametrize("raw", ["", "12345", "+1 555 123 4567", "98765abcde"])
    def test_invalid_phone(self, raw):
        with pytest.raises(ValueError):
            normalize_phone(raw)

    def test_send_otp_looks_up_normalized_number(self, client, user):
        with patch(f"{ROUTES}.get_user_from_phone", new=AsyncMock(return_value=user)) as lookup:
            response = client.post("/auth/send-otp", json={"phone": "+91 98765 43210"})

        assert response.json()["phone"] == "9876543210"
        lookup.assert_awaited_once_with("9876543210")

    def test_send_otp_with_invalid_number(self, client):
        assert client.post("/auth/send-otp", json={"phone": "12"}).status_code == 422
