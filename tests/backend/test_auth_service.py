"""
Tests for the password authenticator and the session store.

These tests verify:
- Signup then login succeeds, duplicate signup fails
- Wrong passwords and unknown emails never authenticate
- Sessions resolve to their user until destroyed or expired
"""

from datetime import datetime, timedelta, timezone

import pytest


class TestRegister:
    """Tests for PasswordAuthenticator.register."""

    @pytest.mark.asyncio
    async def test_register_stores_hash_not_plaintext(self, authenticator, mock_auth_db):
        user_id = await authenticator.register("a@x.com", "p1")

        doc = await mock_auth_db.users.find_one({"email": "a@x.com"})
        assert str(doc["_id"]) == user_id
        assert doc["hashed_password"] != "p1"
        assert "password" not in doc

    @pytest.mark.asyncio
    async def test_register_duplicate_email_raises(self, authenticator):
        from instance_admin.core.errors import DuplicateEmail

        await authenticator.register("a@x.com", "p1")

        with pytest.raises(DuplicateEmail) as exc_info:
            await authenticator.register("a@x.com", "other")
        assert exc_info.value.message == "Email already exists"

    @pytest.mark.asyncio
    async def test_register_race_on_unique_index_raises_duplicate(self, authenticator):
        """A DuplicateKeyError from the unique index is reported as DuplicateEmail."""
        from unittest.mock import AsyncMock

        from pymongo.errors import DuplicateKeyError

        from instance_admin.core.errors import DuplicateEmail

        authenticator.users_collection = AsyncMock()
        authenticator.users_collection.find_one.return_value = None
        authenticator.users_collection.insert_one.side_effect = DuplicateKeyError("dup")

        with pytest.raises(DuplicateEmail):
            await authenticator.register("a@x.com", "p1")


class TestAuthenticate:
    """Tests for PasswordAuthenticator.authenticate."""

    @pytest.mark.asyncio
    async def test_authenticate_with_correct_password(self, authenticator):
        user_id = await authenticator.register("a@x.com", "p1")

        assert await authenticator.authenticate("a@x.com", "p1") == user_id

    @pytest.mark.asyncio
    async def test_authenticate_with_wrong_password_fails(self, authenticator):
        from instance_admin.core.errors import InvalidCredentials

        await authenticator.register("a@x.com", "p1")

        for wrong in ("wrong", "P1", "", "p1 "):
            with pytest.raises(InvalidCredentials):
                await authenticator.authenticate("a@x.com", wrong)

    @pytest.mark.asyncio
    async def test_authenticate_unknown_email_fails(self, authenticator):
        from instance_admin.core.errors import InvalidCredentials

        with pytest.raises(InvalidCredentials) as exc_info:
            await authenticator.authenticate("nobody@x.com", "p1")
        assert "email" in exc_info.value.message.lower()


class TestSessionBinding:
    """Tests for serialize/deserialize."""

    @pytest.mark.asyncio
    async def test_serialize_then_deserialize_returns_user(self, authenticator):
        user_id = await authenticator.register("a@x.com", "p1")

        user = await authenticator.deserialize(user_id)

        assert user.email == "a@x.com"
        assert authenticator.serialize(user) == user_id

    @pytest.mark.asyncio
    async def test_deserialize_missing_user_raises(self, authenticator):
        from instance_admin.core.errors import UserNotFound

        with pytest.raises(UserNotFound):
            await authenticator.deserialize("507f1f77bcf86cd799439011")

    @pytest.mark.asyncio
    async def test_deserialize_malformed_id_raises(self, authenticator):
        from instance_admin.core.errors import UserNotFound

        with pytest.raises(UserNotFound):
            await authenticator.deserialize("not-an-object-id")

    @pytest.mark.asyncio
    async def test_count_users(self, authenticator, other_user_data):
        assert await authenticator.count_users() == 0

        await authenticator.register("a@x.com", "p1")
        await authenticator.register(other_user_data["email"], other_user_data["password"])

        assert await authenticator.count_users() == 2


class TestSessionService:
    """Tests for server-side sessions."""

    @pytest.mark.asyncio
    async def test_created_session_resolves_to_user(self, session_service):
        token = await session_service.create("user-1")

        assert await session_service.resolve(token) == "user-1"

    @pytest.mark.asyncio
    async def test_destroyed_session_no_longer_resolves(self, session_service):
        from instance_admin.core.errors import InvalidSession

        token = await session_service.create("user-1")
        await session_service.destroy(token)

        with pytest.raises(InvalidSession):
            await session_service.resolve(token)

    @pytest.mark.asyncio
    async def test_garbage_token_is_invalid(self, session_service):
        from instance_admin.core.errors import InvalidSession

        with pytest.raises(InvalidSession):
            await session_service.resolve("garbage")

    @pytest.mark.asyncio
    async def test_expired_session_document_is_rejected_and_removed(
        self, session_service, mock_auth_db
    ):
        from instance_admin.core.errors import InvalidSession
        from instance_admin.core.security import decode_session_token

        token = await session_service.create("user-1")
        sid = decode_session_token(token)["sid"]
        await mock_auth_db.sessions.update_one(
            {"_id": sid},
            {"$set": {"expires_at": datetime.now(timezone.utc) - timedelta(minutes=1)}},
        )

        with pytest.raises(InvalidSession):
            await session_service.resolve(token)
        assert await mock_auth_db.sessions.find_one({"_id": sid}) is None

    @pytest.mark.asyncio
    async def test_destroy_ignores_unknown_token(self, session_service):
        await session_service.destroy("garbage")
