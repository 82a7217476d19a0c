# tests/test_profile_service.py

from __future__ import annotations

import pytest

from app.errors import InvalidInputError
from app.services.profile import build_picture_key, validate_profile_picture

MB = 1024 * 1024


def _profile_row(db, user_id: str, **fields) -> None:
    row = {"id": user_id, "name": "", "profile_picture_url": None, "created_at": db.next_timestamp()}
    row.update(fields)
    db.tables.setdefault("user_profiles", []).append(row)


def test_validate_rejects_non_images() -> None:
    with pytest.raises(InvalidInputError, match="Please select an image file"):
        validate_profile_picture("application/pdf", 1024)
    with pytest.raises(InvalidInputError):
        validate_profile_picture(None, 1024)


def test_validate_size_limit_is_inclusive() -> None:
    validate_profile_picture("image/png", 5 * MB)
    with pytest.raises(InvalidInputError, match="less than 5MB"):
        validate_profile_picture("image/png", 5 * MB + 1)


def test_picture_key_keeps_extension() -> None:
    assert build_picture_key("u1", "me.PNG", now_ms=1700000000000) == "u1-1700000000000.png"
    assert build_picture_key("u1", "noext", now_ms=1) == "u1-1.png"


@pytest.mark.asyncio
async def test_ensure_profile_creates_blank_profile_once(db, profile_service) -> None:
    created = await profile_service.ensure_profile("u1")
    again = await profile_service.ensure_profile("u1")

    assert created.id == "u1"
    assert created.has_name is False
    assert again.id == created.id
    assert len(db.tables["user_profiles"]) == 1


@pytest.mark.asyncio
async def test_update_name_rejects_blank(db, profile_service) -> None:
    _profile_row(db, "u1")
    db.calls.clear()

    with pytest.raises(InvalidInputError):
        await profile_service.update_name("u1", "   ")
    assert db.calls == []

    profile = await profile_service.update_name("u1", "  Ada ")
    assert profile.name == "Ada"


@pytest.mark.asyncio
async def test_oversized_upload_makes_no_network_call(db, profile_service) -> None:
    _profile_row(db, "u1")
    db.calls.clear()

    with pytest.raises(InvalidInputError, match="less than 5MB"):
        await profile_service.upload_profile_picture("u1", "big.png", b"x" * (6 * MB), "image/png")

    assert db.calls == []


@pytest.mark.asyncio
async def test_upload_replaces_previous_picture(db, profile_service) -> None:
    old_url = "https://fake.supabase.co/storage/v1/object/public/profile-pictures/u1-1.png"
    _profile_row(db, "u1", profile_picture_url=old_url)

    url = await profile_service.upload_profile_picture(
        "u1", "me.png", b"p" * (2 * MB), "image/png", current_url=old_url
    )

    assert db.storage.removed == ["u1-1.png"]
    stored = db.storage.objects["profile-pictures"]
    assert len(stored) == 1
    new_key = next(iter(stored))
    assert new_key.startswith("u1-") and new_key.endswith(".png")
    assert url.endswith(new_key)
    assert db.tables["user_profiles"][0]["profile_picture_url"] == url
    assert db.storage.upload_options[0]["upsert"] == "false"


@pytest.mark.asyncio
async def test_failed_removal_of_old_picture_is_ignored(db, profile_service) -> None:
    _profile_row(db, "u1", profile_picture_url="https://x/profile-pictures/old.jpg")
    db.storage.fail_remove = True

    url = await profile_service.upload_profile_picture(
        "u1", "new.jpg", b"j" * 1024, "image/jpeg", current_url="https://x/profile-pictures/old.jpg"
    )

    assert db.storage.removed == ["old.jpg"]
    assert db.tables["user_profiles"][0]["profile_picture_url"] == url


@pytest.mark.asyncio
async def test_upload_for_missing_profile_creates_it_first(db, profile_service) -> None:
    url = await profile_service.upload_profile_picture("u1", "me.png", b"p" * 1024, "image/png")

    assert db.tables["user_profiles"][0]["id"] == "u1"
    assert db.tables["user_profiles"][0]["profile_picture_url"] == url
    assert db.calls.index(("user_profiles", "insert")) < db.calls.index(("storage", "upload"))
