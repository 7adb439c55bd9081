"""Flash notices and Identity: small value objects used by every mutating route."""

from uuid import uuid4

import pytest

from app.core.domain_types import FlashLevel, ProfileId, UserId
from app.core.flash import flash, with_flash
from app.core.identity import Identity


def test_flash_shape():
    assert flash(FlashLevel.SUCCESS, "Done") == {"level": "success", "message": "Done"}


def test_with_flash_does_not_mutate_payload():
    payload = {"id": 1}
    result = with_flash(payload, FlashLevel.INFO, "Heads up")
    assert result == {"id": 1, "flash": {"level": "info", "message": "Heads up"}}
    assert "flash" not in payload


def test_identity_owns_only_its_profile():
    profile_id = uuid4()
    identity = Identity(UserId(uuid4()), ProfileId(profile_id), "ada")
    assert identity.owns(profile_id)
    assert not identity.owns(uuid4())


def test_identity_is_immutable():
    identity = Identity(UserId(uuid4()), ProfileId(uuid4()), "ada")
    with pytest.raises(AttributeError):
        identity.username = "eve"
