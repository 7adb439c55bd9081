"""Error hierarchy: status codes and the REST envelope."""

from app.core.errors import (
    AuthenticationError, ConflictError, DatabaseError, DevSearchError,
    ErrorCategory, PermissionDeniedError, ResourceNotFoundError,
    TagPersistenceError, ValidationError,
)


def test_http_status_per_error_type():
    assert ValidationError("bad", "title").http_status == 400
    assert AuthenticationError().http_status == 401
    assert PermissionDeniedError("edit", "Project").http_status == 403
    assert ResourceNotFoundError("Project", "x").http_status == 404
    assert ConflictError("dup").http_status == 409
    assert DatabaseError("down", "execute").http_status == 503
    assert TagPersistenceError("down").http_status == 503


def test_all_errors_share_base():
    assert isinstance(TagPersistenceError("x"), DevSearchError)


def test_permission_message_names_action_and_resource():
    err = PermissionDeniedError("delete", "Project")
    assert err.message == "You don't have permission to delete this project"


def test_not_found_response_carries_resource_id():
    body = ResourceNotFoundError("Skill", "abc").to_response()
    assert body["error"]["code"] == "RESOURCE_NOT_FOUND"
    assert body["error"]["context"]["resource_id"] == "abc"
    assert body["error"]["category"] == "resource_not_found"


def test_tag_persistence_error_keeps_completed_names():
    err = TagPersistenceError("gone", completed=["a", "b"])
    assert err.completed == ["a", "b"]
    assert err.category is ErrorCategory.DATABASE
    assert TagPersistenceError("gone").completed == []
