"""Error Hierarchy — codes, HTTP statuses and the REST envelope.

Tests:
    - Each fault carries its stable code and HTTP status
    - InvalidArgumentError is a ValueError, InvalidStateError a RuntimeError
    - to_response() exposes code/message/category but no debug_info
"""

from libraryhub.core.errors import (
    DatabaseError, ErrorCategory, ErrorContext, ErrorSeverity,
    InvalidArgumentError, InvalidStateError, LibraryError, ResourceNotFoundError,
)


def test_invalid_argument_error():
    err = InvalidArgumentError("Name cannot be empty.", "name")
    assert isinstance(err, ValueError)
    assert isinstance(err, LibraryError)
    assert err.code == "INVALID_ARGUMENT"
    assert err.http_status == 400
    assert err.argument == "name"
    assert err.category == ErrorCategory.VALIDATION


def test_invalid_state_error():
    err = InvalidStateError("Loan is already returned.")
    assert isinstance(err, RuntimeError)
    assert err.code == "INVALID_STATE"
    assert err.http_status == 409


def test_resource_not_found_message():
    err = ResourceNotFoundError("Book", "abc")
    assert err.http_status == 404
    assert err.message == "Book 'abc' not found"


def test_database_error_is_critical():
    err = DatabaseError("IntegrityError", "insert loan")
    assert err.code == "DATABASE_ERROR"
    assert err.severity == ErrorSeverity.CRITICAL
    assert err.http_status == 503
    assert err.operation == "insert loan"
    assert "insert loan" in err.message


def test_to_response_envelope():
    ctx = ErrorContext(user_id="u1", debug_info={"secret": "x"})
    body = InvalidStateError("nope", context=ctx).to_response()
    assert body["error"]["code"] == "INVALID_STATE"
    assert body["error"]["message"] == "nope"
    assert body["error"]["category"] == "business_rule"
    assert body["error"]["context"]["user_id"] == "u1"
    assert "secret" not in str(body)
