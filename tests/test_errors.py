import pytest
from fastapi import HTTPException
from postgrest.exceptions import APIError

from proconnect.core.errors import error_message, error_status, service_error


@pytest.mark.parametrize("code, expected", [
    ("PGRST116", 404),
    ("23505", 409),
    ("42501", 403),
    ("XX000", 500),
])
def test_postgrest_codes(code, expected):
    assert error_status(APIError({"message": "x", "code": code})) == expected


def test_storage_payload_keeps_status_and_message():
    exc = Exception({"statusCode": "403", "error": "Unauthorized", "message": "new row violates row-level security policy"})
    assert error_status(exc) == 403
    assert error_message(exc, "fallback") == "new row violates row-level security policy"


def test_plain_errors_fall_back():
    assert error_status(RuntimeError("boom"), default=502) == 502
    assert error_message(RuntimeError(), "Failed to load posts") == "Failed to load posts"


def test_service_error_passes_http_exceptions_through():
    original = HTTPException(status_code=413, detail="Image is too large")
    assert service_error(original, "Failed to upload image") is original


def test_service_error_uses_external_message():
    err = service_error(APIError({"message": "duplicate key value", "code": "23505"}), "Failed to update like")
    assert err.status_code == 409
    assert err.detail == "duplicate key value"
