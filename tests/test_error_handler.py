"""Tests for the exception handlers."""

import json

import pytest
from fastapi import Request
from sqlalchemy.exc import OperationalError

from telecare.middleware.error_handler import database_exception_handler


def _request(path: str = "/api/v1/doctors/available") -> Request:
    return Request(
        {
            "type": "http",
            "method": "GET",
            "scheme": "http",
            "server": ("testserver", 80),
            "root_path": "",
            "path": path,
            "query_string": b"",
            "headers": [],
        }
    )


@pytest.mark.asyncio
async def test_database_error_hides_driver_details() -> None:
    """Test that store failures become a generic 500."""
    exc = OperationalError("SELECT 1", {}, Exception("connection refused"))

    response = await database_exception_handler(_request(), exc)

    assert response.status_code == 500
    body = json.loads(response.body)
    assert body["message"] == "An unexpected error occurred"
    assert body["error"] == "DatabaseError"
    assert "connection refused" not in response.body.decode()
