"""API tests for POST /api/v1/users (registration).

Architecture:
- Real app with the handler factory overridden by a stub
- Verifies status codes, response bodies and RFC 7807 error format
"""

from uuid import uuid4

import pytest

from src.application.commands.handlers.register_user_handler import RegisteredUser
from src.core.container import get_register_user_handler
from src.core.enums import ErrorCode
from src.core.errors import ConflictError, ValidationError
from src.core.result import Failure, Success
from src.domain.enums import UserStatus
from src.main import app

USER_ID = uuid4()

VALID_BODY = {
    "email": "ada@example.com",
    "username": "ada_l",
    "password": "Sn3aky!23",
}


class StubRegisterUserHandler:
    def __init__(self, result):
        self.result = result
        self.commands = []

    async def handle(self, cmd):
        self.commands.append(cmd)
        return self.result


def use_handler(result) -> StubRegisterUserHandler:
    stub = StubRegisterUserHandler(result)
    app.dependency_overrides[get_register_user_handler] = lambda: stub
    return stub


@pytest.mark.api
class TestCreateUser:
    def test_create_user_success(self, client):
        stub = use_handler(
            Success(
                value=RegisteredUser(
                    id=USER_ID,
                    email="ada@example.com",
                    username="ada_l",
                    status=UserStatus.PENDING_VERIFICATION,
                )
            )
        )

        response = client.post("/api/v1/users", json=VALID_BODY)

        assert response.status_code == 201
        body = response.json()
        assert body["id"] == str(USER_ID)
        assert body["status"] == "pending_verification"
        assert body["message"] == "User created successfully"
        assert "password" not in body
        assert stub.commands[0].display_name is None

    def test_duplicate_email_returns_409_problem(self, client):
        use_handler(
            Failure(
                error=ConflictError(
                    code=ErrorCode.EMAIL_ALREADY_EXISTS,
                    message="Email already registered",
                    resource_type="User",
                    conflicting_field="email",
                )
            )
        )

        response = client.post("/api/v1/users", json=VALID_BODY)

        assert response.status_code == 409
        body = response.json()
        assert body["title"] == "Resource Conflict"
        assert body["detail"] == "Email already registered"
        assert body["instance"] == "/api/v1/users"
        assert body["type"].endswith("/errors/email_already_exists")
        assert body["trace_id"] == response.headers["X-Trace-Id"]

    def test_weak_password_returns_400_with_field_error(self, client):
        use_handler(
            Failure(
                error=ValidationError(
                    code=ErrorCode.PASSWORD_TOO_WEAK,
                    message="Add uppercase letters",
                    field="password",
                    details={"score": "2"},
                )
            )
        )

        response = client.post("/api/v1/users", json=VALID_BODY)

        assert response.status_code == 400
        body = response.json()
        assert body["errors"] == [
            {
                "field": "password",
                "code": "password_too_weak",
                "message": "Add uppercase letters",
            }
        ]
        assert "score" not in response.text

    @pytest.mark.parametrize(
        "override",
        [
            {"email": "not-an-email"},
            {"password": "short"},
            {"username": ""},
        ],
    )
    def test_invalid_body_returns_422(self, client, override):
        stub = use_handler(Success(value=None))

        response = client.post("/api/v1/users", json={**VALID_BODY, **override})

        assert response.status_code == 422
        body = response.json()
        assert body["title"] == "Validation Failed"
        assert body["errors"][0]["field"] in override
        assert stub.commands == []
