"""
Global pytest configuration and fixtures for the task authorization test suite.
"""

import os
from pathlib import Path
from typing import Callable, Dict, Generator

import jwt
import pytest

# Settings are read at import time, so the environment must be set first
os.environ["JWT_SECRET"] = "test-secret-key-for-testing-only-32-chars"
os.environ["AUDIT_BACKEND"] = "file"

from fastapi.testclient import TestClient  # noqa: E402

from taskauthz.domains.audit.dependencies import get_audit_service  # noqa: E402
from taskauthz.domains.audit.service import AuditService  # noqa: E402
from taskauthz.domains.audit.storage import FileAuditTrail  # noqa: E402
from taskauthz.domains.auth.dependencies import get_user_lookup  # noqa: E402
from taskauthz.domains.organizations.dependencies import (  # noqa: E402
    get_organization_lookup,
)
from taskauthz.main import app  # noqa: E402

# Import fixtures from fixture modules
from tests.fixtures.audit_fixtures import *  # noqa: F403, F401, E402
from tests.fixtures.auth_fixtures import *  # noqa: F403, F401, E402
from tests.fixtures.organization_fixtures import *  # noqa: F403, F401, E402
from tests.fixtures.auth_fixtures import InMemoryUserLookup  # noqa: E402
from tests.fixtures.organization_fixtures import (  # noqa: E402
    InMemoryOrganizationLookup,
)


@pytest.fixture
def test_jwt_secret() -> str:
    """JWT secret for generating test tokens."""
    return "test-secret-key-for-testing-only-32-chars"


@pytest.fixture
def make_token(test_jwt_secret: str) -> Callable[..., str]:
    """Factory for signed bearer tokens."""

    def _make_token(sub: str, role: str, org_id: int, **extra: object) -> str:
        payload = {"sub": sub, "role": role, "orgId": org_id, **extra}
        return jwt.encode(payload, test_jwt_secret, algorithm="HS256")

    return _make_token


@pytest.fixture
def auth_headers(make_token: Callable[..., str]) -> Callable[..., Dict[str, str]]:
    """Factory for Authorization headers."""

    def _auth_headers(sub: str, role: str, org_id: int) -> Dict[str, str]:
        return {"Authorization": f"Bearer {make_token(sub, role, org_id)}"}

    return _auth_headers


@pytest.fixture
def audit_log_path(tmp_path: Path) -> Path:
    return tmp_path / "audit" / "audit.log"


@pytest.fixture
def file_audit_trail(audit_log_path: Path) -> FileAuditTrail:
    return FileAuditTrail(audit_log_path)


@pytest.fixture
def audit_service(file_audit_trail: FileAuditTrail) -> AuditService:
    return AuditService(file_audit_trail)


@pytest.fixture
def client(
    org_lookup: InMemoryOrganizationLookup,
    user_lookup: InMemoryUserLookup,
    audit_service: AuditService,
) -> Generator[TestClient, None, None]:
    """FastAPI test client wired to in-memory users, organizations and a temp audit log."""
    app.dependency_overrides[get_organization_lookup] = lambda: org_lookup
    app.dependency_overrides[get_user_lookup] = lambda: user_lookup
    app.dependency_overrides[get_audit_service] = lambda: audit_service
    yield TestClient(app)
    app.dependency_overrides.clear()
