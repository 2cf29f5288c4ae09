"""
Pytest configuration and fixtures.

The hosted backend is replaced by FakeSupabase, an in-memory store with the
same async interface as SupabaseAPI.
"""
import os
import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")

from app.shared.errors import ExternalServiceError  # noqa: E402

VALID_PHONE = "+447400123456"
OTHER_PHONE = "+447400123457"
ISSUED_CODE = "123456"


class FakeSupabase:
    def __init__(self):
        self.tables = {"users": []}
        self.issued = {}  # phone -> outstanding code
        self.sent = []
        self.calls = []
        self.failing = set()

    def _call(self, operation):
        self.calls.append(operation)
        if operation in self.failing:
            raise ExternalServiceError(operation, "forced failure")

    def rows(self, table="users"):
        return self.tables.setdefault(table, [])

    async def select_one(self, table, column, value, columns="id"):
        self._call("select")
        for row in self.rows(table):
            if row.get(column) == value:
                return {key: row[key] for key in columns.split(",")}
        return None

    async def insert(self, table, row):
        self._call("insert")
        rows = self.rows(table)
        rows.append({"id": len(rows) + 1, **row})

    async def update(self, table, column, value, changes):
        self._call("update")
        matched = [row for row in self.rows(table) if row.get(column) == value]
        if not matched:
            raise ExternalServiceError("update users", f"no row with {column} = {value}")
        for row in matched:
            row.update(changes)
        return [dict(row) for row in matched]

    async def send_otp(self, phone):
        self._call("send_otp")
        self.sent.append(phone)
        self.issued[phone] = ISSUED_CODE

    async def verify_otp(self, phone, token, otp_type="sms"):
        self._call("verify_otp")
        if otp_type != "sms" or self.issued.get(phone) != token:
            raise ExternalServiceError("verify otp", "HTTP 403: Token has expired or is invalid")
        del self.issued[phone]
        return {"access_token": "session-token", "token_type": "bearer"}

    async def close(self):
        pass


@pytest.fixture
def fake_supabase():
    return FakeSupabase()


@pytest.fixture
def client(fake_supabase):
    from main import app
    from app.domains.otp.otp_service import OTPService
    from app.domains.users.service import UserService

    with TestClient(app, raise_server_exceptions=False) as test_client:
        user_service = UserService(fake_supabase, table="users", bcrypt_rounds=4)
        app.state.user_service = user_service
        app.state.otp_service = OTPService(fake_supabase, user_service)
        yield test_client


@pytest.fixture
def registration():
    return {
        "fullName": "Jane Doe",
        "email": "jane.doe@gmail.com",
        "phone": VALID_PHONE,
        "password": "s3cret-pass",
        "anonymous": False,
        "isOfficer": False,
    }
