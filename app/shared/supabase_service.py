import httpx
import logging
from typing import Optional
from app.shared.errors import ExternalServiceError
from app.shared.phone import mask_phone

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINTS = {
    "rest": "/rest/v1/",
    "send_otp": "/auth/v1/otp",
    "verify_otp": "/auth/v1/verify",
}


class SupabaseAPI:
    def __init__(self, api_url: str, api_key: str, endpoints: dict = None, timeout: float = 10.0, transport=None):
        """
        Client for the hosted Supabase project: the PostgREST record store
        and the GoTrue phone OTP channel.

        Args:
            api_url (str): Project base URL, e.g. https://xyz.supabase.co
            api_key (str): Project access key, sent on every request.
            endpoints (dict): Path overrides, keys as in DEFAULT_ENDPOINTS.
            timeout (float): Per request timeout in seconds.
            transport: Optional httpx transport, used by tests.
        """
        self.api_url = api_url.rstrip("/")
        self.endpoints = {**DEFAULT_ENDPOINTS, **(endpoints or {})}
        self.client = httpx.AsyncClient(
            base_url=self.api_url,
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    async def close(self):
        await self.client.aclose()

    def _table_url(self, table: str) -> str:
        return f"{self.endpoints['rest']}{table}"

    async def _request(self, operation: str, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise ExternalServiceError(operation, f"{type(e).__name__}: {e}") from e

        if response.is_error:
            raise ExternalServiceError(operation, f"HTTP {response.status_code}: {self._error_detail(response)}")
        return response

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text
        if isinstance(body, dict):
            for key in ("msg", "message", "error_description", "error"):
                if body.get(key):
                    return str(body[key])
        return str(body)

    # Record store

    async def select_one(self, table: str, column: str, value: str, columns: str = "id") -> Optional[dict]:
        """Return the first row where column equals value, or None."""
        params = {"select": columns, column: f"eq.{value}", "limit": 1}
        response = await self._request(f"select {table}", "GET", self._table_url(table), params=params)
        rows = response.json()
        return rows[0] if rows else None

    async def insert(self, table: str, row: dict):
        await self._request(
            f"insert {table}",
            "POST",
            self._table_url(table),
            json=[row],
            headers={"Prefer": "return=minimal"},
        )

    async def update(self, table: str, column: str, value: str, changes: dict) -> list[dict]:
        """Update every row where column equals value; fails if none matched."""
        operation = f"update {table}"
        response = await self._request(
            operation,
            "PATCH",
            self._table_url(table),
            params={column: f"eq.{value}"},
            json=changes,
            headers={"Prefer": "return=representation"},
        )
        rows = response.json()
        if not rows:
            shown = mask_phone(value) if column == "phone" else value
            raise ExternalServiceError(operation, f"no row with {column} = {shown}")
        return rows

    # OTP channel

    async def send_otp(self, phone: str):
        logger.info(f"Requesting SMS OTP for {mask_phone(phone)}")
        await self._request(
            "send otp",
            "POST",
            self.endpoints["send_otp"],
            json={"phone": phone, "create_user": True, "channel": "sms"},
        )

    async def verify_otp(self, phone: str, token: str, otp_type: str = "sms") -> dict:
        response = await self._request(
            "verify otp",
            "POST",
            self.endpoints["verify_otp"],
            json={"phone": phone, "token": token, "type": otp_type},
        )
        return response.json()
