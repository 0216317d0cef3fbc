"""GroChain REST API client: transport, auth header and envelope handling"""

import logging
import time
from typing import Any, Dict, Optional

import httpx

from grochain_portal.config import settings
from grochain_portal.domain.exceptions import ApiResponseError, ApiTransportError
from grochain_portal.domain.models import ApiEnvelope
from grochain_portal.infrastructure.observability.logging import log_api_call
from grochain_portal.infrastructure.observability.metrics import record_api_call

logger = logging.getLogger(__name__)

_ENVELOPE_KEYS = ("success", "status", "message", "error")


def parse_envelope(body: Any, http_ok: bool = True) -> ApiEnvelope:
    """
    Normalise a response body into an ApiEnvelope.

    The backend answers either `{"success": bool, "data", "error"}` or
    `{"status": "success" | "error", "data", "message"}`. Bodies with neither
    key are treated as bare data. Envelopes without a `data` key carry their
    payload beside the status fields (`{"status": "success", "harvest": ...}`);
    those remaining keys become the data.
    """
    if not isinstance(body, dict):
        return ApiEnvelope(success=http_ok, data=body)

    if "success" in body:
        success = bool(body["success"])
    elif "status" in body and isinstance(body["status"], str):
        success = body["status"] == "success"
    else:
        return ApiEnvelope(success=http_ok, data=body, error=body.get("error") or body.get("message"))

    if "data" in body:
        data = body["data"]
    else:
        data = {k: v for k, v in body.items() if k not in _ENVELOPE_KEYS} or None

    return ApiEnvelope(
        success=success,
        data=data,
        error=body.get("error") or body.get("message"),
    )


class GroChainClient:
    """Async client for the GroChain backend"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout or settings.http_timeout_seconds
        self.token = token
        self.transport = transport

    def set_token(self, token: str) -> None:
        self.token = token

    def clear_token(self) -> None:
        self.token = None

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def request(
        self,
        method: str,
        path: str,
        *,
        name: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Call the backend and return the envelope's `data`.

        Raises:
            ApiTransportError: On timeout or connection failure
            ApiResponseError: On HTTP error status or `success == false`
        """
        if params:
            params = {k: v for k, v in params.items() if v is not None and v != ""}

        start = time.perf_counter()
        outcome = "ok"
        status_code = None

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.request(
                    method,
                    f"{self.base_url}{path}",
                    params=params,
                    json=json,
                    headers=self._headers(),
                )
            status_code = response.status_code

            try:
                body = response.json()
            except ValueError:
                body = {"message": response.text} if response.text else {}

            if response.is_error:
                outcome = "http_error"
                raise ApiResponseError(self._error_message(response, body, path), status_code)

            envelope = parse_envelope(body, http_ok=True)
            if not envelope.success:
                outcome = "logical_error"
                raise ApiResponseError(envelope.error or "Request failed", status_code)

            return envelope.data

        except httpx.TimeoutException as e:
            outcome = "transport_error"
            raise ApiTransportError(f"GroChain API timeout after {self.timeout}s") from e
        except httpx.RequestError as e:
            outcome = "transport_error"
            raise ApiTransportError(
                f"Network error: Unable to connect to {self.base_url}. "
                "Please ensure the backend server is running."
            ) from e
        finally:
            elapsed = time.perf_counter() - start
            record_api_call(name, outcome, elapsed)
            log_api_call(method, path, outcome, elapsed * 1000, status_code)

    @staticmethod
    def _error_message(response: httpx.Response, body: Any, path: str) -> str:
        message = None
        if isinstance(body, dict):
            message = body.get("message") or body.get("error")

        if response.status_code == 404 and not message:
            return f"Endpoint not found: {path}"

        message = message or f"HTTP {response.status_code}: {response.reason_phrase}"
        if response.status_code >= 500:
            return f"Server error: {message}"
        return message

    async def get(self, path: str, *, name: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("GET", path, name=name, params=params)

    async def post(self, path: str, *, name: str, json: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("POST", path, name=name, json=json or {})

    async def put(self, path: str, *, name: str, json: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("PUT", path, name=name, json=json or {})
