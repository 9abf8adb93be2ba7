# src/vcf_tasks/api/client.py

"""
VCF (VMware Cloud Foundation) REST API client.

Only what task tracking needs:
- token authentication (POST /v1/tokens),
- task lookup (GET /v1/tasks/{id}).

Usage:
    async with VcfClient.from_settings(get_settings()) as client:
        task = await client.get_task("a1b2...", timeout=120.0)
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from ..errors import VcfApiError, VcfAuthError, VcfConnectionError
from ..tasks.task_models import Task

logger = logging.getLogger(__name__)

TOKENS_PATH = "/v1/tokens"
TASK_PATH = "/v1/tasks/{task_id}"


def _api_error(response: httpx.Response, cls: type[VcfApiError] = VcfApiError) -> VcfApiError:
    """Build an error from a VCF error body ({"errorCode": ..., "message": ...}) if present."""
    error_code: str | None = None
    message = response.reason_phrase or "request failed"
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        error_code = body.get("errorCode") or None
        message = body.get("message") or message
    return cls(response.status_code, message, error_code=error_code)


class VcfClient:
    """
    Async VCF API client implementing the TaskStatusProvider port.

    Logs in lazily on first use; a 401 triggers one fresh login and one repeat
    of the request (expired access token). No other retries happen here.
    """

    def __init__(
            self,
            base_url: str,
            username: str,
            password: str,
            *,
            verify: bool = True,
            timeout: float = 120.0,
            transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not base_url:
            raise ValueError("base_url is required")
        self._username = username
        self._password = password
        self._access_token: str | None = None
        self._http = httpx.AsyncClient(
            base_url=base_url,
            verify=verify,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @classmethod
    def from_settings(cls, settings: Any, **kwargs: Any) -> VcfClient:
        return cls(
            settings.base_url,
            settings.username,
            settings.password,
            verify=not settings.allow_unverified_tls,
            timeout=settings.api_timeout_seconds,
            **kwargs,
        )

    async def __aenter__(self) -> VcfClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    @property
    def is_authenticated(self) -> bool:
        return self._access_token is not None

    async def login(self) -> None:
        payload = {"username": self._username, "password": self._password}
        response = await self._send("POST", TOKENS_PATH, json=payload)
        if response.is_error:
            raise _api_error(response, VcfAuthError)

        try:
            token = response.json().get("accessToken")
        except (ValueError, AttributeError):
            token = None
        if not token:
            raise VcfAuthError(response.status_code, "token response carries no accessToken")
        self._access_token = token
        logger.debug("Obtained VCF access token for %s", self._username)

    async def get_task(self, task_id: str, *, timeout: float) -> Task:
        path = TASK_PATH.format(task_id=quote(task_id, safe=""))
        response = await self._authorized("GET", path, timeout=timeout)
        if response.is_error:
            raise _api_error(response)
        try:
            payload = response.json()
        except ValueError as e:
            raise VcfApiError(response.status_code, "task response is not valid JSON") from e
        if not isinstance(payload, dict):
            raise VcfApiError(response.status_code, "malformed task payload: expected a JSON object")
        try:
            return Task.from_api(payload)
        except (AttributeError, TypeError) as e:
            raise VcfApiError(response.status_code, f"malformed task payload: {e}") from e

    async def _authorized(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        if self._access_token is None:
            await self.login()

        response = await self._send(method, path, headers=self._auth_headers(), **kwargs)
        if response.status_code == httpx.codes.UNAUTHORIZED:
            logger.info("VCF access token rejected, logging in again")
            await self.login()
            response = await self._send(method, path, headers=self._auth_headers(), **kwargs)
        return response

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._access_token}"}

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._http.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            raise VcfConnectionError(f"{method} {path} timed out") from e
        except httpx.HTTPError as e:
            raise VcfConnectionError(f"{method} {path} failed: {e}") from e
