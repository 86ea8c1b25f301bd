from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from grooming_admin.application.errors import InfrastructureError, PersistenceError

logger = logging.getLogger(__name__)


class RemoteFunctionsClient:
    """Calls hosted remote functions by name (POST {base_url}/{name})."""

    def __init__(
        self,
        *,
        base_url: str | None,
        api_key: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/") if base_url else None
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    @property
    def configured(self) -> bool:
        return self.base_url is not None

    async def invoke(self, function_name: str, payload: Mapping[str, Any]) -> Any:
        if not self.base_url:
            raise InfrastructureError("Remote functions are not configured")
        url = f"{self.base_url}/{function_name}"
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(url, json=dict(payload), headers=headers)
        except httpx.HTTPError as exc:
            logger.error("Remote function %s HTTP error: %s", function_name, exc)
            raise PersistenceError(
                f"Remote function {function_name} failed", details={"reason": str(exc)}
            ) from exc

        if response.status_code >= 400:
            logger.error(
                "Remote function %s error %s: %s",
                function_name,
                response.status_code,
                response.text,
            )
            raise PersistenceError(
                f"Remote function {function_name} failed",
                details={"status_code": response.status_code, "body": response.text},
            )

        logger.debug("Remote function %s ok: %s", function_name, response.status_code)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text
