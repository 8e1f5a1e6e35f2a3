"""HTTP client for the timer API, used by the CLI commands."""

from __future__ import annotations

from typing import Any, Optional

import httpx

_DEFAULT_TIMEOUT = 5.0


class TimerApiError(Exception):
    """Raised when the API answers with an error or cannot be reached."""

    def __init__(self, message: str, code: Optional[str] = None, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.code = code
        self.status_code = status_code


class TimerClient:
    """Thin wrapper over the ``/api/timer`` endpoints.

    Every call returns the decoded ``TimerStateResponse`` JSON object.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = _DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._http = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def state(self) -> dict[str, Any]:
        return self._request("GET", "/api/timer")

    def start(self, duration_seconds: int) -> dict[str, Any]:
        return self._request("POST", "/api/timer/start", params={"durationSeconds": duration_seconds})

    def pause(self) -> dict[str, Any]:
        return self._request("POST", "/api/timer/pause")

    def resume(self) -> dict[str, Any]:
        return self._request("POST", "/api/timer/resume")

    def reset(self) -> dict[str, Any]:
        return self._request("POST", "/api/timer/reset")

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> TimerClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # -- private helpers -----------------------------------------------------

    def _request(self, method: str, path: str, params: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        try:
            response = self._http.request(method, path, params=params)
        except httpx.TransportError as exc:
            raise TimerApiError(f"Could not reach timer API at {self._http.base_url}: {exc}") from exc

        if response.is_error:
            code, message = None, f"HTTP {response.status_code}"
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict):
                code = body.get("code")
                message = body.get("details") or body.get("message") or message
            raise TimerApiError(message, code=code, status_code=response.status_code)

        return response.json()
