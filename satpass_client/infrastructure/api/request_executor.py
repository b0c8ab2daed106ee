"""
Request executor for the satpass REST API.

Every endpoint call funnels through `RequestExecutor.execute`, which keeps the
observable `loading` / `error` state for the call and decodes the response
according to the format hint.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from urllib.parse import urlencode

import requests

from satpass_client.infrastructure.api.errors import (
    UNKNOWN_ERROR_MESSAGE,
    DecodeFailure,
    NetworkFailure,
    RequestFailed,
    SatpassApiError,
)
from satpass_client.utils.config import Config, resolve_config
from satpass_client.utils.logger import get_logger

logger = get_logger("api")


class ResponseFormat(str, Enum):
    JSON = "json"
    CSV = "csv"
    ICAL = "ical"

    @classmethod
    def parse(cls, value: ResponseFormat | str) -> ResponseFormat:
        """Accept an enum member or its string value; "ics" is an alias of "ical"."""
        if isinstance(value, cls):
            return value
        raw = str(value or "").strip().lower()
        if raw == "ics":
            return cls.ICAL
        try:
            return cls(raw)
        except ValueError:
            raise ValueError(f"Unsupported response format: {value!r}") from None

    @property
    def is_text(self) -> bool:
        return self is not ResponseFormat.JSON


@dataclass
class RequestState:
    loading: bool = False
    error: str | None = None


@dataclass(frozen=True)
class RequestDescriptor:
    """One HTTP call: method, path under the API base, query, JSON body, format hint."""

    method: str
    path: str
    params: dict[str, str] = field(default_factory=dict)
    body: Any = None
    response_format: ResponseFormat = ResponseFormat.JSON


def _is_success(status_code: int | None) -> bool:
    return status_code is not None and 200 <= status_code < 300


class RequestExecutor:
    """
    Runs API calls and tracks their loading/error state.

    Calls without a `call_id` share `self.state`; overlapping calls on one
    executor then race on it (last writer wins). Pass a `call_id` to keep a
    separate RequestState per logical call, readable via `state_for`.
    """

    def __init__(self, config: Config | None = None) -> None:
        self._config = config
        self.state = RequestState()
        self._calls: dict[str, RequestState] = {}

    @property
    def config(self) -> Config:
        if self._config is None:
            self._config = resolve_config()
        return self._config

    @property
    def loading(self) -> bool:
        return self.state.loading

    @property
    def error(self) -> str | None:
        return self.state.error

    def state_for(self, call_id: str) -> RequestState:
        return self._calls.setdefault(call_id, RequestState())

    def build_url(self, descriptor: RequestDescriptor) -> str:
        url = f"{self.config.api_base}{descriptor.path}"
        if descriptor.params:
            url += "?" + urlencode(descriptor.params)
        return url

    def execute(self, descriptor: RequestDescriptor, call_id: str | None = None) -> Any:
        """
        Perform the call described by `descriptor`.

        Returns:
            Decoded JSON for the json format; the raw body text for csv/ical.

        Raises:
            NetworkFailure: No response (connection error, timeout).
            DecodeFailure: JSON expected but the body is not JSON.
            RequestFailed: JSON response with a non-2xx status.
        """
        state = self.state if call_id is None else self.state_for(call_id)
        state.loading = True
        state.error = None
        try:
            response = self._send(descriptor)
            return self._decode(descriptor, response)
        except SatpassApiError as e:
            state.error = e.message
            raise
        except Exception as e:
            state.error = str(e) or type(e).__name__
            raise
        finally:
            state.loading = False

    def _send(self, descriptor: RequestDescriptor) -> requests.Response:
        url = self.build_url(descriptor)
        method = descriptor.method.upper()
        kwargs: dict[str, Any] = {"timeout": self.config.api_timeout_seconds}
        if descriptor.body is not None:
            kwargs["json"] = descriptor.body
            kwargs["headers"] = {"Content-Type": "application/json"}
        logger.info("%s %s", method, url)
        try:
            response = requests.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.warning("Request %s %s failed: %s", method, url, e)
            raise NetworkFailure(str(e) or type(e).__name__, e) from e
        logger.info("%s %s -> %s", method, url, response.status_code)
        return response

    def _decode(self, descriptor: RequestDescriptor, response: requests.Response) -> Any:
        status = response.status_code
        if descriptor.response_format.is_text:
            # Text exports are returned as-is, whatever the status.
            if not _is_success(status):
                logger.warning(
                    "%s export for %s returned status %s; passing body through",
                    descriptor.response_format.value, descriptor.path, status,
                )
            return response.text

        try:
            data = response.json()
        except ValueError as e:
            raise DecodeFailure(f"Invalid JSON in response from {descriptor.path}: {e}", e) from e

        if not _is_success(status):
            message = data.get("error") if isinstance(data, dict) else None
            raise RequestFailed(str(message) if message else UNKNOWN_ERROR_MESSAGE, status_code=status)
        return data
