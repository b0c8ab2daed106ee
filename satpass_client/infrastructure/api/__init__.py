"""HTTP request execution against the satpass REST API."""

from satpass_client.infrastructure.api.errors import (
    DecodeFailure,
    NetworkFailure,
    RequestFailed,
    SatpassApiError,
)
from satpass_client.infrastructure.api.request_executor import (
    RequestDescriptor,
    RequestExecutor,
    RequestState,
    ResponseFormat,
)

__all__ = [
    "DecodeFailure",
    "NetworkFailure",
    "RequestDescriptor",
    "RequestExecutor",
    "RequestFailed",
    "RequestState",
    "ResponseFormat",
    "SatpassApiError",
]
