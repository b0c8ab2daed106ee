"""
satpass API client: one method per endpoint, all delegating to a RequestExecutor.
"""

from __future__ import annotations

from typing import Any

from satpass_client.domains.endpoints.registry import get_endpoint
from satpass_client.infrastructure.api.request_executor import RequestExecutor, ResponseFormat
from satpass_client.utils.config import Config


def _norad(norad_id: int) -> int:
    """NORAD catalog numbers are positive integers."""
    if isinstance(norad_id, bool) or not isinstance(norad_id, int) or norad_id <= 0:
        raise ValueError(f"Invalid NORAD catalog id: {norad_id!r}")
    return norad_id


class SatpassApi:
    """
    Client for the satpass REST API.

    `loading` and `error` mirror the executor's shared state, i.e. they describe
    the most recent call made without a `call_id`. Create one SatpassApi per
    call site when calls overlap, or use `call(..., call_id=...)`.
    """

    def __init__(self, executor: RequestExecutor | None = None, config: Config | None = None) -> None:
        self.executor = executor or RequestExecutor(config)

    @property
    def loading(self) -> bool:
        return self.executor.loading

    @property
    def error(self) -> str | None:
        return self.executor.error

    def call(
        self,
        name: str,
        *,
        path_params: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        body: Any = None,
        response_format: ResponseFormat | str = ResponseFormat.JSON,
        limit: int = 0,
        offset: int = 0,
        call_id: str | None = None,
    ) -> Any:
        """Run the named endpoint from the catalog."""
        descriptor = get_endpoint(name).build(
            path_params=path_params,
            params=params,
            body=body,
            response_format=response_format,
            limit=limit,
            offset=offset,
        )
        return self.executor.execute(descriptor, call_id=call_id)

    # --- Satellites ---

    def get_satellites(self, limit: int = 0, offset: int = 0) -> Any:
        return self.call("get_satellites", limit=limit, offset=offset)

    def get_bookmarked_satellites(self, limit: int = 0, offset: int = 0) -> Any:
        return self.call("get_bookmarked_satellites", limit=limit, offset=offset)

    def get_satellite(self, norad_id: int) -> Any:
        return self.call("get_satellite", path_params={"norad_id": _norad(norad_id)})

    def add_satellite(self, norad_id: int) -> Any:
        return self.call("add_satellite", path_params={"norad_id": _norad(norad_id)})

    def remove_satellite(self, norad_id: int) -> Any:
        return self.call("remove_satellite", path_params={"norad_id": _norad(norad_id)})

    def bookmark_satellite(self, norad_id: int) -> Any:
        return self.call("bookmark_satellite", path_params={"norad_id": _norad(norad_id)})

    def unbookmark_satellite(self, norad_id: int) -> Any:
        return self.call("unbookmark_satellite", path_params={"norad_id": _norad(norad_id)})

    def get_tle(self, norad_id: int) -> Any:
        return self.call("get_tle", path_params={"norad_id": _norad(norad_id)})

    def get_passes(
        self,
        norad_id: int,
        days: int = 7,
        min_el: float = 0,
        step: int = 60,
        format: ResponseFormat | str = ResponseFormat.JSON,
    ) -> Any:
        """
        Pass predictions for a satellite.

        Returns:
            Decoded JSON for format "json"; the raw CSV / iCalendar text otherwise.
            Text exports are returned even when the server answers with an error status.
        """
        fmt = ResponseFormat.parse(format)
        # the server sees the format as given ("ics" stays "ics"); the alias only picks the decoding
        wire_format = format.value if isinstance(format, ResponseFormat) else str(format).strip().lower()
        return self.call(
            "get_passes",
            path_params={"norad_id": _norad(norad_id)},
            params={"days": days, "min_el": min_el, "step": step, "format": wire_format},
            response_format=fmt,
        )

    # --- Catalog ---

    def get_catalog_groups(self) -> Any:
        return self.call("get_catalog_groups")

    def get_catalog_group(self, group_name: str, limit: int = 0, offset: int = 0) -> Any:
        return self.call(
            "get_catalog_group",
            path_params={"group_name": group_name},
            limit=limit,
            offset=offset,
        )

    def get_catalog_entry(self, norad_id: int) -> Any:
        return self.call("get_catalog_entry", path_params={"norad_id": _norad(norad_id)})

    def search_satellites(self, query: str, limit: int = 0, offset: int = 0) -> Any:
        return self.call("search_satellites", params={"q": query}, limit=limit, offset=offset)

    def get_catalog_stats(self) -> Any:
        return self.call("get_catalog_stats")

    # --- Server ---

    def get_system_stats(self) -> Any:
        return self.call("get_system_stats")

    def get_config(self) -> Any:
        """Server configuration, including the ground station (QTH) coordinates."""
        return self.call("get_config")

    def update_ground_station(self, qth: dict[str, Any]) -> Any:
        return self.call("update_ground_station", body=qth)
