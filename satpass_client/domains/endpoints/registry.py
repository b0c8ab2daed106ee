"""
Catalog of satpass API endpoints: name -> method, path template, category and
accepted response formats. `SatpassApi` builds every request from this table.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from urllib.parse import quote

from satpass_client.infrastructure.api.request_executor import RequestDescriptor, ResponseFormat

API_PREFIX = "/api/v1"


class EndpointCategory(str, Enum):
    LIST = "list"
    ENTITY = "entity"
    TEXT_EXPORT = "text_export"


_TEXT_EXPORT_FORMATS = (ResponseFormat.JSON, ResponseFormat.CSV, ResponseFormat.ICAL)


@dataclass(frozen=True)
class EndpointSpec:
    name: str
    method: str
    path: str
    category: EndpointCategory
    paginated: bool = False
    base_params: dict[str, str] = field(default_factory=dict)

    @property
    def formats(self) -> tuple[ResponseFormat, ...]:
        """Only text-export endpoints answer in csv/ical; everything else is JSON."""
        if self.category is EndpointCategory.TEXT_EXPORT:
            return _TEXT_EXPORT_FORMATS
        return (ResponseFormat.JSON,)

    def build(
        self,
        path_params: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        body: Any = None,
        response_format: ResponseFormat | str = ResponseFormat.JSON,
        limit: int = 0,
        offset: int = 0,
    ) -> RequestDescriptor:
        """
        Fill the path template and encode the query into a RequestDescriptor.

        Raises:
            ValueError: For a format the endpoint's category does not serve, or
                pagination on an endpoint that is not paginated.
        """
        fmt = ResponseFormat.parse(response_format)
        if fmt not in self.formats:
            raise ValueError(f"{self.name} does not support the {fmt.value!r} format")
        params = dict(params or {})
        if not self.paginated and (limit or offset or "limit" in params or "offset" in params):
            raise ValueError(f"{self.name} is not paginated")
        params.update(pagination_params(limit, offset))

        path_values = {k: quote(str(v), safe="") for k, v in (path_params or {}).items()}
        query = dict(self.base_params)
        for k, v in params.items():
            if v is not None:
                query[k] = encode_query_value(v)
        return RequestDescriptor(
            method=self.method,
            path=API_PREFIX + self.path.format(**path_values),
            params=query,
            body=body,
            response_format=fmt,
        )


def encode_query_value(value: Any) -> str:
    """Query values are always strings: booleans as "true"/"false", numbers in decimal."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def pagination_params(limit: int = 0, offset: int = 0) -> dict[str, int]:
    """Pagination is sent only when a positive limit is given."""
    if limit > 0:
        return {"limit": limit, "offset": offset}
    return {}


ENDPOINTS: dict[str, EndpointSpec] = {
    spec.name: spec
    for spec in (
        EndpointSpec("get_satellites", "GET", "/satellites", EndpointCategory.LIST, paginated=True),
        EndpointSpec(
            "get_bookmarked_satellites", "GET", "/satellites", EndpointCategory.LIST,
            paginated=True, base_params={"bookmarked": "true"},
        ),
        EndpointSpec("get_satellite", "GET", "/satellites/{norad_id}", EndpointCategory.ENTITY),
        EndpointSpec("add_satellite", "POST", "/satellites/{norad_id}", EndpointCategory.ENTITY),
        EndpointSpec("remove_satellite", "DELETE", "/satellites/{norad_id}", EndpointCategory.ENTITY),
        EndpointSpec("bookmark_satellite", "POST", "/satellites/{norad_id}/bookmark", EndpointCategory.ENTITY),
        EndpointSpec("unbookmark_satellite", "DELETE", "/satellites/{norad_id}/bookmark", EndpointCategory.ENTITY),
        EndpointSpec("get_tle", "GET", "/satellites/{norad_id}/tle", EndpointCategory.ENTITY),
        EndpointSpec("get_passes", "GET", "/satellites/{norad_id}/passes", EndpointCategory.TEXT_EXPORT),
        EndpointSpec("get_catalog_groups", "GET", "/catalog/groups", EndpointCategory.LIST),
        EndpointSpec("get_catalog_group", "GET", "/catalog/groups/{group_name}", EndpointCategory.LIST, paginated=True),
        EndpointSpec("get_catalog_entry", "GET", "/catalog/satellites/{norad_id}", EndpointCategory.ENTITY),
        EndpointSpec("search_satellites", "GET", "/catalog/search", EndpointCategory.LIST, paginated=True),
        EndpointSpec("get_catalog_stats", "GET", "/catalog/stats", EndpointCategory.ENTITY),
        EndpointSpec("get_system_stats", "GET", "/stats", EndpointCategory.ENTITY),
        EndpointSpec("get_config", "GET", "/config", EndpointCategory.ENTITY),
        EndpointSpec("update_ground_station", "PUT", "/qth", EndpointCategory.ENTITY),
    )
}


def get_endpoint(name: str) -> EndpointSpec:
    spec = ENDPOINTS.get(name)
    if spec is None:
        raise KeyError(f"Unknown endpoint: {name}")
    return spec
