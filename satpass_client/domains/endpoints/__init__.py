"""Endpoint catalog for the satpass REST API."""

from satpass_client.domains.endpoints.registry import ENDPOINTS, EndpointCategory, EndpointSpec, get_endpoint

__all__ = ["ENDPOINTS", "EndpointCategory", "EndpointSpec", "get_endpoint"]
