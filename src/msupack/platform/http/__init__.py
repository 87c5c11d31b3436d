"""HTTP access for remote catalogs."""

from .client import HTTPClient, HTTPResult, RequestsHTTPClient

__all__ = ["HTTPClient", "HTTPResult", "RequestsHTTPClient"]
