"""Shared utilities used across service subpackages."""

from .http_client import HTTPClient, HTTPClientError

__all__ = ["HTTPClient", "HTTPClientError"]
