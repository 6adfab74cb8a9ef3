"""Shared boto3 client factory with caching."""

from __future__ import annotations

from typing import Any
from typing import Mapping
from typing import Optional

import boto3

_CLIENT_CACHE: dict[tuple[str, str | None], Any] = {}


def get_client(service: str, region_name: str | None = None) -> Any:
    """Return a cached boto3 client using ambient credentials."""
    cache_key = (service, region_name)
    if cache_key in _CLIENT_CACHE:
        return _CLIENT_CACHE[cache_key]
    client = boto3.client(  # type: ignore[call-overload]
        service,
        region_name=region_name,
    )
    _CLIENT_CACHE[cache_key] = client
    return client


def build_client(
    service: str,
    credentials: Mapping[str, str],
    region_name: str | None = None,
) -> Any:
    """Return an uncached boto3 client bound to temporary credentials.

    ``credentials`` uses the key names of an STS ``Credentials`` block.
    """
    session = boto3.session.Session(
        aws_access_key_id=credentials["AccessKeyId"],
        aws_secret_access_key=credentials["SecretAccessKey"],
        aws_session_token=credentials.get("SessionToken"),
        region_name=region_name,
    )
    return session.client(service)  # type: ignore[call-overload]


def clear_client_cache() -> None:
    """Clear cached boto3 clients (useful in tests)."""
    _CLIENT_CACHE.clear()


def get_sts_client(region_name: Optional[str] = None) -> Any:
    return get_client("sts", region_name=region_name)
