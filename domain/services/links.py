from __future__ import annotations

from typing import Callable, Optional

from domain.models import ObjectLinkSettings

LinkResolver = Callable[[ObjectLinkSettings], Optional[str]]


def resolve_object_link(settings: ObjectLinkSettings) -> Optional[str]:
    if settings.type == "dashboard":
        return _normalize_uri(settings.dash_uri)
    if settings.type == "absolute":
        return _normalize_uri(settings.absolute_uri)
    return None


def append_link_params(link_uri_base: Optional[str], link_params: Optional[str]) -> Optional[str]:
    if link_uri_base is None:
        return None
    if link_params is None:
        return link_uri_base
    separator = "&" if "?" in link_uri_base else "?"
    return f"{link_uri_base}{separator}{link_params}"


def _normalize_uri(uri: Optional[str]) -> Optional[str]:
    if uri is None:
        return None
    normalized = str(uri).strip()
    return normalized or None
