"""Composition of query parameters for catalog requests."""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from .models import FilterOptions, Location, PaginationInfo


def location_params(location: Location, sensor: bool) -> Dict[str, Any]:
    """Base parameters shared by every location-aware query."""

    return {
        "latitude": location.latitude,
        "longitude": location.longitude,
        "sensor": "true" if sensor else "false",
    }


def pagination_params(
    pagination: Optional[PaginationInfo], combined_with: Optional[Mapping[str, Any]] = None
) -> Dict[str, Any]:
    result: Dict[str, Any] = dict(combined_with or {})
    if pagination is None:
        return result
    if pagination.page is not None:
        result["page"] = pagination.page
    if pagination.per_page is not None:
        result["perPage"] = pagination.per_page
    return result


def filter_params(
    filter_options: Optional[FilterOptions], combined_with: Optional[Mapping[str, Any]] = None
) -> Dict[str, Any]:
    result: Dict[str, Any] = dict(combined_with or {})
    if filter_options is None:
        return result
    if filter_options.search_term is not None:
        result["query"] = filter_options.search_term
    if filter_options.tags:
        result["tags"] = ",".join(filter_options.tags)
    if filter_options.company_id is not None:
        result["companyId"] = filter_options.company_id
    if filter_options.category_id is not None:
        result["categoryId"] = filter_options.category_id
    return result


def compose(
    base: Optional[Mapping[str, Any]] = None,
    pagination: Optional[PaginationInfo] = None,
    filter_options: Optional[FilterOptions] = None,
) -> Dict[str, Any]:
    """Overlay pagination and then filters on ``base``.

    Later stages overwrite keys set by earlier ones. Values are not validated;
    the remote API decides what is acceptable. ``base`` itself is left
    untouched.
    """

    return filter_params(filter_options, pagination_params(pagination, base))
