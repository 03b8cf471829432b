"""Conversion of catalog API JSON into domain objects.

Every parser here is total: missing or malformed leaves fall back to a
default or to ``None`` and never raise. Nested objects (store, images,
redemption data) are either fully built or absent.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Any, List, Optional

from .json_node import JsonNode
from .models import (
    Color,
    Company,
    CompanyCategory,
    CompanyWithCount,
    Coupon,
    CouponImage,
    RedemptionCode,
    RedemptionCodeInfo,
    SearchResult,
    Store,
)

_DATE_FORMAT = "%Y-%m-%d"
_DEFAULT_IMAGE_SIZE = 100.0


def _node(json: Any) -> JsonNode:
    return json if isinstance(json, JsonNode) else JsonNode(json)


def _string_list(node: JsonNode) -> List[str]:
    return [item.string_value for item in node.array_value]


def parse_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return datetime.strptime(value, _DATE_FORMAT).date()
    except ValueError:
        return None


def parse_color(value: Optional[str]) -> Optional[Color]:
    return Color.from_hex(value)


def parse_image(json: Any) -> Optional[CouponImage]:
    """Build an image, or ``None`` when the node is empty or has no usable URL."""

    node = _node(json)
    if node.is_empty:
        return None
    source_url = node["url"].url
    if source_url is None:
        return None
    width = node["width"].number
    height = node["height"].number
    return CouponImage(
        source_url=source_url,
        width=width if width is not None else _DEFAULT_IMAGE_SIZE,
        height=height if height is not None else _DEFAULT_IMAGE_SIZE,
        color=parse_color(node["rgbColor"].string_value),
    )


def parse_company(json: Any) -> Company:
    node = _node(json)
    return Company(
        id=node["id"].int_value,
        name=node["name"].string_value,
        logo=parse_image(node["logo"]),
    )


def parse_company_with_count(json: Any) -> CompanyWithCount:
    node = _node(json)
    return CompanyWithCount(
        id=node["id"].int_value,
        name=node["name"].string_value,
        logo=parse_image(node["logo"]),
        offer_count=node["offerCount"].int_value,
    )


def parse_store(json: Any) -> Optional[Store]:
    node = _node(json)
    if node.is_empty:
        return None
    return Store(
        id=node["id"].int_value,
        name=node["name"].string,
        address=node["address"].string,
        latitude=node["latitude"].number,
        longitude=node["longitude"].number,
    )


def parse_redemption_code_info(json: Any) -> Optional[RedemptionCodeInfo]:
    node = _node(json)
    if node.is_empty:
        return None
    return RedemptionCodeInfo(
        limited=node["limited"].bool_value,
        total_codes=node["totalCodes"].integer,
        available_codes=node["availableCodes"].integer,
        already_assigned=node["alreadyAssigned"].bool_value,
    )


def parse_coupon(json: Any) -> Coupon:
    """Map one offer object; ``id`` and ``company`` are always populated."""

    node = _node(json)
    return Coupon(
        id=node["id"].int_value,
        short_text=node["shortOffer"].string_value,
        short_description=node["shortDescription"].string_value,
        description=node["description"].string_value,
        tags=_string_list(node["tags"]),
        online=node["isOnline"].bool_value,
        link=node["link"].url,
        expiration_date=parse_date(node["expirationDate"].string),
        thumbnail=parse_image(node["thumbnail"]),
        image=parse_image(node["image"]),
        store=parse_store(node["store"]),
        company=parse_company(node["company"]),
        redemption_code=parse_redemption_code_info(node["redemptionCode"]),
    )


def parse_coupons(json: Any) -> List[Coupon]:
    return [parse_coupon(item) for item in _node(json).array_value]


def parse_redemption_code(json: Any) -> Optional[RedemptionCode]:
    node = _node(json)
    if node.is_empty:
        return None
    return RedemptionCode(
        code=node["code"].string_value,
        display_code=node["displayCode"].string_value,
        formats=_string_list(node["formats"]),
    )


def parse_company_category(json: Any) -> CompanyCategory:
    node = _node(json)
    return CompanyCategory(
        id=node["id"].int_value,
        name=node["name"].string_value,
        tags=_string_list(node["tags"]),
        companies=[parse_company_with_count(item) for item in node["companies"].array_value],
    )


def parse_categories(json: Any) -> List[CompanyCategory]:
    return [parse_company_category(item) for item in _node(json).array_value]


def parse_search_company(json: Any) -> Company:
    """Search results carry companies without logos."""

    node = _node(json)
    return Company(id=node["id"].int_value, name=node["name"].string_value, logo=None)


def parse_search_result(json: Any) -> SearchResult:
    node = _node(json)
    return SearchResult(
        companies=[parse_search_company(item) for item in node["companies"].array_value],
        tags=_string_list(node["tags"]),
    )
