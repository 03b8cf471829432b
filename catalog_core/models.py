"""Domain objects returned by the catalog client and its inputs."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Union


@dataclass
class Location:
    """A coordinate supplied by the caller (device location is not our concern)."""

    latitude: float
    longitude: float


@dataclass
class FilterOptions:
    """Optional filters overlaid on a catalog query."""

    search_term: Optional[str] = None
    tags: Optional[List[str]] = None
    company_id: Optional[int] = None
    category_id: Optional[int] = None


@dataclass
class PaginationInfo:
    page: Optional[int] = None
    per_page: Optional[int] = None


@dataclass
class Color:
    """An RGBA colour with components in the ``[0, 1]`` range."""

    red: float
    green: float
    blue: float
    alpha: float = 1.0

    @classmethod
    def from_hex(cls, value: Optional[str]) -> Optional["Color"]:
        """Build a colour from ``#RGB``, ``#RRGGBB`` or ``#RRGGBBAA``.

        Returns ``None`` for anything else, including an empty string.
        """

        if not value:
            return None
        digits = value.strip().lstrip("#")
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        if len(digits) not in (6, 8):
            return None
        try:
            channels = [int(digits[i : i + 2], 16) for i in range(0, len(digits), 2)]
        except ValueError:
            return None
        if len(channels) == 3:
            channels.append(255)
        red, green, blue, alpha = (channel / 255.0 for channel in channels)
        return cls(red=red, green=green, blue=blue, alpha=alpha)

    def to_hex(self) -> str:
        channels = [self.red, self.green, self.blue]
        if self.alpha < 1.0:
            channels.append(self.alpha)
        return "#" + "".join(f"{round(channel * 255):02X}" for channel in channels)


@dataclass
class CouponImage:
    source_url: str
    width: float = 100.0
    height: float = 100.0
    color: Optional[Color] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source_url": self.source_url,
            "width": self.width,
            "height": self.height,
            "color": self.color.to_hex() if self.color else None,
        }


@dataclass
class Store:
    id: int
    name: Optional[str] = None
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }


@dataclass
class Company:
    id: int
    name: str
    logo: Optional[CouponImage] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "logo": self.logo.to_dict() if self.logo else None,
        }


@dataclass
class CompanyWithCount(Company):
    offer_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["offer_count"] = self.offer_count
        return data


@dataclass
class CompanyCategory:
    id: int
    name: str
    tags: List[str] = field(default_factory=list)
    companies: List[CompanyWithCount] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "tags": list(self.tags),
            "companies": [company.to_dict() for company in self.companies],
        }


@dataclass
class RedemptionCodeInfo:
    """Availability of redemption codes attached to a coupon."""

    limited: bool = False
    total_codes: Optional[int] = None
    available_codes: Optional[int] = None
    already_assigned: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "limited": self.limited,
            "total_codes": self.total_codes,
            "available_codes": self.available_codes,
            "already_assigned": self.already_assigned,
        }


@dataclass
class RedemptionCode:
    code: str
    display_code: str
    formats: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "display_code": self.display_code,
            "formats": list(self.formats),
        }


@dataclass
class Coupon:
    """An offer as returned by the catalog queries."""

    id: int
    company: Company
    short_text: str = ""
    short_description: str = ""
    description: str = ""
    tags: List[str] = field(default_factory=list)
    online: bool = False
    link: Optional[str] = None
    expiration_date: Optional[date] = None
    thumbnail: Optional[CouponImage] = None
    image: Optional[CouponImage] = None
    store: Optional[Store] = None
    redemption_code: Optional[RedemptionCodeInfo] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serialisable version of the coupon."""

        return {
            "id": self.id,
            "short_text": self.short_text,
            "short_description": self.short_description,
            "description": self.description,
            "tags": list(self.tags),
            "online": self.online,
            "link": self.link,
            "expiration_date": self.expiration_date.isoformat() if self.expiration_date else None,
            "thumbnail": self.thumbnail.to_dict() if self.thumbnail else None,
            "image": self.image.to_dict() if self.image else None,
            "store": self.store.to_dict() if self.store else None,
            "company": self.company.to_dict(),
            "redemption_code": self.redemption_code.to_dict() if self.redemption_code else None,
        }


@dataclass
class SearchResult:
    companies: List[Company] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "companies": [company.to_dict() for company in self.companies],
            "tags": list(self.tags),
        }


# Search history entries. They are frozen so that equality and hashing are
# by value; ``to_json`` carries a ``type`` discriminator for the history file.


@dataclass(frozen=True)
class NameHistoryEntry:
    """A free-text search term."""

    name: str

    def to_json(self) -> Dict[str, Any]:
        return {"type": "name", "name": self.name}


@dataclass(frozen=True)
class CompanyHistoryEntry:
    id: int
    name: str

    def to_json(self) -> Dict[str, Any]:
        return {"type": "company", "id": self.id, "name": self.name}


@dataclass(frozen=True)
class TagHistoryEntry:
    tag: str

    def to_json(self) -> Dict[str, Any]:
        return {"type": "tag", "tag": self.tag}


@dataclass(frozen=True)
class LocationHistoryEntry:
    """A place picked from a geocoding result."""

    name: str
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    def to_json(self) -> Dict[str, Any]:
        return {
            "type": "location",
            "name": self.name,
            "address": self.address,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }


SearchHistoryEntry = Union[
    NameHistoryEntry, CompanyHistoryEntry, TagHistoryEntry, LocationHistoryEntry
]


def _optional_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    raise ValueError(f"not a number: {value!r}")


def history_entry_from_json(data: Any) -> Optional[SearchHistoryEntry]:
    """Rebuild a history entry; ``None`` when ``data`` is not a known entry."""

    if not isinstance(data, Mapping):
        return None
    kind = data.get("type")
    try:
        if kind == "name" and isinstance(data.get("name"), str):
            return NameHistoryEntry(name=data["name"])
        if kind == "tag" and isinstance(data.get("tag"), str):
            return TagHistoryEntry(tag=data["tag"])
        if kind == "company" and isinstance(data.get("name"), str):
            company_id = data.get("id")
            if isinstance(company_id, bool) or not isinstance(company_id, int):
                return None
            return CompanyHistoryEntry(id=company_id, name=data["name"])
        if kind == "location" and isinstance(data.get("name"), str):
            address = data.get("address")
            return LocationHistoryEntry(
                name=data["name"],
                address=address if isinstance(address, str) else None,
                latitude=_optional_float(data.get("latitude")),
                longitude=_optional_float(data.get("longitude")),
            )
    except ValueError:
        return None
    return None
