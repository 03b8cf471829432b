"""Catalog operations: offer queries, categories and redemption codes."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional
from urllib.parse import quote

from .auth import UserTokenProvider
from .config import CatalogSettings
from .errors import RedemptionCodeDeniedError, TransportError
from .mapper import parse_categories, parse_coupons, parse_redemption_code
from .models import (
    CompanyCategory,
    Coupon,
    FilterOptions,
    Location,
    PaginationInfo,
    RedemptionCode,
)
from .params import compose, location_params
from .transport import RequestIssuer

LOGGER = logging.getLogger(__name__)

STORE_OFFERS_PER_PAGE = 50
NO_STORE_ID = -1

_ERROR_CODE_KEYS = ("errorCode", "code", "error")


class CatalogClient:
    """Client for the offer catalog API.

    Every query issues exactly one GET through ``requester``. Transport errors
    are raised to the caller as they come; JSON is mapped with the total
    parsers from :mod:`catalog_core.mapper`.
    """

    def __init__(
        self,
        settings: CatalogSettings,
        requester: RequestIssuer,
        token_provider: Optional[UserTokenProvider] = None,
    ) -> None:
        self.settings = settings
        self.requester = requester
        self.token_provider = token_provider

    # Derived URLs

    @property
    def highlighted_offer_url(self) -> str:
        url = self.settings.url_for("offers/highlighted")
        if self.settings.api_key:
            return f"{url}/{self.settings.api_key}"
        return url

    def redemption_code_image_url(
        self, offer_id: int, format: str, width: int, height: int
    ) -> Optional[str]:
        """URL of the rendered code image, or ``None`` while no user token is known."""

        token = self.token_provider.current_user_token() if self.token_provider else None
        if not token:
            return None
        url = self.settings.url_for(f"offers/{offer_id}/code/{format}/{width}/{height}")
        return f"{url}?userToken={quote(token, safe='')}"

    def report_error_url(self, for_offer: Coupon) -> str:
        url = self.settings.url_for(f"offers/{for_offer.id}/report")
        if for_offer.store is not None:
            return f"{url}?storeId={for_offer.store.id}"
        return url

    # Offer queries

    async def find_offers(
        self,
        location: Location,
        sensor: bool,
        filter_options: Optional[FilterOptions] = None,
        pagination: Optional[PaginationInfo] = None,
    ) -> List[Coupon]:
        parameters = compose(location_params(location, sensor), pagination, filter_options)
        return await self._get_offers("offers/find", parameters)

    async def get_recommended_offers(
        self,
        location: Location,
        sensor: bool,
        pagination: Optional[PaginationInfo] = None,
    ) -> List[Coupon]:
        parameters = compose(location_params(location, sensor), pagination)
        return await self._get_offers("offers/recommended", parameters)

    async def find_related_offers(
        self, to_offer: Coupon, pagination: Optional[PaginationInfo] = None
    ) -> List[Coupon]:
        store_id = to_offer.store.id if to_offer.store is not None else NO_STORE_ID
        parameters = compose({"storeId": store_id, "offerId": to_offer.id}, pagination)
        return await self._get_offers("offers/related", parameters)

    async def find_store_offers(
        self,
        near_location: Location,
        radius_meters: float,
        sensor: bool,
        filter_options: Optional[FilterOptions] = None,
    ) -> List[Coupon]:
        """Offers from physical stores within ``radius_meters`` of a point."""

        base = location_params(near_location, sensor)
        base.update(
            {
                "radiusInKm": radius_meters / 1000,
                "includeOnline": False,
                "perPage": STORE_OFFERS_PER_PAGE,
            }
        )
        parameters = compose(base, filter_options=filter_options)
        return await self._get_offers("offers/find", parameters)

    async def get_offer_details(
        self, ids: Iterable[int], location: Location, sensor: bool
    ) -> List[Coupon]:
        parameters = location_params(location, sensor)
        parameters["ids"] = ",".join(str(offer_id) for offer_id in ids)
        parameters["includeOnline"] = False
        return await self._get_offers("offers/get", parameters)

    # Other resources

    async def get_categories(self) -> List[CompanyCategory]:
        json = await self._get("categories")
        return parse_categories(json)

    async def get_redemption_code(self, for_offer: Coupon) -> Optional[RedemptionCode]:
        try:
            json = await self._get(f"offers/{for_offer.id}/code")
        except TransportError as exc:
            translated = self.interpret_redemption_error(exc)
            if translated is exc:
                raise
            raise translated from exc
        return parse_redemption_code(json)

    def interpret_redemption_error(self, error: TransportError) -> Exception:
        """Translate a failed redemption-code request into the error to raise.

        A server payload naming an error code becomes a
        :class:`RedemptionCodeDeniedError`; anything else is returned as is.
        Override to map specific codes.
        """

        payload = error.payload
        if not isinstance(payload, Mapping):
            return error
        for key in _ERROR_CODE_KEYS:
            reason = payload.get(key)
            if isinstance(reason, (str, int)) and not isinstance(reason, bool) and reason != "":
                return RedemptionCodeDeniedError(str(reason), status=error.status)
        return error

    async def _get(self, path: str, parameters: Optional[Dict[str, Any]] = None) -> Any:
        url = self.settings.url_for(path)
        LOGGER.debug("Catalog request %s params=%s", path, parameters)
        return await self.requester.get(url, parameters)

    async def _get_offers(self, path: str, parameters: Dict[str, Any]) -> List[Coupon]:
        json = await self._get(path, parameters)
        coupons = parse_coupons(json)
        LOGGER.debug("Catalog request %s returned %d offers", path, len(coupons))
        return coupons
