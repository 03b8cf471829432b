"""Command line interface for querying the offer catalog."""
from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Awaitable, Callable, Optional, Tuple

import click

from catalog_core import (
    AiohttpRequestIssuer,
    CatalogClient,
    CatalogError,
    CatalogSettings,
    FilterOptions,
    Location,
    NameHistoryEntry,
    PaginationInfo,
    SearchHistoryStore,
    SearchService,
    StaticTokenProvider,
)
from catalog_core.models import Company, Coupon

LOGGER = logging.getLogger(__name__)

Action = Callable[[CatalogClient, SearchService], Awaitable[Any]]


def _run(settings: CatalogSettings, action: Action) -> Any:
    """Run ``action`` with freshly built services and a managed HTTP session."""

    async def runner() -> Any:
        async with AiohttpRequestIssuer(timeout=settings.request_timeout) as requester:
            token_provider = StaticTokenProvider(settings.user_token)
            client = CatalogClient(settings, requester, token_provider)
            search = SearchService(settings, requester, token_provider)
            return await action(client, search)

    try:
        return asyncio.run(runner())
    except CatalogError as exc:
        raise click.ClickException(str(exc)) from exc


def _echo_json(payload: Any) -> None:
    click.echo(json.dumps(payload, indent=2, ensure_ascii=False))


def _filter_options(
    query: Optional[str],
    tags: Tuple[str, ...],
    company_id: Optional[int],
    category_id: Optional[int],
) -> Optional[FilterOptions]:
    if query is None and not tags and company_id is None and category_id is None:
        return None
    return FilterOptions(
        search_term=query,
        tags=list(tags) or None,
        company_id=company_id,
        category_id=category_id,
    )


def _filter_decorators(func: Callable[..., Any]) -> Callable[..., Any]:
    func = click.option("--category-id", type=int, default=None)(func)
    func = click.option("--company-id", type=int, default=None)(func)
    func = click.option("--tag", "tags", multiple=True, help="Tag filter, repeatable")(func)
    func = click.option("--query", default=None, help="Free-text filter")(func)
    return func


def _location_decorators(func: Callable[..., Any]) -> Callable[..., Any]:
    func = click.option("--sensor/--no-sensor", default=False, help="Location comes from a GPS sensor")(func)
    func = click.option("--lon", "longitude", type=float, required=True)(func)
    func = click.option("--lat", "latitude", type=float, required=True)(func)
    return func


def _pagination_decorators(func: Callable[..., Any]) -> Callable[..., Any]:
    func = click.option("--per-page", type=int, default=None)(func)
    func = click.option("--page", type=int, default=None)(func)
    return func


def _pagination(page: Optional[int], per_page: Optional[int]) -> Optional[PaginationInfo]:
    if page is None and per_page is None:
        return None
    return PaginationInfo(page=page, per_page=per_page)


@click.group()
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
)
@click.pass_context
def cli(ctx: click.Context, log_level: str) -> None:
    """Query the offer catalog from the command line."""

    logging.basicConfig(level=getattr(logging, log_level))
    ctx.obj = CatalogSettings.from_env()


@cli.command()
@_location_decorators
@_filter_decorators
@_pagination_decorators
@click.pass_obj
def find(
    settings: CatalogSettings,
    latitude: float,
    longitude: float,
    sensor: bool,
    query: Optional[str],
    tags: Tuple[str, ...],
    company_id: Optional[int],
    category_id: Optional[int],
    page: Optional[int],
    per_page: Optional[int],
) -> None:
    """Find offers around a location."""

    filter_options = _filter_options(query, tags, company_id, category_id)
    pagination = _pagination(page, per_page)
    location = Location(latitude, longitude)
    coupons = _run(
        settings,
        lambda client, _: client.find_offers(location, sensor, filter_options, pagination),
    )
    _echo_json([coupon.to_dict() for coupon in coupons])


@cli.command()
@_location_decorators
@_pagination_decorators
@click.pass_obj
def recommended(
    settings: CatalogSettings,
    latitude: float,
    longitude: float,
    sensor: bool,
    page: Optional[int],
    per_page: Optional[int],
) -> None:
    """Show recommended offers for a location."""

    pagination = _pagination(page, per_page)
    location = Location(latitude, longitude)
    coupons = _run(
        settings, lambda client, _: client.get_recommended_offers(location, sensor, pagination)
    )
    _echo_json([coupon.to_dict() for coupon in coupons])


@cli.command()
@_location_decorators
@click.option("--radius", type=float, default=5000.0, show_default=True, help="Radius in meters")
@_filter_decorators
@click.pass_obj
def nearby(
    settings: CatalogSettings,
    latitude: float,
    longitude: float,
    sensor: bool,
    radius: float,
    query: Optional[str],
    tags: Tuple[str, ...],
    company_id: Optional[int],
    category_id: Optional[int],
) -> None:
    """Show offers of physical stores near a location."""

    filter_options = _filter_options(query, tags, company_id, category_id)
    location = Location(latitude, longitude)
    coupons = _run(
        settings,
        lambda client, _: client.find_store_offers(location, radius, sensor, filter_options),
    )
    _echo_json([coupon.to_dict() for coupon in coupons])


@cli.command()
@click.argument("ids", type=int, nargs=-1, required=True)
@_location_decorators
@click.pass_obj
def details(
    settings: CatalogSettings,
    ids: Tuple[int, ...],
    latitude: float,
    longitude: float,
    sensor: bool,
) -> None:
    """Fetch offers by id."""

    location = Location(latitude, longitude)
    coupons = _run(
        settings, lambda client, _: client.get_offer_details(list(ids), location, sensor)
    )
    _echo_json([coupon.to_dict() for coupon in coupons])


@cli.command()
@click.pass_obj
def categories(settings: CatalogSettings) -> None:
    """List company categories."""

    result = _run(settings, lambda client, _: client.get_categories())
    _echo_json([category.to_dict() for category in result])


@cli.command()
@click.argument("offer_id", type=int)
@click.pass_obj
def code(settings: CatalogSettings, offer_id: int) -> None:
    """Request a redemption code for an offer."""

    offer = Coupon(id=offer_id, company=Company(id=0, name=""))
    redemption_code = _run(settings, lambda client, _: client.get_redemption_code(offer))
    if redemption_code is None:
        raise click.ClickException(f"No redemption code available for offer {offer_id}")
    _echo_json(redemption_code.to_dict())


@cli.command()
@click.argument("query")
@click.pass_obj
def search(settings: CatalogSettings, query: str) -> None:
    """Search companies and tags, remembering the query."""

    result = _run(settings, lambda _, service: service.generic_search(query))
    store = SearchHistoryStore(settings.history_path, max_entries=settings.max_history)
    store.add_to_history(NameHistoryEntry(query))
    _echo_json(result.to_dict())


@cli.command()
@click.option("--clear", is_flag=True, help="Forget every remembered search")
@click.pass_obj
def history(settings: CatalogSettings, clear: bool) -> None:
    """Print the recent searches, most recent first."""

    store = SearchHistoryStore(settings.history_path, max_entries=settings.max_history)
    if clear:
        store.clear_history()
        LOGGER.info("Cleared search history at %s", settings.history_path)
    _echo_json([entry.to_json() for entry in store.history])


if __name__ == "__main__":
    cli()
