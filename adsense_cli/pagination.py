"""Cursor-based pagination over AdSense list endpoints."""

from collections.abc import Callable, Iterator
from typing import Any

Page = dict[str, Any]
FetchPage = Callable[[str | None], Page]


def iter_pages(fetch_page: FetchPage) -> Iterator[Page]:
    """Yield raw pages until the service stops returning a cursor.

    The first call is always made with no cursor. Every following call
    receives the ``nextPageToken`` of the previous page. An empty page does
    not end the iteration; only a missing (or empty) token does.

    Args:
        fetch_page: Callable that performs one remote call for a cursor.

    Yields:
        Each page as returned by ``fetch_page``.
    """
    cursor: str | None = None
    while True:
        page = fetch_page(cursor)
        yield page
        cursor = page.get("nextPageToken") or None
        if cursor is None:
            return


def iter_items(fetch_page: FetchPage, items_key: str) -> Iterator[Any]:
    """Yield the items of every page in order.

    A page without ``items_key`` counts as a page with zero items.

    Args:
        fetch_page: Callable that performs one remote call for a cursor.
        items_key: Response key holding the items (e.g. "accounts").

    Yields:
        Items in page order, preserving the order within each page.
    """
    for page in iter_pages(fetch_page):
        yield from page.get(items_key) or []


def list_method_pager(
    method: Callable[..., Any],
    page_size: int | None = None,
    **params: Any,
) -> FetchPage:
    """Adapt a googleapiclient list method to a ``fetch_page`` callable.

    Example:
        fetch = list_method_pager(service.accounts().list, page_size=50)
        first = fetch(None)
    """

    def fetch_page(cursor: str | None) -> Page:
        kwargs = dict(params)
        if page_size is not None:
            kwargs["pageSize"] = page_size
        if cursor is not None:
            kwargs["pageToken"] = cursor
        return method(**kwargs).execute()

    return fetch_page


def list_all(
    method: Callable[..., Any],
    items_key: str,
    page_size: int | None = None,
    **params: Any,
) -> Iterator[Any]:
    """Iterate over every item a list method returns across all pages.

    Example:
        for account in list_all(service.accounts().list, "accounts"):
            print(account["name"])
    """
    return iter_items(list_method_pager(method, page_size=page_size, **params), items_key)
