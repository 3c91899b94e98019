"""Draining of paginated AWS list APIs."""

from typing import Any, Callable, List, NamedTuple, Optional

from .utils import debug_print


class Page(NamedTuple):
    """One page of a list API: its items and the token for the next page.

    ``continuation`` is ``None`` only on the final page. An empty ``items``
    list does not end pagination.
    """

    items: List[Any]
    continuation: Optional[str] = None


def drain(fetch_page: Callable[[Optional[str]], Page]) -> List[Any]:
    """Fetch every page of a list API and return all items in order.

    ``fetch_page`` is called with ``None`` first and afterwards with the
    continuation token of the previous page. Any exception it raises
    propagates and discards what was accumulated so far. Items are not
    deduplicated.
    """
    items: List[Any] = []
    token: Optional[str] = None
    page_count = 0

    while True:
        page = fetch_page(token)
        page_count += 1
        items.extend(page.items)
        debug_print(
            f"Page {page_count}: {len(page.items)} items, "
            f"continuation={'yes' if page.continuation is not None else 'no'}"
        )  # pragma: no mutate
        if page.continuation is None:
            break
        token = page.continuation

    debug_print(f"Drained {page_count} pages with {len(items)} items")  # pragma: no mutate
    return items


def token_page_fetcher(
    operation: Callable[..., dict],
    items_key: str,
    request_token: str = "NextToken",
    response_token: str = "NextToken",
    **params: Any,
) -> Callable[[Optional[str]], Page]:
    """Build a ``fetch_page`` closure for a boto3 client operation.

    Args:
        operation: Bound client method, e.g. ``client.describe_instances``
        items_key: Response key holding the page items
        request_token: Request parameter that carries the continuation token
        response_token: Response key that holds the next continuation token
        **params: Extra request parameters sent with every page
    """

    def fetch_page(token: Optional[str]) -> Page:
        call_params = dict(params)
        if token is not None:
            call_params[request_token] = token
        response = operation(**call_params)
        return Page(response.get(items_key) or [], response.get(response_token) or None)

    return fetch_page
