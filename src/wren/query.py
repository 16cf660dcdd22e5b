"""Query-string preservation across navigations.

Two entry points share one selection policy:

- ``preserve_query_in_url`` works on a full URL string.
- ``merge_query_params`` works on a parameter collection.

Policy (``preserve_query``):

- ``False``: nothing is carried over.
- ``True``: every key of the current query string.
- ``"key"``: only that key (all of its repeated values).
- ``["a", "b"]``: exactly those keys.

Values are appended, never overwritten, so repeated keys accumulate.
"""

from collections.abc import Iterable, Sequence
from typing import TypeAlias

import httpx

from wren.context import get_location

PreserveQuery: TypeAlias = bool | str | Sequence[str]


def _current_url(current: httpx.URL | str | None) -> httpx.URL:
    if current is None:
        return get_location().url
    return httpx.URL(current)


def _selected_keys(preserve_query: PreserveQuery, params: httpx.QueryParams) -> Iterable[str]:
    if preserve_query is True:
        return list(params.keys())
    if isinstance(preserve_query, str):
        return (preserve_query,)
    return preserve_query


def _transfer(
    target: httpx.QueryParams,
    source: httpx.QueryParams,
    keys: Iterable[str],
) -> httpx.QueryParams:
    for key in keys:
        for value in source.get_list(key):
            target = target.add(key, value)
    return target


def origin_of(url: httpx.URL) -> str:
    """``scheme://host[:port]`` of *url*."""
    return f"{url.scheme}://{url.netloc.decode('ascii')}"


def preserve_query_in_url(
    url: str,
    preserve_query: PreserveQuery,
    current: httpx.URL | str | None = None,
) -> str:
    """Copy query parameters from the current URL into *url*.

    *url* is resolved against the current origin, so the result is always
    absolute. When nothing needs preserving *url* comes back unchanged.

    *current* defaults to the active location's URL.

    Example::

        >>> preserve_query_in_url(
        ...     "https://x/new", ["existing"],
        ...     current="https://x/base?existing=value&another=param",
        ... )
        'https://x/new?existing=value'
    """
    if not preserve_query:
        return url
    current_url = _current_url(current)
    current_params = current_url.params
    if not current_params:
        return url

    target = httpx.URL(origin_of(current_url)).join(url)
    params = _transfer(target.params, current_params, _selected_keys(preserve_query, current_params))
    return str(target.copy_with(params=params))


def merge_query_params(
    existing: httpx.QueryParams | None,
    preserve_query: PreserveQuery,
    current: httpx.URL | str | None = None,
) -> httpx.QueryParams | None:
    """Merge preserved query parameters into *existing*.

    Returns *existing* untouched when nothing needs preserving. With no
    *existing* collection and ``preserve_query=True`` the current URL's own
    collection is returned as is.
    """
    if not preserve_query:
        return existing
    current_url = _current_url(current)
    current_params = current_url.params
    if not current_params:
        return existing

    if existing is None and preserve_query is True:
        return current_params

    merged = existing if existing is not None else httpx.QueryParams()
    return _transfer(merged, current_params, _selected_keys(preserve_query, current_params))
