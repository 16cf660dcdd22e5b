"""Href calculation — combine hrefs into one, for a given routing universe.

``calculate_href`` is what ``Location.navigate`` uses to turn a path (or a
few path pieces) into the href that actually gets pushed:

- path routing: ``/path?query#fragment``
- single-hash routing: ``?query#/path``
- multi-hash routing: ``?query#<every universe, with this one rewritten>``
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx

from wren.context import get_location
from wren.errors import InvalidHref
from wren.hashing import compose_multi_hash
from wren.query import PreserveQuery, merge_query_params
from wren.universes import Hash, resolve_hash_value

if TYPE_CHECKING:
    from wren.location import Location

_HREF_RE = re.compile(r"^(?P<path>[^#?]*)(?:\?(?P<query>[^#]*))?(?:#(?P<fragment>.*))?$", re.DOTALL)


@dataclass(frozen=True, slots=True)
class DissectedHrefs:
    """Parts of several hrefs, index-aligned with the input."""

    paths: tuple[str, ...]
    search_params: tuple[str, ...]
    hashes: tuple[str, ...]


def dissect_hrefs(*hrefs: str | None) -> DissectedHrefs:
    """Split each ``path?query#fragment`` href into its parts.

    Falsy hrefs produce empty strings for every part.
    """
    paths: list[str] = []
    search_params: list[str] = []
    hashes: list[str] = []
    for href in hrefs:
        match = _HREF_RE.match(href) if href else None
        if match is None:
            paths.append("")
            search_params.append("")
            hashes.append("")
            continue
        paths.append(match["path"] or "")
        search_params.append(match["query"] or "")
        hashes.append(match["fragment"] or "")
    return DissectedHrefs(tuple(paths), tuple(search_params), tuple(hashes))


def join_paths(*paths: str | None) -> str:
    """Join path pieces with single slashes.

    The result starts with ``/`` when the first non-empty piece does, and
    never ends with one (except the root itself).

    Examples::

        >>> join_paths("/a/", "/b", "c/")
        '/a/b/c'
        >>> join_paths("a", "", "b")
        'a/b'
    """
    leading = next((p.startswith("/") for p in paths if p), False)
    result = "/" if leading else ""
    for index, path in enumerate(paths):
        trimmed = (path or "").removeprefix("/").removesuffix("/")
        if trimmed and result and not result.endswith("/"):
            result += "/"
        result += trimmed
    if result != "/" and result.endswith("/"):
        result = result[:-1]
    return result


def calculate_href(
    *hrefs: str | None,
    hash: Hash = None,  # noqa: A002
    preserve_query: PreserveQuery = False,
    preserve_hash: bool = False,
    location: Location | None = None,
) -> str:
    """Combine *hrefs* into a single href for the *hash* routing universe.

    Query strings carried by the hrefs are concatenated, then merged with
    the preserved parameters of the current URL. Fragments in *hrefs* are
    only allowed for path routing; the first non-empty one wins, else the
    current fragment when *preserve_hash* is set.

    Raises ``InvalidHref`` for a fragment under hash routing.
    """
    loc = location if location is not None else get_location()
    resolved = resolve_hash_value(hash, loc.options)
    dissected = dissect_hrefs(*hrefs)
    if resolved is not False and any(dissected.hashes):
        msg = "Specifying hashes in hrefs is only allowed for path routing."
        raise InvalidHref(msg)

    joined_query = "&".join(q for q in dissected.search_params if q)
    search_params = httpx.QueryParams(joined_query) if joined_query else None
    search_params = merge_query_params(search_params, preserve_query, current=loc.url)

    path = join_paths(*dissected.paths)
    if isinstance(resolved, str):
        path = compose_multi_hash(loc.hash_paths, resolved, path)

    if resolved is False:
        fragment = next((h for h in dissected.hashes if h), "")
        if not fragment and preserve_hash:
            fragment = loc.location_state.hash
    else:
        fragment = path

    href = "" if resolved else path
    if search_params:
        href += f"?{search_params}"
    if fragment:
        href += f"#{fragment}"
    return href
