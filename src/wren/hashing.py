"""Hash-fragment wire format for routing universes.

Single mode treats the whole fragment as one path. Multi mode multiplexes
several universes into one fragment::

    #main=/users/42;sidebar=/help

Ids and paths are percent-encoded on the way in, so a ``;`` or ``=`` inside
a path never splits a segment, and percent-decoded on the way out.
Segments without an id or without a path are dropped on parse.
"""

from collections.abc import Mapping
from urllib.parse import quote, unquote

from wren.config import HashMode
from wren.universes import SINGLE_HASH_KEY

SEGMENT_SEPARATOR = ";"
ID_SEPARATOR = "="

# Everything the fragment allows literally, minus the two separators.
_SEGMENT_SAFE = "/?:@!$&'()*+,~"


def escape_segment_part(value: str) -> str:
    """Percent-encode an id or path for use inside a multi-hash segment."""
    return quote(value, safe=_SEGMENT_SAFE)


def unescape_segment_part(value: str) -> str:
    return unquote(value)


def parse_hash_paths(fragment: str, hash_mode: HashMode) -> dict[str, str]:
    """Split a raw fragment (no leading ``#``) into universe id -> path.

    Examples::

        >>> parse_hash_paths("/a/b", "single")
        {'single': '/a/b'}
        >>> parse_hash_paths("x=/one;broken;=/two;y=", "multi")
        {'x': '/one'}
    """
    if hash_mode == "single":
        return {SINGLE_HASH_KEY: fragment}
    result: dict[str, str] = {}
    for raw in fragment.split(SEGMENT_SEPARATOR):
        hash_id, _, path = raw.partition(ID_SEPARATOR)
        if not hash_id or not path:
            continue
        result[unescape_segment_part(hash_id)] = unescape_segment_part(path)
    return result


def compose_multi_hash(current_paths: Mapping[str, str], hash_id: str, new_path: str) -> str:
    """Build a multi-hash fragment with *hash_id* pointing at *new_path*.

    Existing universes keep their order and paths; *hash_id* is rewritten in
    place or appended when absent. The result has no leading ``#``.
    """
    segments: list[str] = []
    found = False
    for existing_id, path in current_paths.items():
        if existing_id == hash_id:
            found = True
            path = new_path
        segments.append(_segment(existing_id, path))
    if not found:
        segments.append(_segment(hash_id, new_path))
    return SEGMENT_SEPARATOR.join(segments)


def _segment(hash_id: str, path: str) -> str:
    return f"{escape_segment_part(hash_id)}{ID_SEPARATOR}{escape_segment_part(path)}"
