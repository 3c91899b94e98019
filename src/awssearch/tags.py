"""Tag model and tag-to-column projection."""

from typing import Any, Dict, Iterable, List, NamedTuple, Optional

from .utils import debug_print, split_csv


class Tag(NamedTuple):
    """A resource tag: a case-sensitive key with an optional value."""

    key: str
    value: Optional[str] = None


def tags_from_aws(tag_list: Optional[Iterable[Dict[str, Any]]]) -> List[Tag]:
    """Convert an AWS ``[{"Key": ..., "Value": ...}]`` list to Tag objects.

    A missing list yields an empty list; a missing key becomes "" and a
    missing value stays ``None``.
    """
    if not tag_list:
        return []
    return [Tag(item.get("Key") or "", item.get("Value")) for item in tag_list]


def tag_value(tags: Iterable[Tag], key: str) -> str:
    """Return the value of the last tag named ``key``, or "" """
    return project_tags(tags, [key])[0]


def project_tags(tags: Iterable[Tag], keys: List[str]) -> List[str]:
    """Project tags onto an ordered list of tag keys.

    Args:
        tags: Tags of a single resource, in API order
        keys: Requested tag keys; output columns follow this order

    Returns:
        List with one string per requested key. A key that is not present,
        or whose tag has no value, yields "". When a key occurs more than
        once the last occurrence wins.

    Examples:
        >>> project_tags([Tag("Name", "api"), Tag("Env", "staging")], ["Env", "Name"])
        ['staging', 'api']
    """
    result = [""] * len(keys)
    for tag in tags:
        for index, key in enumerate(keys):
            if key == tag.key:
                result[index] = tag.value or ""
    return result


def collect_tag_keys(tag_lists: Iterable[Iterable[Tag]]) -> List[str]:
    """Union of all tag keys in first-seen order, without duplicates"""
    seen = set()
    keys = []
    for tags in tag_lists:
        for tag in tags:
            if tag.key not in seen:
                seen.add(tag.key)
                keys.append(tag.key)
    return keys


def resolve_tag_columns(
    tag_lists: Iterable[Iterable[Tag]],
    tag_columns: Optional[str] = None,
    show_all_tags: bool = False,
) -> List[str]:
    """Decide which tag keys become output columns.

    ``show_all_tags`` wins over an explicit comma separated ``tag_columns``
    list. Keys are case-sensitive and are never sorted.
    """
    if show_all_tags:
        keys = collect_tag_keys(tag_lists)
        debug_print(f"Showing all {len(keys)} tag keys as columns")  # pragma: no mutate
        return keys

    keys = split_csv(tag_columns)
    if keys:
        debug_print(f"Using tag columns: {keys}")  # pragma: no mutate
    return keys
