"""
Query matching for AWS Search Tool.

A query is a comma separated list of terms. A resource matches when any term
is a substring of any of its candidate fields or of any tag key or tag value.
"""

from typing import Callable, Iterable, List, Optional, Sequence, TypeVar

from .tags import Tag
from .utils import debug_print, split_csv

T = TypeVar("T")


def split_query(query):
    """Split a query into its non-empty terms. Terms are not trimmed."""
    if query is None:
        return []
    return [term for term in query.split(",") if term]


def matches(query: Optional[str], fields: Sequence[str], tags: Iterable[Tag] = ()) -> bool:
    """Check whether a resource matches a comma separated OR query.

    Args:
        query: Query string, or None for "match everything"
        fields: Candidate fields; the first one is the identifying field
        tags: Resource tags, searched by key and by value

    Returns:
        True when the query has no terms, when the identifying field is empty,
        or when any term is contained in a field, a tag key or a tag value.
    """
    terms = split_query(query)
    if not terms:
        return True
    if not fields or not fields[0]:
        # a resource without a name can not be told apart, so it is kept
        return True

    tags = list(tags)
    for term in terms:
        if any(term in field for field in fields if field):
            return True
        for tag in tags:
            if term in tag.key:
                return True
            if tag.value is not None and term in tag.value:
                return True
    return False


def filter_resources(
    resources: List[T],
    query: Optional[str],
    fields_of: Callable[[T], Sequence[str]],
    tags_of: Callable[[T], Iterable[Tag]] = lambda resource: (),
) -> List[T]:
    """Keep the resources matching ``query``, preserving their order"""
    if not split_query(query):
        return resources

    debug_print(f"Applying query terms: {split_query(query)}")  # pragma: no mutate
    filtered = [
        resource
        for resource in resources
        if matches(query, fields_of(resource), tags_of(resource))
    ]
    debug_print(
        f"Found {len(filtered)} resources matching query (out of {len(resources)} total)"
    )  # pragma: no mutate
    return filtered


def filter_exact(
    resources: List[T], names: Optional[str], name_of: Callable[[T], str]
) -> List[T]:
    """Keep resources whose name equals one of the comma separated ``names``"""
    wanted = [name for name in split_csv(names) if name]
    if not wanted:
        return resources
    filtered = [resource for resource in resources if name_of(resource) in wanted]
    debug_print(f"Exact name filter {wanted} kept {len(filtered)} resources")  # pragma: no mutate
    return filtered


def normalize_instance_ids(ids):
    """Expand a comma separated id list, adding the ``i-`` prefix where missing.

    Examples:
        >>> normalize_instance_ids("1234,i-3333")
        ['i-1234', 'i-3333']
    """
    return [term if "i-" in term else f"i-{term}" for term in split_csv(ids) if term]
