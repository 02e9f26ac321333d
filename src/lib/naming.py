"""
Naming pass: unique node keys within a component

Runs after structural resolution, over the final shape of the tree, in two
sweeps sharing one NodesLookup:

1. nodesLookup_create: counts how many nodes share each name
2. namesAndKeys_generate: defaults names and assigns keys

Both sweeps walk the same shape: a state node is not counted or keyed
itself, only its non-string branch contents are visited; every other node is
visited, then its non-string children, then its repeat content.

Example:
    >>> lookup = {}
    >>> nodesLookup_create(root, lookup)
    >>> namesAndKeys_generate(root, lookup)

    Three "container" nodes get keys "container", "container1", "container2".
    Twelve get "container", "container01", ... "container11", because the
    padding width is decided by the final count before any key is handed out.
"""

from typing import Iterator

from ..config import appsettings, AppSettings
from ..models.naming import NodeOccurrence, NodesLookup
from ..models.uidl import ContentNode, NamingError
from .log import LOG


def powerOfTen_is(value: int) -> bool:
    """Check if value is 1, 10, 100, 1000, ..."""
    while value > 9 and value % 10 == 0:
        value //= 10
    return value == 1


def incrementalStringKey_compute(current_key: str) -> str:
    """
    Increment a zero-padded decimal key, keeping its width

    Example:
        >>> incrementalStringKey_compute('07')
        '08'
        >>> incrementalStringKey_compute('9')
        '10'
    """
    return str(int(current_key) + 1).rjust(len(current_key), '0')


def nodes_walk(node: ContentNode, settings: AppSettings = appsettings) -> Iterator[ContentNode]:
    """
    Yield the nodes taking part in the naming scope, in pre-order

    Uses the traversal of both naming sweeps, so it can be used to collect
    the keys of a resolved component.
    """
    if node.type == settings.state_type and node.states:
        for branch in node.states:
            if not isinstance(branch.content, str):
                yield from nodes_walk(branch.content, settings)
        return

    yield node

    for child in node.children or []:
        if not isinstance(child, str):
            yield from nodes_walk(child, settings)

    if node.repeat is not None:
        yield from nodes_walk(node.repeat.content, settings)


def nodesLookup_create(
    node: ContentNode, lookup: NodesLookup, settings: AppSettings = appsettings
) -> None:
    """
    Counting sweep: record how many nodes share each name

    The effective name is node.name, or node.type when unnamed. Each time a
    name's count reaches a power of ten (10, 100, ...) a '0' is prepended to
    its nextKey, so suffixes handed out later are one digit wider.

    Args:
        node: Root of the resolved component tree
        lookup: NodesLookup to populate (fresh per component)
        settings: Settings providing the state node type
    """
    for visited in nodes_walk(node, settings):
        node_name = visited.name or visited.type
        occurrence = lookup.setdefault(node_name, NodeOccurrence())

        occurrence.count += 1
        if occurrence.count > 9 and powerOfTen_is(occurrence.count):
            occurrence.nextKey = '0' + occurrence.nextKey


def namesAndKeys_generate(
    node: ContentNode, lookup: NodesLookup, settings: AppSettings = appsettings
) -> None:
    """
    Key sweep: default node names and assign unique keys

    A name used once keeps its bare name as key. Otherwise the first node
    with that name (nextKey numerically 0) gets the bare name and each
    later one gets name + nextKey, with nextKey incremented after use.

    Args:
        node: Root of the same tree passed to nodesLookup_create
        lookup: NodesLookup populated by nodesLookup_create
        settings: Settings providing the state node type

    Raises:
        NamingError: If a node name was never counted, i.e. the tree
                     changed between the two sweeps
    """
    for visited in nodes_walk(node, settings):
        if not visited.name:
            visited.name = visited.type

        occurrence = lookup.get(visited.name)
        if occurrence is None:
            raise NamingError(
                f"Node name '{visited.name}' missing from nodes lookup; "
                f"the tree changed after the counting sweep"
            )

        if occurrence.count == 1:
            visited.key = visited.name
        else:
            current_key = occurrence.nextKey
            first_occurrence = int(current_key) == 0
            visited.key = visited.name if first_occurrence else visited.name + current_key
            occurrence.nextKey = incrementalStringKey_compute(current_key)

        LOG(f"Key '{visited.key}' assigned to '{visited.type}'", level=3)
