"""
UIDL content tree and element mapping models

Type-safe structures for the content tree that flows through the resolver,
plus conversion to and from the JSON-like dict shape of a UIDL document.

A node's children (and a state branch's content) are either ContentNode
instances or plain strings (literal text or template tokens such as
"$children"). Every traversal checks isinstance(child, str) before recursing.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union


class UIDLResolveError(Exception):
    """Base class for resolution errors"""
    pass


class MappingError(UIDLResolveError):
    """Raised when an elements mapping entry cannot be used"""
    pass


class NamingError(UIDLResolveError):
    """Raised when the counting and key sweeps walked different trees"""
    pass


@dataclass
class ComponentDependency:
    """
    Import reference required by a node in generated code

    Attributes:
        type: Dependency kind ("local", "package", "library")
        path: Import path; inferred for local dependencies without one
        version: Package version for package/library dependencies
        meta: Extra import metadata (named imports, original names, ...)
    """
    type: str
    path: Optional[str] = None
    version: Optional[str] = None
    meta: Optional[Dict[str, Any]] = None


@dataclass
class RepeatStructure:
    """
    Declares that content is instantiated once per item of data_source

    data_source is a literal list, a "$attrs.<key>" reference before
    resolution, or whatever the referenced attribute held afterwards
    (None when the attribute was absent).
    """
    content: 'ContentNode'
    data_source: Any = None


@dataclass
class StateBranch:
    """One alternative content of a state node"""
    value: Any
    content: Union['ContentNode', str]


@dataclass
class ContentNode:
    """
    A node of the UIDL content tree

    Attributes:
        type: Semantic element kind, rewritten by the element mapping
        name: Human-readable identifier, defaulted from type by the key sweep
        key: Unique-within-component identifier assigned by the key sweep
        attrs: Element attributes (literals or "$attrs." references)
        style: Style properties; nested dicts are conditional style groups
        dependency: Import needed by the element in generated code
        children: Child nodes and literal strings, in order
        repeat: Repeat structure instantiating its content per data item
        states: Branches of a "state" node, selected at runtime
    """
    type: str
    name: Optional[str] = None
    key: Optional[str] = None
    attrs: Optional[Dict[str, Any]] = None
    style: Optional[Dict[str, Any]] = None
    dependency: Optional[ComponentDependency] = None
    children: Optional[List[Union['ContentNode', str]]] = None
    repeat: Optional[RepeatStructure] = None
    states: Optional[List[StateBranch]] = None


@dataclass
class ElementMapping:
    """
    Target-specific substitution template for one abstract node type

    Mirrors the node fields it provides defaults for. The node's own fields
    override or extend these when the mapping is applied.
    """
    type: str
    attrs: Optional[Dict[str, Any]] = None
    children: Optional[List[Union[ContentNode, str]]] = None
    dependency: Optional[ComponentDependency] = None
    repeat: Optional[RepeatStructure] = None


ElementsMapping = Dict[str, ElementMapping]


def dependency_fromDict(data: Dict[str, Any]) -> ComponentDependency:
    """Build a ComponentDependency from its dict form"""
    return ComponentDependency(
        type=data.get('type', ''),
        path=data.get('path'),
        version=data.get('version'),
        meta=data.get('meta'),
    )


def repeat_fromDict(data: Dict[str, Any]) -> RepeatStructure:
    """Build a RepeatStructure from its dict form (camelCase dataSource)"""
    return RepeatStructure(
        content=node_fromDict(data['content']),
        data_source=data.get('dataSource'),
    )


def children_fromList(items: List[Any]) -> List[Union[ContentNode, str]]:
    """Convert a children list, keeping string entries as they are"""
    return [item if isinstance(item, str) else node_fromDict(item) for item in items]


def node_fromDict(data: Dict[str, Any]) -> ContentNode:
    """
    Build a ContentNode tree from the JSON-like UIDL shape

    Conversion is structural only: absent fields stay None and unknown
    keys are ignored.

    Args:
        data: Node dict (e.g. parsed from a UIDL JSON file)

    Returns:
        ContentNode with all nested nodes converted
    """
    node = ContentNode(
        type=data['type'],
        name=data.get('name'),
        key=data.get('key'),
        attrs=data.get('attrs'),
        style=data.get('style'),
    )

    if data.get('dependency') is not None:
        node.dependency = dependency_fromDict(data['dependency'])

    if data.get('children') is not None:
        node.children = children_fromList(data['children'])

    if data.get('repeat') is not None:
        node.repeat = repeat_fromDict(data['repeat'])

    if data.get('states') is not None:
        node.states = [
            StateBranch(
                value=branch.get('value'),
                content=branch['content'] if isinstance(branch['content'], str)
                else node_fromDict(branch['content']),
            )
            for branch in data['states']
        ]

    return node


def dependency_toDict(dependency: ComponentDependency) -> Dict[str, Any]:
    result: Dict[str, Any] = {'type': dependency.type}
    if dependency.path is not None:
        result['path'] = dependency.path
    if dependency.version is not None:
        result['version'] = dependency.version
    if dependency.meta is not None:
        result['meta'] = dependency.meta
    return result


def node_toDict(node: ContentNode) -> Dict[str, Any]:
    """
    Convert a ContentNode tree back to the JSON-like UIDL shape

    Fields that are None are omitted, so a node round-trips to the same
    keys it was built from (plus name/key once the naming pass ran).
    """
    result: Dict[str, Any] = {'type': node.type}

    for field_name in ('name', 'key', 'attrs', 'style'):
        value = getattr(node, field_name)
        if value is not None:
            result[field_name] = value

    if node.dependency is not None:
        result['dependency'] = dependency_toDict(node.dependency)

    if node.children is not None:
        result['children'] = [
            child if isinstance(child, str) else node_toDict(child)
            for child in node.children
        ]

    if node.repeat is not None:
        result['repeat'] = {
            'dataSource': node.repeat.data_source,
            'content': node_toDict(node.repeat.content),
        }

    if node.states is not None:
        result['states'] = [
            {
                'value': branch.value,
                'content': branch.content if isinstance(branch.content, str)
                else node_toDict(branch.content),
            }
            for branch in node.states
        ]

    return result


def elementsMapping_fromDict(data: Dict[str, Any]) -> ElementsMapping:
    """
    Build an elements mapping table from a plain mapping

    Args:
        data: Abstract type -> mapping entry dict (as loaded from JSON/YAML)

    Returns:
        ElementsMapping table keyed by abstract type

    Raises:
        MappingError: If an entry is not a dict or has no target type
    """
    table: ElementsMapping = {}

    for abstract_type, entry in data.items():
        if not isinstance(entry, dict) or not entry.get('type'):
            raise MappingError(
                f"Mapping entry '{abstract_type}' must declare a target 'type'"
            )

        mapping = ElementMapping(type=entry['type'], attrs=entry.get('attrs'))
        if entry.get('children') is not None:
            mapping.children = children_fromList(entry['children'])
        if entry.get('dependency') is not None:
            mapping.dependency = dependency_fromDict(entry['dependency'])
        if entry.get('repeat') is not None:
            mapping.repeat = repeat_fromDict(entry['repeat'])

        table[abstract_type] = mapping

    return table
