"""
Structural resolver for UIDL content trees

Lowers an abstract content tree onto a target using an elements mapping
table. Each node is resolved top-down:

1. Type substitution from the mapping (identity when unmapped)
2. Children template splicing ("$children" token)
3. Dependency inference (node dependency wins, local paths defaulted)
4. Asset prefixing inside style
5. Asset prefixing of url/srcset attributes
6. Attribute merge (node attrs override mapping defaults)
7. Repeat resolution ("$attrs." data sources, content resolved)
8. State branch resolution
9. Child recursion

The order matters: later rules see what earlier ones did to the same node.
Mapping entries are deep-copied when looked up, so one entry can be shared
by every node of its type without templates leaking between nodes.

Example:
    >>> mapping = elementsMapping_fromDict({'link': {'type': 'a',
    ...     'attrs': {'href': '$attrs.url'}}})
    >>> node = node_fromDict({'type': 'link', 'attrs': {'url': '/home'}})
    >>> component_resolve(node, mapping).attrs
    {'href': '/home'}
"""

import copy
from typing import Optional

from ..config import appsettings, AppSettings
from ..models.naming import NodesLookup
from ..models.uidl import ContentNode, ElementMapping, ElementsMapping
from .log import LOG
from .naming import nodesLookup_create, namesAndKeys_generate
from .utils import (
    assetsURL_prefix,
    attributes_merge,
    children_insert,
    dependency_resolve,
    styleAssetURLs_prefix,
)


class Resolver:
    """
    Resolves UIDL content nodes against one elements mapping table

    Responsibilities:
    - Substitute abstract types with target types
    - Apply mapping templates (children, attrs, dependency, repeat)
    - Rewrite local asset references with the assets prefix
    - Recurse into children, repeat content and state branches

    A Resolver holds only read-only configuration and can be reused for
    any number of independent trees.
    """

    def __init__(
        self,
        elements_mapping: ElementsMapping,
        local_dependencies_prefix: Optional[str] = None,
        assets_prefix: Optional[str] = None,
        settings: AppSettings = appsettings,
    ) -> None:
        """
        Initialize resolver

        Args:
            elements_mapping: Abstract type -> ElementMapping table
            local_dependencies_prefix: Prefix for inferred local dependency
                                       paths (default from settings, "./")
            assets_prefix: Prefix for local asset references; no asset
                           rewriting happens without one
            settings: Tokens and whitelists to use
        """
        self.elements_mapping = elements_mapping
        self.settings = settings
        self.local_dependencies_prefix = (
            local_dependencies_prefix
            if local_dependencies_prefix is not None
            else settings.local_dependencies_prefix
        )
        self.assets_prefix = assets_prefix

    def mapping_lookup(self, node_type: str) -> ElementMapping:
        """
        Get a private copy of the mapping entry for a node type

        Returns:
            Deep copy of the entry, or an identity mapping for unmapped types
        """
        mapped_element = self.elements_mapping.get(node_type)
        if mapped_element is None:
            return ElementMapping(type=node_type)
        return copy.deepcopy(mapped_element)

    def node_resolve(self, node: ContentNode) -> ContentNode:
        """
        Resolve a node and all of its descendants in place

        Args:
            node: Node to resolve

        Returns:
            The same node, resolved
        """
        mapped_element = self.mapping_lookup(node.type)
        if mapped_element.type != node.type:
            LOG(f"Mapped '{node.type}' -> '{mapped_element.type}'", level=3)
        node.type = mapped_element.type

        # Mapping children templates wrap the original children
        if mapped_element.children is not None:
            original_children = node.children or []
            original_attrs = node.attrs or {}
            node.children = children_insert(
                mapped_element.children, original_children, original_attrs, self.settings
            )

        if node.dependency or mapped_element.dependency:
            node.dependency = dependency_resolve(
                mapped_element, node.dependency, self.local_dependencies_prefix
            )

        if node.style and self.assets_prefix:
            node.style = styleAssetURLs_prefix(node.style, self.assets_prefix, self.settings)

        if node.attrs and self.assets_prefix:
            for attribute in self.settings.attributes_with_url:
                if node.attrs.get(attribute):
                    node.attrs[attribute] = assetsURL_prefix(
                        self.assets_prefix, node.attrs[attribute], self.settings
                    )

        if mapped_element.attrs is not None:
            node.attrs = attributes_merge(mapped_element.attrs, node.attrs, self.settings)

        self.repeat_resolve(node, mapped_element)
        self.states_resolve(node)

        if node.children:
            node.children = [
                child if isinstance(child, str) else self.node_resolve(child)
                for child in node.children
            ]

        return node

    def repeat_resolve(self, node: ContentNode, mapped_element: ElementMapping) -> None:
        """
        Resolve the repeat structure of a node (node's own wins over mapping)

        A "$attrs.<key>" data source is read from the node's merged attrs;
        a missing attribute leaves the data source None.
        """
        repeat_structure = node.repeat or mapped_element.repeat
        if repeat_structure is None:
            return

        referenced_key = self.settings.attrsReference_extract(repeat_structure.data_source)
        if referenced_key is not None and node.attrs is not None:
            repeat_structure.data_source = node.attrs.get(referenced_key)
            if repeat_structure.data_source is None:
                LOG(f"Repeat data source '$attrs.{referenced_key}' not set on '{node.type}'", level=2)

        repeat_structure.content = self.node_resolve(repeat_structure.content)
        node.repeat = repeat_structure

    def states_resolve(self, node: ContentNode) -> None:
        """Resolve the non-string content of every branch of a state node"""
        if node.type != self.settings.state_type or not node.states:
            return

        for branch in node.states:
            if not isinstance(branch.content, str):
                branch.content = self.node_resolve(branch.content)


def contentNode_resolve(
    node: ContentNode,
    elements_mapping: ElementsMapping,
    local_dependencies_prefix: str = './',
    assets_prefix: Optional[str] = None,
) -> ContentNode:
    """
    Structural resolution of a content tree (no naming)

    Args:
        node: Root node, resolved in place
        elements_mapping: Abstract type -> ElementMapping table
        local_dependencies_prefix: Prefix for inferred local dependency paths
        assets_prefix: Optional prefix for local asset references

    Returns:
        The same node, resolved
    """
    resolver = Resolver(elements_mapping, local_dependencies_prefix, assets_prefix)
    return resolver.node_resolve(node)


def component_resolve(
    node: ContentNode,
    elements_mapping: ElementsMapping,
    local_dependencies_prefix: str = './',
    assets_prefix: Optional[str] = None,
) -> ContentNode:
    """
    Fully resolve the content tree of one component

    Runs structural resolution, then both naming sweeps with a fresh
    NodesLookup, so every node ends up with a unique key.

    Args:
        node: Root content node of the component, resolved in place
        elements_mapping: Abstract type -> ElementMapping table
        local_dependencies_prefix: Prefix for inferred local dependency paths
        assets_prefix: Optional prefix for local asset references

    Returns:
        The same node, resolved and keyed
    """
    contentNode_resolve(node, elements_mapping, local_dependencies_prefix, assets_prefix)

    lookup: NodesLookup = {}
    nodesLookup_create(node, lookup)
    namesAndKeys_generate(node, lookup)
    LOG(f"Named {sum(o.count for o in lookup.values())} nodes ({len(lookup)} distinct names)", level=2)

    return node
