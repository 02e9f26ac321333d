"""
Leaf utilities of the structural resolver

Asset-URL prefixing, attribute merging, dependency inference and children
splicing. Each helper works on plain values and reads its tokens/whitelists
from AppSettings, so they can be used outside a Resolver as well.
"""

from typing import Any, Dict, List, Optional, Union

from ..config import appsettings, AppSettings
from ..models.uidl import ComponentDependency, ContentNode, ElementMapping
from .log import LOG


def assetsURL_prefix(
    prefix: str, value: Any, settings: AppSettings = appsettings
) -> Any:
    """
    Prefix a local asset reference with the assets prefix

    Only strings starting with the asset marker are rewritten; anything
    else is returned unchanged.

    Args:
        prefix: Assets prefix (e.g., "https://cdn.example.com")
        value: Attribute or style fragment to rewrite
        settings: Settings providing the asset marker

    Returns:
        Prefixed string, or value unchanged

    Example:
        >>> assetsURL_prefix('https://cdn.io', '/playground_assets/a.png')
        'https://cdn.io/playground_assets/a.png'
    """
    if not isinstance(value, str) or not value.startswith(settings.assets_identifier):
        return value

    if value.startswith('/'):
        return prefix + value

    return f"{prefix}/{value}"


def styleAssetURLs_prefix(
    style: Dict[str, Any], assets_prefix: str, settings: AppSettings = appsettings
) -> Dict[str, Any]:
    """
    Prefix every asset reference inside a style definition

    Nested dicts (media queries, pseudo-states) are walked recursively.
    Only whitelisted properties are checked; numbers and other values pass
    through. Everything before the asset marker is kept, the rest is
    prefixed, so "url(/playground_assets/a.png)" keeps its "url(" wrapper.

    Args:
        style: Style definition of a node
        assets_prefix: Assets prefix to apply
        settings: Settings providing marker and property whitelist

    Returns:
        New style dict with rewritten values
    """
    result: Dict[str, Any] = {}

    for style_key, style_value in style.items():
        if isinstance(style_value, dict):
            result[style_key] = styleAssetURLs_prefix(style_value, assets_prefix, settings)
            continue

        if (
            isinstance(style_value, str)
            and style_key in settings.style_properties_with_url
            and settings.assets_identifier in style_value
        ):
            start_index = style_value.index(settings.assets_identifier)
            result[style_key] = style_value[:start_index] + assetsURL_prefix(
                assets_prefix, style_value[start_index:], settings
            )
        else:
            result[style_key] = style_value

    return result


def attributes_merge(
    mapped_attrs: Dict[str, Any],
    uidl_attrs: Optional[Dict[str, Any]],
    settings: AppSettings = appsettings,
) -> Dict[str, Any]:
    """
    Merge mapping attributes with the attributes of the UIDL node

    Phase 1 copies the mapping attributes. A "$attrs.<key>" value is an
    alias: it is written under the mapping name only when the UIDL node
    supplies <key>, and <key> itself is then not emitted again. Falsy
    mapping values are skipped.

    Phase 2 copies the UIDL attributes that were not aliased, overriding
    anything with the same name from phase 1.

    Args:
        mapped_attrs: Attributes from the elements mapping entry
        uidl_attrs: Attributes of the UIDL node (may be None)
        settings: Settings providing the reference prefix

    Returns:
        Merged attribute dict

    Example:
        >>> attributes_merge({'href': '$attrs.url', 'target': '_blank'},
        ...                  {'url': 'https://x'})
        {'href': 'https://x', 'target': '_blank'}
    """
    resolved_attrs: Dict[str, Any] = {}
    consumed_keys: List[str] = []

    for key, value in mapped_attrs.items():
        if not value:
            continue

        referenced_key = settings.attrsReference_extract(value)
        if referenced_key is not None:
            # References are only written when the UIDL supplies them
            if uidl_attrs and uidl_attrs.get(referenced_key):
                resolved_attrs[key] = uidl_attrs[referenced_key]
                consumed_keys.append(referenced_key)
            continue

        resolved_attrs[key] = value

    if uidl_attrs:
        for key, value in uidl_attrs.items():
            if key not in consumed_keys:
                resolved_attrs[key] = value

    return resolved_attrs


def dependency_resolve(
    mapped_element: ElementMapping,
    uidl_dependency: Optional[ComponentDependency],
    local_dependencies_prefix: str = './',
) -> Optional[ComponentDependency]:
    """
    Pick the dependency of a node, inferring local import paths

    The UIDL dependency has priority over the mapping one. A local
    dependency without a path is assumed to live next to the component,
    at local_dependencies_prefix + the mapped type.

    Args:
        mapped_element: Mapping entry applied to the node (already cloned)
        uidl_dependency: Dependency declared on the node itself
        local_dependencies_prefix: Prefix for inferred local paths

    Returns:
        The resolved dependency, or None if neither side declares one
    """
    node_dependency = uidl_dependency or mapped_element.dependency

    if node_dependency is not None and node_dependency.type == 'local':
        if not node_dependency.path:
            node_dependency.path = local_dependencies_prefix + mapped_element.type
            LOG(f"Inferred local dependency path '{node_dependency.path}'", level=3)

    return node_dependency


def children_insert(
    template_children: List[Union[ContentNode, str]],
    original_children: List[Union[ContentNode, str]],
    original_attrs: Dict[str, Any],
    settings: AppSettings = appsettings,
) -> List[Union[ContentNode, str]]:
    """
    Splice the original children of a node into a mapping children template

    Every "$children" token is replaced, in place, by all original children.
    Other strings are kept; template nodes have their own children spliced
    the same way. The template must be a clone: nested template nodes are
    modified in place.

    Args:
        template_children: Cloned children template of the mapping entry
        original_children: Children of the UIDL node before mapping
        original_attrs: Attributes of the UIDL node before mapping
        settings: Settings providing the children token

    Returns:
        Spliced children list

    Example:
        >>> children_insert(['prefix-text', '$children', 'suffix-text'], ['A', 'B'], {})
        ['prefix-text', 'A', 'B', 'suffix-text']
    """
    # TODO: resolve "$attrs." references inside template node attrs from original_attrs
    result: List[Union[ContentNode, str]] = []

    for child in template_children:
        if isinstance(child, str):
            if child == settings.children_token:
                result.extend(original_children)
            else:
                result.append(child)
            continue

        if child.children:
            child.children = children_insert(
                child.children, original_children, original_attrs, settings
            )
        result.append(child)

    return result
