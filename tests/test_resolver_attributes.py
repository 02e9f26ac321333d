"""
Attribute merge tests

Tests precedence between mapping attributes and UIDL attributes, and the
$attrs. indirection used to rename UIDL attributes for a target.
"""

import pytest

from uidlresolve.config import AppSettings
from uidlresolve.lib.resolver import contentNode_resolve
from uidlresolve.lib.utils import attributes_merge
from uidlresolve.models.uidl import elementsMapping_fromDict, node_fromDict


class TestAttributesMerge:
    """Test the two-phase merge"""

    def test_reference_renames_attribute(self):
        """$attrs.url is written as href and url is not emitted"""
        merged = attributes_merge(
            {'href': '$attrs.url', 'target': '_blank'},
            {'url': 'https://x'},
        )
        assert merged == {'href': 'https://x', 'target': '_blank'}

    def test_uidl_overrides_mapping(self):
        """UIDL attributes win over mapping defaults"""
        merged = attributes_merge({'type': 'button'}, {'type': 'submit'})
        assert merged == {'type': 'submit'}

    def test_unmatched_reference_dropped(self):
        """A reference is only written when the UIDL supplies the attribute"""
        merged = attributes_merge({'href': '$attrs.url', 'rel': 'noopener'}, {'title': 'Home'})
        assert merged == {'rel': 'noopener', 'title': 'Home'}

    def test_falsy_mapping_values_skipped(self):
        """Empty and false mapping values are not written"""
        merged = attributes_merge({'disabled': False, 'role': '', 'tabIndex': 0}, {})
        assert merged == {}

    def test_uidl_attrs_none(self):
        """Missing UIDL attrs leave the literal mapping attributes"""
        merged = attributes_merge({'href': '$attrs.url', 'target': '_blank'}, None)
        assert merged == {'target': '_blank'}

    def test_uidl_order_after_mapping(self):
        """Mapping attributes come first, then UIDL attributes"""
        merged = attributes_merge({'class': 'btn'}, {'id': 'save', 'class': 'btn-primary'})
        assert list(merged) == ['class', 'id']
        assert merged['class'] == 'btn-primary'

    def test_reference_to_same_name(self):
        """An attribute referencing its own name is kept once"""
        merged = attributes_merge({'value': '$attrs.value'}, {'value': 42})
        assert merged == {'value': 42}

    def test_custom_reference_prefix(self):
        """Reference prefix comes from settings"""
        settings = AppSettings(attrs_reference_prefix='@')
        merged = attributes_merge({'href': '@url'}, {'url': '/home'}, settings)
        assert merged == {'href': '/home'}


class TestMergeInResolver:
    """Test attribute merging as part of node resolution"""

    @pytest.fixture
    def mapping(self):
        return elementsMapping_fromDict({
            'link': {'type': 'a', 'attrs': {'href': '$attrs.url', 'target': '_blank'}},
            'image': {'type': 'img', 'attrs': {'src': '$attrs.url'}},
        })

    def test_link_mapped(self, mapping):
        """Link url becomes href on the anchor"""
        node = node_fromDict({'type': 'link', 'attrs': {'url': 'https://x'}, 'children': ['Go']})
        contentNode_resolve(node, mapping)

        assert node.type == 'a'
        assert node.attrs == {'href': 'https://x', 'target': '_blank'}
        assert node.children == ['Go']

    def test_prefixed_url_then_merged(self, mapping):
        """Asset prefixing happens before the attribute merge"""
        node = node_fromDict({'type': 'image', 'attrs': {'url': '/playground_assets/logo.png'}})
        contentNode_resolve(node, mapping, assets_prefix='https://cdn.example.com')

        assert node.attrs == {'src': 'https://cdn.example.com/playground_assets/logo.png'}

    def test_no_mapping_attrs_keeps_node_attrs(self):
        """Without mapping attrs the node attrs are left as they are"""
        attrs = {'alt': 'logo'}
        node = node_fromDict({'type': 'picture', 'attrs': attrs})
        contentNode_resolve(node, {})
        assert node.attrs is attrs
