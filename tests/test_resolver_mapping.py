"""
Structural resolver tests - element mapping application

Tests type substitution, identity fallback, children templates, dependency
inference, repeat structures and state branches.
"""

import pytest

from uidlresolve.lib.resolver import Resolver, contentNode_resolve
from uidlresolve.models.uidl import ContentNode, elementsMapping_fromDict, node_fromDict


@pytest.fixture
def html_mapping():
    """A small HTML-like elements mapping"""
    return elementsMapping_fromDict({
        'container': {'type': 'div'},
        'text': {'type': 'span'},
        'link': {'type': 'a', 'attrs': {'href': '$attrs.url'}},
        'card': {
            'type': 'div',
            'attrs': {'class': 'card'},
            'children': [{'type': 'header', 'children': ['$children']}, 'footer-text'],
        },
        'button': {'type': 'Button', 'dependency': {'type': 'local'}},
        'dropdown': {
            'type': 'select',
            'repeat': {'dataSource': '$attrs.options', 'content': {'type': 'option'}},
        },
    })


class TestTypeSubstitution:
    """Test mapping lookup and identity fallback"""

    def test_mapped_type(self, html_mapping):
        """Mapped type replaces the abstract type"""
        node = node_fromDict({'type': 'container'})
        contentNode_resolve(node, html_mapping)
        assert node.type == 'div'

    def test_unmapped_type_is_identity(self):
        """Unknown types keep type, attrs and children"""
        node = node_fromDict({
            'type': 'custom-widget',
            'attrs': {'size': 3},
            'children': ['hello', {'type': 'other'}],
        })
        contentNode_resolve(node, {})

        assert node.type == 'custom-widget'
        assert node.attrs == {'size': 3}
        assert node.children[0] == 'hello'
        assert node.children[1].type == 'other'

    def test_returns_same_node(self, html_mapping):
        """Resolution mutates and returns the node it was given"""
        node = node_fromDict({'type': 'text'})
        assert contentNode_resolve(node, html_mapping) is node

    def test_nested_children_resolved(self, html_mapping):
        """Descendants are resolved, strings kept in place"""
        node = node_fromDict({
            'type': 'container',
            'children': [
                'before',
                {'type': 'container', 'children': [{'type': 'text', 'children': ['deep']}]},
                'after',
            ],
        })
        contentNode_resolve(node, html_mapping)

        assert node.children[0] == 'before'
        assert node.children[2] == 'after'
        inner = node.children[1]
        assert inner.type == 'div'
        assert inner.children[0].type == 'span'
        assert inner.children[0].children == ['deep']


class TestChildrenTemplates:
    """Test mapping children templates wrapping the original children"""

    def test_template_wraps_children(self, html_mapping):
        """$children inside a template node receives the original children"""
        node = node_fromDict({'type': 'card', 'children': ['A', {'type': 'text'}]})
        contentNode_resolve(node, html_mapping)

        assert node.type == 'div'
        assert len(node.children) == 2
        header = node.children[0]
        assert header.type == 'header'
        assert header.children[0] == 'A'
        assert header.children[1].type == 'span'
        assert node.children[1] == 'footer-text'

    def test_template_not_shared_between_nodes(self, html_mapping):
        """Each node gets its own copy of the template"""
        first = node_fromDict({'type': 'card', 'children': ['first']})
        second = node_fromDict({'type': 'card', 'children': ['second']})
        contentNode_resolve(first, html_mapping)
        contentNode_resolve(second, html_mapping)

        assert first.children[0] is not second.children[0]
        assert first.children[0].children == ['first']
        assert second.children[0].children == ['second']

    def test_mapping_table_untouched(self, html_mapping):
        """The mapping entry still holds the $children token afterwards"""
        node = node_fromDict({'type': 'card', 'children': ['content']})
        contentNode_resolve(node, html_mapping)

        template = html_mapping['card'].children
        assert template[0].children == ['$children']
        assert template[0].type == 'header'

    def test_mapping_attrs_merged(self, html_mapping):
        """Template mapping attrs are merged with the node attrs"""
        node = node_fromDict({'type': 'card', 'attrs': {'id': 'main'}})
        contentNode_resolve(node, html_mapping)
        assert node.attrs == {'class': 'card', 'id': 'main'}


class TestDependencies:
    """Test dependency priority and local path inference"""

    def test_local_dependency_path_inferred(self, html_mapping):
        """Local dependency without path gets prefix + mapped type"""
        node = node_fromDict({'type': 'button'})
        contentNode_resolve(node, html_mapping)

        assert node.dependency.type == 'local'
        assert node.dependency.path == './Button'

    def test_custom_local_prefix(self, html_mapping):
        """The local dependencies prefix is configurable"""
        node = node_fromDict({'type': 'button'})
        contentNode_resolve(node, html_mapping, local_dependencies_prefix='../components/')
        assert node.dependency.path == '../components/Button'

    def test_node_dependency_wins(self, html_mapping):
        """Dependency declared on the node overrides the mapping"""
        node = node_fromDict({
            'type': 'button',
            'dependency': {'type': 'package', 'path': 'antd', 'version': '4.0.0'},
        })
        contentNode_resolve(node, html_mapping)

        assert node.dependency.type == 'package'
        assert node.dependency.path == 'antd'
        assert node.dependency.version == '4.0.0'

    def test_explicit_local_path_kept(self):
        """Local dependency with a path is not rewritten"""
        node = node_fromDict({
            'type': 'Avatar',
            'dependency': {'type': 'local', 'path': './shared/Avatar'},
        })
        contentNode_resolve(node, {})
        assert node.dependency.path == './shared/Avatar'

    def test_mapping_dependency_not_mutated(self, html_mapping):
        """Inferring a path does not write into the mapping table"""
        contentNode_resolve(node_fromDict({'type': 'button'}), html_mapping)
        assert html_mapping['button'].dependency.path is None

    def test_no_dependency(self, html_mapping):
        """Nodes without any dependency stay without one"""
        node = node_fromDict({'type': 'text'})
        contentNode_resolve(node, html_mapping)
        assert node.dependency is None


class TestRepeat:
    """Test repeat structure resolution"""

    def test_repeat_content_resolved(self, html_mapping):
        """Repeat content goes through the same mapping as children"""
        node = node_fromDict({
            'type': 'container',
            'repeat': {'dataSource': [1, 2, 3], 'content': {'type': 'text'}},
        })
        contentNode_resolve(node, html_mapping)

        assert node.repeat.data_source == [1, 2, 3]
        assert node.repeat.content.type == 'span'

    def test_mapping_repeat_reads_attribute(self, html_mapping):
        """$attrs data source is read from the node attributes"""
        node = node_fromDict({'type': 'dropdown', 'attrs': {'options': ['a', 'b']}})
        contentNode_resolve(node, html_mapping)

        assert node.type == 'select'
        assert node.repeat.data_source == ['a', 'b']
        assert node.repeat.content.type == 'option'

    def test_missing_referenced_attribute(self, html_mapping):
        """A missing referenced attribute resolves to None"""
        node = node_fromDict({'type': 'dropdown', 'attrs': {'name': 'size'}})
        contentNode_resolve(node, html_mapping)
        assert node.repeat.data_source is None

    def test_node_repeat_wins(self, html_mapping):
        """The node repeat is used instead of the mapping repeat"""
        node = node_fromDict({
            'type': 'dropdown',
            'repeat': {'dataSource': ['x'], 'content': {'type': 'text'}},
        })
        contentNode_resolve(node, html_mapping)

        assert node.repeat.data_source == ['x']
        assert node.repeat.content.type == 'span'

    def test_mapping_repeat_not_mutated(self, html_mapping):
        """The mapping repeat template keeps its reference"""
        node = node_fromDict({'type': 'dropdown', 'attrs': {'options': ['a']}})
        contentNode_resolve(node, html_mapping)
        assert html_mapping['dropdown'].repeat.data_source == '$attrs.options'


class TestStates:
    """Test state branch resolution"""

    def test_state_branches_resolved(self, html_mapping):
        """Node branches are resolved, string branches kept"""
        node = node_fromDict({
            'type': 'state',
            'states': [
                {'value': True, 'content': {'type': 'text', 'children': ['on']}},
                {'value': False, 'content': 'fallback'},
            ],
        })
        contentNode_resolve(node, html_mapping)

        assert node.states[0].value is True
        assert node.states[0].content.type == 'span'
        assert node.states[1].content == 'fallback'

    def test_states_on_other_types_ignored(self, html_mapping):
        """States are only resolved on state nodes"""
        node = ContentNode(type='container')
        node.states = node_fromDict({
            'type': 'state', 'states': [{'value': 1, 'content': {'type': 'text'}}],
        }).states
        contentNode_resolve(node, html_mapping)
        assert node.states[0].content.type == 'text'


class TestResolverReuse:
    """Test one Resolver instance across independent trees"""

    def test_resolver_reused(self, html_mapping):
        """Resolver holds no per-tree state"""
        resolver = Resolver(html_mapping)
        first = resolver.node_resolve(node_fromDict({'type': 'card', 'children': ['1']}))
        second = resolver.node_resolve(node_fromDict({'type': 'card', 'children': ['2']}))

        assert first.children[0].children == ['1']
        assert second.children[0].children == ['2']
        assert resolver.local_dependencies_prefix == './'
