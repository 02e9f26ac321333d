"""
uidlresolve - UIDL lowering pass

Resolves abstract, framework-agnostic UIDL content trees against a target
elements mapping, producing trees ready for code emission.
"""

__version__ = "1.0.0"

from .lib import Resolver, contentNode_resolve, component_resolve, LOG, state_connectToLogger
from .models import ContentNode, ElementMapping, node_fromDict, node_toDict, elementsMapping_fromDict

__all__ = [
    "Resolver",
    "contentNode_resolve",
    "component_resolve",
    "ContentNode",
    "ElementMapping",
    "node_fromDict",
    "node_toDict",
    "elementsMapping_fromDict",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
