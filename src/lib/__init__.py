"""
uidlresolve - UIDL lowering pass

Resolves abstract UIDL content trees against target elements mappings.
"""

__version__ = "1.0.0"

from .resolver import Resolver, contentNode_resolve, component_resolve
from .naming import nodesLookup_create, namesAndKeys_generate
from .log import LOG, state_connectToLogger

__all__ = [
    "Resolver",
    "contentNode_resolve",
    "component_resolve",
    "nodesLookup_create",
    "namesAndKeys_generate",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
