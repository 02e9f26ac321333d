"""
Models package for uidlresolve

Contains data structures and type definitions for the resolution pipeline.
"""

from .state import ProgramState, pipeline
from .naming import NodeOccurrence, NodesLookup
from .uidl import (
    ComponentDependency,
    ContentNode,
    ElementMapping,
    ElementsMapping,
    MappingError,
    NamingError,
    RepeatStructure,
    StateBranch,
    UIDLResolveError,
    elementsMapping_fromDict,
    node_fromDict,
    node_toDict,
)

__all__ = [
    "ProgramState",
    "pipeline",
    "NodeOccurrence",
    "NodesLookup",
    "ComponentDependency",
    "ContentNode",
    "ElementMapping",
    "ElementsMapping",
    "MappingError",
    "NamingError",
    "RepeatStructure",
    "StateBranch",
    "UIDLResolveError",
    "elementsMapping_fromDict",
    "node_fromDict",
    "node_toDict",
]
