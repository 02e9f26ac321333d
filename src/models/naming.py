"""
Naming pass data models

Per-component bookkeeping shared between the counting sweep and the key
sweep of the naming pass.
"""

from dataclasses import dataclass
from typing import Dict


@dataclass
class NodeOccurrence:
    """
    Occurrences of one node name inside a component

    Attributes:
        count: Number of nodes sharing the name (final after counting sweep)
        nextKey: Zero-padded decimal suffix handed to the next node with
                 this name during the key sweep

    Example:
        A name used 12 times ends the counting sweep as
        NodeOccurrence(count=12, nextKey="00"); the key sweep then hands
        out "", "01", "02", ... "11".
    """
    count: int = 0
    nextKey: str = "0"


# Node name -> occurrences. Build a fresh one per component resolution.
NodesLookup = Dict[str, NodeOccurrence]
