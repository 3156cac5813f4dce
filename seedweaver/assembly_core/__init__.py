"""
SeedWeaver v0.1.0

Assembly core: contig graph data structures, seed expansion and link
filtering. The DFS seed engine lives in dfs_seed_module.

Author: SeedWeaver Development Team
License: MIT - See LICENSE
"""

from .data_structures import (
    AdjacencyEntry,
    AssemblyGraph,
    Contig,
    ContigEnd,
    ContigLink,
    ContigTable,
    InducedLink,
    SeedSet,
)
from .seed_expansion_module import (
    ExpansionResult,
    ExpansionRound,
    ExpansionStatus,
    SeedExpander,
    expand_seeds,
)
from .link_filter_module import LinkFilter

__all__ = [
    # Data structures
    "AdjacencyEntry",
    "AssemblyGraph",
    "Contig",
    "ContigEnd",
    "ContigLink",
    "ContigTable",
    "InducedLink",
    "SeedSet",
    # Seed expansion
    "ExpansionResult",
    "ExpansionRound",
    "ExpansionStatus",
    "SeedExpander",
    "expand_seeds",
    # Link filtering
    "LinkFilter",
]
