"""
SeedWeaver v0.1.0

Input/output: contig graph tables, seed lists and result export.

Author: SeedWeaver Development Team
License: MIT - See LICENSE
"""

from .user_input import load_assembly_graph, load_seed_file, parse_seed_ids
from .assembly_export import (
    export_results,
    export_subgraph_gfa,
    export_summary_json,
    write_links_tsv,
    write_seeds_tsv,
)

__all__ = [
    "load_assembly_graph",
    "load_seed_file",
    "parse_seed_ids",
    "export_results",
    "export_subgraph_gfa",
    "export_summary_json",
    "write_links_tsv",
    "write_seeds_tsv",
]
