#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SeedWeaver v0.1.0

Assembly Export — seed table, induced link table, GFA subgraph and
summary JSON for the organelle seed graph.

Author: SeedWeaver Development Team
License: MIT - See LICENSE
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..assembly_core.data_structures import AssemblyGraph, ContigEnd, InducedLink, SeedSet

logger = logging.getLogger(__name__)

SEEDS_FILENAME = "dfs_seeds.tsv"
LINKS_FILENAME = "dfs_links.tsv"
GFA_FILENAME = "dfs_subgraph.gfa"
SUMMARY_FILENAME = "dfs_summary.json"


# ============================================================================
#                           TABLES
# ============================================================================

def write_seeds_tsv(graph: AssemblyGraph, seeds: SeedSet, output_path: str | Path) -> Path:
    """Write one row per seed: id, name, length, depth, score."""
    output_path = Path(output_path)
    with open(output_path, 'w') as f:
        f.write("id\tname\tlength\tdepth\tscore\n")
        for contig_id in seeds:
            contig = graph.contigs[contig_id]
            f.write(
                f"{contig.id}\t{contig.name}\t{contig.length}\t"
                f"{contig.depth:g}\t{contig.score:.4f}\n"
            )
    logger.info(f"Wrote {len(seeds)} seeds to {output_path}")
    return output_path


def _end_label(end: ContigEnd | None) -> str:
    return str(end) if end is not None else "?"


def write_links_tsv(links: list[InducedLink], output_path: str | Path) -> Path:
    """Write the induced link set with normalized end tags."""
    output_path = Path(output_path)
    with open(output_path, 'w') as f:
        f.write("left_id\tleft_end\tleft_length\tright_id\tright_end\tright_length\tlink_depth\n")
        for link in links:
            f.write(
                f"{link.left_id}\t{_end_label(link.left_end)}\t{link.left_length}\t"
                f"{link.right_id}\t{_end_label(link.right_end)}\t{link.right_length}\t"
                f"{link.link_depth:g}\n"
            )
    logger.info(f"Wrote {len(links)} links to {output_path}")
    return output_path


# ============================================================================
#                       GFA EXPORT FUNCTIONS
# ============================================================================

@dataclass
class GFASegment:
    """Represents a GFA S-line without sequence."""
    name: str
    length: int
    depth: float

    def to_gfa_line(self) -> str:
        """
        Format: S <name> * LN:i:<length> dp:f:<depth>
        """
        return f"S\t{self.name}\t*\tLN:i:{self.length}\tdp:f:{self.depth:g}"


@dataclass
class GFALink:
    """Represents a GFA L-line (link/edge)."""
    from_name: str
    from_orient: str  # '+' or '-'
    to_name: str
    to_orient: str    # '+' or '-'
    depth: float

    def to_gfa_line(self) -> str:
        """
        Format: L <from> <from_orient> <to> <to_orient> 0M dp:f:<depth>
        """
        return (
            f"L\t{self.from_name}\t{self.from_orient}\t{self.to_name}\t{self.to_orient}"
            f"\t0M\tdp:f:{self.depth:g}"
        )


def link_orientations(link: InducedLink) -> tuple[str, str] | None:
    """
    GFA orientations for an induced link.

    Leaving the left contig through its 3' end reads it forward; entering
    the right contig through its 5' end reads it forward.
    """
    if link.left_end is None or link.right_end is None:
        return None
    from_orient = '+' if link.left_end is ContigEnd.THREE_PRIME else '-'
    to_orient = '+' if link.right_end is ContigEnd.FIVE_PRIME else '-'
    return from_orient, to_orient


def export_subgraph_gfa(
    graph: AssemblyGraph,
    seeds: SeedSet,
    links: list[InducedLink],
    output_path: str | Path
) -> Path:
    """
    Export the seed subgraph as GFA v1 with placeholder sequences.

    Links whose end tags were not recognized cannot be oriented and are
    left out with a warning.
    """
    output_path = Path(output_path)
    logger.info(f"Exporting seed subgraph to GFA: {output_path}")

    segments = [
        GFASegment(name=graph.contigs[cid].name, length=graph.contigs[cid].length,
                   depth=graph.contigs[cid].depth)
        for cid in seeds
    ]

    gfa_links: list[GFALink] = []
    for link in links:
        orientations = link_orientations(link)
        if orientations is None:
            logger.warning(f"Link {link.left_id}-{link.right_id} has no usable end tags; not exported")
            continue
        gfa_links.append(GFALink(
            from_name=graph.contigs[link.left_id].name,
            from_orient=orientations[0],
            to_name=graph.contigs[link.right_id].name,
            to_orient=orientations[1],
            depth=link.link_depth
        ))

    with open(output_path, 'w') as f:
        f.write("H\tVN:Z:1.0\n")
        for seg in segments:
            f.write(seg.to_gfa_line() + "\n")
        for gfa_link in gfa_links:
            f.write(gfa_link.to_gfa_line() + "\n")

    logger.info(f"  Segments: {len(segments)}")
    logger.info(f"  Links: {len(gfa_links)}")
    return output_path


# ============================================================================
#                           SUMMARY
# ============================================================================

def export_summary_json(stats: dict[str, Any], output_path: str | Path) -> Path:
    output_path = Path(output_path)
    with open(output_path, 'w') as f:
        json.dump(stats, f, indent=2)
    return output_path


def export_results(
    graph: AssemblyGraph,
    seeds: SeedSet,
    links: list[InducedLink],
    stats: dict[str, Any],
    output_dir: str | Path,
    write_gfa: bool = True
) -> dict[str, Path]:
    """
    Write all result files into ``output_dir``.

    Returns:
        Mapping of output kind ('seeds', 'links', 'gfa', 'summary') to path
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    outputs = {
        'seeds': write_seeds_tsv(graph, seeds, output_dir / SEEDS_FILENAME),
        'links': write_links_tsv(links, output_dir / LINKS_FILENAME),
    }
    if write_gfa:
        outputs['gfa'] = export_subgraph_gfa(graph, seeds, links, output_dir / GFA_FILENAME)
    outputs['summary'] = export_summary_json(stats, output_dir / SUMMARY_FILENAME)
    return outputs

# SeedWeaver v0.1.0
# Any usage is subject to this software's license.
