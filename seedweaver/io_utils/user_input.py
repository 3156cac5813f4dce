#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SeedWeaver v0.1.0

User Input — read the tab-separated contig graph table and initial seed
lists.

Author: SeedWeaver Development Team
License: MIT - See LICENSE
"""

from __future__ import annotations
import logging
from pathlib import Path

from ..assembly_core.data_structures import AssemblyGraph, Contig, ContigLink, ContigTable
from ..errors import GraphFormatError

logger = logging.getLogger(__name__)

LINK_RECORD = 'C'


# ============================================================================
#                           GRAPH TABLE
# ============================================================================

def _parse_contig(fields: list[str], where: str) -> Contig:
    """Contig line: id, name, length, depth."""
    if len(fields) < 4:
        raise GraphFormatError(f"{where}: contig line needs 4 columns, found {len(fields)}")
    try:
        return Contig(
            id=int(fields[0]),
            name=fields[1],
            length=int(fields[2]),
            depth=float(fields[3])
        )
    except ValueError as e:
        raise GraphFormatError(f"{where}: bad contig line: {e}") from e


def _parse_link(fields: list[str], where: str) -> ContigLink:
    """Link line: C, left id, left end, right id, right end, link depth."""
    if len(fields) < 6:
        raise GraphFormatError(f"{where}: link line needs 6 columns, found {len(fields)}")
    try:
        return ContigLink(
            left_id=int(fields[1]),
            left_end=fields[2],
            right_id=int(fields[3]),
            right_end=fields[4],
            link_depth=float(fields[5])
        )
    except ValueError as e:
        raise GraphFormatError(f"{where}: bad link line: {e}") from e


def load_assembly_graph(graph_path: str | Path) -> AssemblyGraph:
    """
    Load a contig graph table.

    The table starts with one contig per line
    (``id<TAB>name<TAB>length<TAB>depth``) followed by a block of link lines
    (``C<TAB>left_id<TAB>left_end<TAB>right_id<TAB>right_end<TAB>depth``).
    Reading stops at the first non-link line after the link block. Blank
    lines and ``#`` comments are ignored.

    Args:
        graph_path: Path to the graph table

    Returns:
        AssemblyGraph

    Raises:
        FileNotFoundError: If the file does not exist
        GraphFormatError: If a line cannot be parsed
    """
    graph_path = Path(graph_path)
    if not graph_path.exists():
        raise FileNotFoundError(f"Graph file not found: {graph_path}")

    logger.info(f"Loading contig graph: {graph_path}")

    contigs: list[Contig] = []
    links: list[ContigLink] = []
    in_links = False

    with open(graph_path, 'r') as f:
        for line_number, line in enumerate(f, start=1):
            line = line.rstrip('\r\n')
            if not line.strip() or line.startswith('#'):
                continue

            where = f"{graph_path}:{line_number}"
            fields = line.split('\t')

            if fields[0] == LINK_RECORD:
                links.append(_parse_link(fields, where))
                in_links = True
            elif in_links:
                logger.debug(f"{where}: end of link block")
                break
            else:
                contigs.append(_parse_contig(fields, where))

    graph = AssemblyGraph(contigs=ContigTable(contigs), links=links)

    logger.info(f"  Contigs: {len(graph.contigs)}")
    logger.info(f"  Links: {len(graph.links)}")
    return graph


# ============================================================================
#                           SEED LISTS
# ============================================================================

def parse_seed_ids(text: str) -> list[int]:
    """
    Parse a comma- or whitespace-separated list of contig ids.

    Example:
        >>> parse_seed_ids("3, 7,12")
        [3, 7, 12]
    """
    tokens = text.replace(',', ' ').split()
    try:
        return [int(token) for token in tokens]
    except ValueError as e:
        raise GraphFormatError(f"Seed ids must be integers: {text!r}") from e


def load_seed_file(seed_path: str | Path, contigs: ContigTable) -> list[int]:
    """
    Read initial seeds, one per line, as contig ids or contig names.

    Args:
        seed_path: Path to the seed list
        contigs: Contig table used to resolve names

    Returns:
        Seed contig ids in file order
    """
    seed_path = Path(seed_path)
    seeds = []

    with open(seed_path, 'r') as f:
        for line in f:
            token = line.split('#', 1)[0].strip()
            if not token:
                continue
            if token.isdigit():
                seeds.append(int(token))
            else:
                seeds.append(contigs.find_by_name(token).id)

    logger.info(f"Loaded {len(seeds)} initial seeds from {seed_path}")
    return seeds

# SeedWeaver v0.1.0
# Any usage is subject to this software's license.
