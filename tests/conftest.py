#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SeedWeaver v0.1.0

Pytest configuration and shared fixtures.

Author: SeedWeaver Development Team
License: MIT - See LICENSE
"""

import logging
import pytest
from pathlib import Path
import tempfile
import shutil

from seedweaver.assembly_core.data_structures import AssemblyGraph, Contig, ContigLink


def _build_graph(contigs, links):
    """
    Build an AssemblyGraph from compact tuples.

    contigs: list of (id, length, depth); names are 'ctg<id>'
    links: list of (left_id, left_end, right_id, right_end, link_depth)
    """
    return AssemblyGraph.from_records(
        [Contig(id=cid, name=f"ctg{cid}", length=length, depth=depth)
         for cid, length, depth in contigs],
        [ContigLink(*link) for link in links]
    )


def _build_chain_graph(n, depth=10.0, link_depth=8.0):
    """Linear chain 1 -> 2 -> ... -> n of long contigs."""
    contigs = [(cid, 1000, depth) for cid in range(1, n + 1)]
    links = [(cid, "3'", cid + 1, "5'", link_depth) for cid in range(1, n)]
    return _build_graph(contigs, links)


_BUBBLE_GRAPH_TABLE = (
    "1\tctg1\t1000\t10\n"
    "2\tctg2\t30\t10\n"
    "3\tctg3\t1000\t10\n"
    "C\t1\t3'\t2\t5'\t8\n"
    "C\t2\t3'\t3\t5'\t8\n"
    "C\t1\t3'\t3\t5'\t8\n"
)


@pytest.fixture
def make_graph():
    """Factory: make_graph([(id, length, depth), ...], [(l, lend, r, rend, depth), ...])."""
    return _build_graph


@pytest.fixture
def make_chain_graph():
    """Factory: make_chain_graph(n, depth=10.0, link_depth=8.0)."""
    return _build_chain_graph


@pytest.fixture
def bubble_graph_table():
    """Bubble graph as graph-table text."""
    return _BUBBLE_GRAPH_TABLE


@pytest.fixture
def temp_output_dir():
    """Create temporary output directory for tests."""
    temp_dir = tempfile.mkdtemp(prefix="seedweaver_test_")
    yield Path(temp_dir)
    # Cleanup after test
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def bubble_graph():
    """
    Three contigs where the 30 bp contig 2 bridges 1 and 3, which are
    also linked directly:

        ctg1 (3') ──> (5') ctg2 (3') ──> (5') ctg3
        ctg1 (3') ─────────────────────> (5') ctg3
    """
    return _build_graph(
        [(1, 1000, 10.0), (2, 30, 10.0), (3, 1000, 10.0)],
        [
            (1, "3'", 2, "5'", 8.0),
            (2, "3'", 3, "5'", 8.0),
            (1, "3'", 3, "5'", 8.0),
        ]
    )


@pytest.fixture
def nested_bubble_graph():
    """
    Bubble graph with a second short contig 4 bridging 1 and 2.

    Contig 2 has two 5' neighbors until contig 4 is removed, so the two
    bubbles collapse in consecutive rounds.
    """
    return _build_graph(
        [(1, 1000, 10.0), (2, 30, 10.0), (3, 1000, 10.0), (4, 20, 10.0)],
        [
            (1, "3'", 2, "5'", 8.0),
            (2, "3'", 3, "5'", 8.0),
            (1, "3'", 3, "5'", 8.0),
            (1, "3'", 4, "5'", 8.0),
            (4, "3'", 2, "5'", 8.0),
        ]
    )


@pytest.fixture
def bubble_graph_file(temp_output_dir):
    """Bubble graph written as a graph table."""
    path = temp_output_dir / "all_graph.tsv"
    path.write_text(_BUBBLE_GRAPH_TABLE)
    return path


@pytest.fixture
def reset_logging():
    """Drop root handlers installed by CLI runs."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

# SeedWeaver v0.1.0
# Any usage is subject to this software's license.
