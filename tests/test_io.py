#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SeedWeaver v0.1.0

Tests for graph table input and result export.

Author: SeedWeaver Development Team
License: MIT - See LICENSE
"""

import json

import pytest

from seedweaver.assembly_core.data_structures import ContigEnd, InducedLink, SeedSet
from seedweaver.assembly_core.dfs_seed_module import DFSSeedEngine
from seedweaver.errors import GraphFormatError, UnknownContigError
from seedweaver.io_utils.assembly_export import (
    GFALink,
    GFASegment,
    export_results,
    link_orientations,
)
from seedweaver.io_utils.user_input import load_assembly_graph, load_seed_file, parse_seed_ids


# ============================================================================
# Graph table input
# ============================================================================

class TestLoadAssemblyGraph:
    """Test reading the contig graph table."""

    def test_load_bubble_graph(self, bubble_graph_file):
        graph = load_assembly_graph(bubble_graph_file)

        assert len(graph.contigs) == 3
        assert graph.contigs[2].name == "ctg2"
        assert graph.contigs[2].length == 30
        assert graph.contigs[2].depth == 10.0
        assert len(graph.links) == 3
        assert graph.links[0].left_end == "3'"
        assert graph.links[0].link_depth == 8.0

    def test_reading_stops_after_link_block(self, temp_output_dir):
        path = temp_output_dir / "graph.tsv"
        path.write_text(
            "1\tctg1\t1000\t10\n"
            "2\tctg2\t1000\t10\n"
            "C\t1\t3'\t2\t5'\t8\n"
            "P\tpath records follow\n"
            "C\t2\t3'\t1\t5'\t8\n"
        )
        graph = load_assembly_graph(path)

        assert len(graph.links) == 1

    def test_comments_and_blank_lines(self, temp_output_dir):
        path = temp_output_dir / "graph.tsv"
        path.write_text(
            "# contigs\n"
            "1\tctg1\t1000\t10\n"
            "\n"
            "C\t1\t3'\t1\t5'\t8\n"
        )
        graph = load_assembly_graph(path)

        assert len(graph.contigs) == 1
        assert len(graph.links) == 1

    def test_short_contig_line(self, temp_output_dir):
        path = temp_output_dir / "graph.tsv"
        path.write_text("1\tctg1\t1000\n")

        with pytest.raises(GraphFormatError, match=r"graph.tsv:1"):
            load_assembly_graph(path)

    def test_bad_link_depth(self, temp_output_dir):
        path = temp_output_dir / "graph.tsv"
        path.write_text("1\tctg1\t1000\t10\nC\t1\t3'\t1\t5'\tdeep\n")

        with pytest.raises(GraphFormatError, match=r"graph.tsv:2"):
            load_assembly_graph(path)

    def test_link_to_missing_contig(self, temp_output_dir):
        path = temp_output_dir / "graph.tsv"
        path.write_text("1\tctg1\t1000\t10\nC\t1\t3'\t7\t5'\t8\n")

        with pytest.raises(UnknownContigError):
            load_assembly_graph(path)

    def test_missing_file(self, temp_output_dir):
        with pytest.raises(FileNotFoundError):
            load_assembly_graph(temp_output_dir / "missing.tsv")


class TestSeedInput:
    """Test initial seed parsing."""

    @pytest.mark.parametrize("text,expected", [
        ("1", [1]),
        ("3, 7,12", [3, 7, 12]),
        ("4 5\t6", [4, 5, 6]),
        ("", []),
    ])
    def test_parse_seed_ids(self, text, expected):
        assert parse_seed_ids(text) == expected

    def test_parse_seed_ids_rejects_names(self):
        with pytest.raises(GraphFormatError):
            parse_seed_ids("1,ctg2")

    def test_load_seed_file(self, bubble_graph, temp_output_dir):
        path = temp_output_dir / "seeds.txt"
        path.write_text("# marker gene hits\n1\nctg3  # by name\n\n")

        assert load_seed_file(path, bubble_graph.contigs) == [1, 3]

    def test_load_seed_file_unknown_name(self, bubble_graph, temp_output_dir):
        path = temp_output_dir / "seeds.txt"
        path.write_text("ctg9\n")

        with pytest.raises(UnknownContigError):
            load_seed_file(path, bubble_graph.contigs)


# ============================================================================
# Export
# ============================================================================

class TestGFARecords:
    """Test GFA record formatting."""

    def test_segment_line(self):
        seg = GFASegment(name="ctg1", length=1000, depth=10.5)
        assert seg.to_gfa_line() == "S\tctg1\t*\tLN:i:1000\tdp:f:10.5"

    def test_link_line(self):
        link = GFALink(from_name="ctg1", from_orient="+", to_name="ctg3", to_orient="-", depth=8.0)
        assert link.to_gfa_line() == "L\tctg1\t+\tctg3\t-\t0M\tdp:f:8"

    @pytest.mark.parametrize("left_end,right_end,expected", [
        (ContigEnd.THREE_PRIME, ContigEnd.FIVE_PRIME, ('+', '+')),
        (ContigEnd.FIVE_PRIME, ContigEnd.THREE_PRIME, ('-', '-')),
        (ContigEnd.THREE_PRIME, ContigEnd.THREE_PRIME, ('+', '-')),
        (ContigEnd.THREE_PRIME, None, None),
    ])
    def test_link_orientations(self, left_end, right_end, expected):
        link = InducedLink(1, left_end, 2, right_end, 100, 100, 5.0)
        assert link_orientations(link) == expected


class TestExportResults:
    """Test writing the full result set."""

    def test_export_bubble_result(self, bubble_graph, temp_output_dir):
        result = DFSSeedEngine().run(bubble_graph, [1])
        outputs = export_results(
            bubble_graph, result.seeds, result.links, result.stats, temp_output_dir / "out"
        )

        assert set(outputs) == {'seeds', 'links', 'gfa', 'summary'}
        for path in outputs.values():
            assert path.exists()

        seed_rows = outputs['seeds'].read_text().splitlines()
        assert seed_rows[0] == "id\tname\tlength\tdepth\tscore"
        assert [row.split('\t')[0] for row in seed_rows[1:]] == ["1", "3"]

        link_rows = outputs['links'].read_text().splitlines()
        assert link_rows[1] == "1\t3'\t1000\t3\t5'\t1000\t8"

        gfa = outputs['gfa'].read_text()
        assert gfa.startswith("H\tVN:Z:1.0\n")
        assert "L\tctg1\t+\tctg3\t+\t0M" in gfa
        assert "ctg2" not in gfa

        summary = json.loads(outputs['summary'].read_text())
        assert summary['final_seeds'] == 2
        assert summary['bubbles_removed'] == 1

    def test_skip_gfa(self, bubble_graph, temp_output_dir):
        outputs = export_results(bubble_graph, SeedSet([1]), [], {}, temp_output_dir, write_gfa=False)

        assert 'gfa' not in outputs
        assert not (temp_output_dir / "dfs_subgraph.gfa").exists()

    def test_unknown_end_written_as_placeholder(self, bubble_graph, temp_output_dir):
        link = InducedLink(1, ContigEnd.THREE_PRIME, 3, None, 1000, 1000, 8.0)
        outputs = export_results(bubble_graph, SeedSet([1, 3]), [link], {}, temp_output_dir)

        assert "3\t?\t1000" in outputs['links'].read_text()
        assert "\nL\t" not in outputs['gfa'].read_text()

# SeedWeaver v0.1.0
# Any usage is subject to this software's license.
