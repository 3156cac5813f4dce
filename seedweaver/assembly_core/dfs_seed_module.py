#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SeedWeaver v0.1.0

DFS Seed Engine — runs seed expansion, link filtering and bubble
collapsing in sequence and reports the organelle subgraph.

Author: SeedWeaver Development Team
License: MIT - See LICENSE
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional
import logging

import numpy as np

from .data_structures import AssemblyGraph, InducedLink, SeedSet
from .link_filter_module import LinkFilter
from .seed_expansion_module import ExpansionResult, ProgressCallback, SeedExpander
from ..assembly_utils.graph_cleanup import BubbleCollapser, CollapseResult
from ..config.schema import SeedGraphConfig
from ..errors import NonConvergenceError, UnknownContigError

logger = logging.getLogger(__name__)


@dataclass
class SeedGraphResult:
    """
    Result of the full seed pipeline.

    When expansion did not converge, ``links`` is empty and ``collapse`` is
    None; ``seeds`` then holds the partial expansion.

    Attributes:
        seeds: Final seed set
        links: Final induced link set
        expansion: Seed expansion result
        collapse: Bubble collapse result (None if expansion failed)
        stats: Summary statistics
    """
    seeds: SeedSet
    links: List[InducedLink] = field(default_factory=list)
    expansion: Optional[ExpansionResult] = None
    collapse: Optional[CollapseResult] = None
    stats: Dict[str, Any] = field(default_factory=dict)

    @property
    def converged(self) -> bool:
        return self.expansion is not None and self.expansion.converged

    def raise_for_status(self):
        """Raise NonConvergenceError if expansion did not reach a fixpoint."""
        if not self.converged:
            rounds = self.expansion.num_rounds if self.expansion else 0
            reason = self.expansion.status.value if self.expansion else "not_run"
            raise NonConvergenceError(rounds, len(self.seeds), reason)


class DFSSeedEngine:
    """
    Seed expansion and graph simplification engine.

    Stages:
    - SeedExpander: grow seeds to a fixpoint over strong links
    - LinkFilter: keep seed-to-seed links above the retention threshold
    - BubbleCollapser: remove short redundant bridge contigs
    """

    def __init__(
        self,
        config: Optional[SeedGraphConfig] = None,
        progress: Optional[ProgressCallback] = None
    ):
        """
        Initialize engine.

        Args:
            config: Thresholds (defaults to SeedGraphConfig())
            progress: Optional callback for link-scan progress
        """
        self.config = config or SeedGraphConfig()
        self.expander = SeedExpander(
            filter_depth=self.config.filter_depth,
            growth_link_ratio=self.config.growth_link_ratio,
            max_rounds=self.config.max_expansion_rounds,
            deadline_seconds=self.config.deadline_seconds,
            nucl_depth=self.config.nucl_depth,
            progress=progress
        )
        self.link_filter = LinkFilter(
            retention_link_ratio=self.config.retention_link_ratio,
            invalid_orientation=self.config.invalid_orientation
        )
        self.collapser = BubbleCollapser(bubble_max_length=self.config.bubble_max_length)
        self.logger = logging.getLogger(f"{__name__}.DFSSeedEngine")

    def prepare_seeds(self, graph: AssemblyGraph, initial_seeds: Iterable[int]) -> SeedSet:
        """
        Validate initial seed ids and build the seed set.

        Raises:
            UnknownContigError: If a seed id is not in the contig table
        """
        seeds = SeedSet()
        for contig_id in initial_seeds:
            if contig_id not in graph.contigs:
                raise UnknownContigError(contig_id, "initial seed")
            if not seeds.add(contig_id):
                self.logger.warning(f"Duplicate initial seed {contig_id} ignored")
        return seeds

    def run(self, graph: AssemblyGraph, initial_seeds: Iterable[int]) -> SeedGraphResult:
        """
        Run expansion, filtering and collapsing.

        Args:
            graph: Contig-overlap graph
            initial_seeds: Contig ids carrying marker genes

        Returns:
            SeedGraphResult; check ``converged`` before using the subgraph
        """
        self.logger.info("=" * 60)
        self.logger.info("DFS seed algorithm starts...")
        self.logger.info("=" * 60)

        seeds = self.prepare_seeds(graph, initial_seeds)
        result = SeedGraphResult(
            seeds=seeds,
            stats={
                'contigs': len(graph.contigs),
                'links': len(graph.links),
                'initial_seeds': len(seeds)
            }
        )
        if not seeds:
            self.logger.warning("No initial seeds supplied; nothing to expand")

        result.expansion = self.expander.expand(graph, seeds)
        result.stats['expansion_rounds'] = result.expansion.num_rounds
        result.stats['expanded_seeds'] = len(seeds)

        if not result.expansion.converged:
            result.stats['status'] = result.expansion.status.value
            self.logger.error("DFS seed algorithm ends abnormally.")
            return result

        induced = self.link_filter.filter(graph, seeds)
        result.stats['induced_links'] = len(induced)

        result.collapse = self.collapser.collapse(graph, seeds, induced)
        result.links = result.collapse.links

        result.stats['status'] = result.expansion.status.value
        result.stats['bubbles_removed'] = len(result.collapse.bubbles)
        result.stats['final_seeds'] = len(seeds)
        result.stats['final_links'] = len(result.links)
        result.stats.update(self._seed_summary(graph, seeds))

        self.logger.info(
            f"DFS seed algorithm ends: {result.stats['final_seeds']} seeds, "
            f"{result.stats['final_links']} links"
        )
        return result

    def _seed_summary(self, graph: AssemblyGraph, seeds: SeedSet) -> Dict[str, float]:
        if not seeds:
            return {'total_length': 0, 'mean_depth': 0.0}
        offsets = np.array(seeds.to_list(), dtype=np.int64) - 1
        return {
            'total_length': int(graph.contigs.lengths[offsets].sum()),
            'mean_depth': float(graph.contigs.depths[offsets].mean())
        }


def dfs_seeds(
    graph: AssemblyGraph,
    initial_seeds: Iterable[int],
    filter_depth: float = 2.0,
    nucl_depth: Optional[float] = None,
    strict: bool = False,
    progress: Optional[ProgressCallback] = None
) -> SeedGraphResult:
    """
    Convenience function for the full seed pipeline.

    Args:
        graph: Contig-overlap graph
        initial_seeds: Contig ids carrying marker genes
        filter_depth: Minimum contig depth (exclusive)
        nucl_depth: Accepted for compatibility; not used
        strict: Raise NonConvergenceError instead of returning a failed result
        progress: Optional link-scan progress callback

    Returns:
        SeedGraphResult
    """
    engine = DFSSeedEngine(
        SeedGraphConfig(filter_depth=filter_depth, nucl_depth=nucl_depth),
        progress=progress
    )
    result = engine.run(graph, initial_seeds)
    if strict:
        result.raise_for_status()
    return result

# SeedWeaver v0.1.0
# Any usage is subject to this software's license.
