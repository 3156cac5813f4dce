#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SeedWeaver v0.1.0

Seed Expansion — grows the seed set along strong overlap links until it
reaches a fixpoint.

A link is strong when both endpoint contigs are deeper than the filter depth
and the link itself carries more than a fixed fraction of the shallower
endpoint's depth. Each round scans every link once and admits the unseeded
endpoint of any strong link with exactly one seeded endpoint.

Author: SeedWeaver Development Team
License: MIT - See LICENSE
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Set
import logging
import time

import numpy as np

from .data_structures import AssemblyGraph, SeedSet

logger = logging.getLogger(__name__)

# progress(scanned_links, total_links)
ProgressCallback = Callable[[int, int], None]

# Number of progress ticks reported per link scan
PROGRESS_TICKS = 36


class ExpansionStatus(Enum):
    """Terminal state of a seed expansion run."""
    FIXED = "fixed"
    ROUND_CAP = "round_cap"
    DEADLINE = "deadline"


@dataclass
class ExpansionRound:
    """Growth statistics for one expansion round."""
    round_number: int
    seeds_before: int
    seeds_after: int
    elapsed_seconds: float

    @property
    def admitted(self) -> int:
        return self.seeds_after - self.seeds_before


@dataclass
class ExpansionResult:
    """
    Result of seed expansion.

    Attributes:
        seeds: Seed set after the last round
        status: FIXED on convergence, otherwise why expansion stopped
        rounds: Per-round growth statistics
        nucl_depth: Nucleotide depth supplied by the caller (unused)
    """
    seeds: SeedSet
    status: ExpansionStatus
    rounds: List[ExpansionRound] = field(default_factory=list)
    nucl_depth: Optional[float] = None

    @property
    def converged(self) -> bool:
        return self.status is ExpansionStatus.FIXED

    @property
    def num_rounds(self) -> int:
        return len(self.rounds)


class SeedExpander:
    """
    Grow a seed set to a fixpoint over the strong links of a contig graph.

    Contigs admitted during a round only act as growth sources from the next
    round on, so a chain of N contigs grows by one contig per round.
    """

    def __init__(
        self,
        filter_depth: float = 2.0,
        growth_link_ratio: float = 0.5,
        max_rounds: int = 100,
        deadline_seconds: Optional[float] = None,
        nucl_depth: Optional[float] = None,
        progress: Optional[ProgressCallback] = None
    ):
        """
        Initialize seed expander.

        Args:
            filter_depth: Contigs must be strictly deeper than this
            growth_link_ratio: Link depth must exceed this fraction of the
                shallower endpoint's depth
            max_rounds: Rounds allowed before reporting non-convergence
            deadline_seconds: Optional wall-clock budget for all rounds
            nucl_depth: Accepted for pipeline compatibility; not used
            progress: Optional callback invoked during each link scan
        """
        self.filter_depth = filter_depth
        self.growth_link_ratio = growth_link_ratio
        self.max_rounds = max_rounds
        self.deadline_seconds = deadline_seconds
        self.nucl_depth = nucl_depth
        self.progress = progress
        self.logger = logging.getLogger(f"{__name__}.SeedExpander")

    def strong_link_mask(self, graph: AssemblyGraph) -> np.ndarray:
        """Boolean mask over graph.links marking links that may admit seeds."""
        if not graph.links:
            return np.zeros(0, dtype=bool)
        left, right, link_depth = graph.link_arrays()
        depths = graph.contigs.depths
        left_depth = depths[left]
        right_depth = depths[right]
        return (
            (left_depth > self.filter_depth)
            & (right_depth > self.filter_depth)
            & (link_depth > self.growth_link_ratio * np.minimum(left_depth, right_depth))
        )

    def expand(self, graph: AssemblyGraph, seeds: SeedSet) -> ExpansionResult:
        """
        Grow ``seeds`` in place until a round admits no new contig.

        Args:
            graph: Contig-overlap graph
            seeds: Initial seeds; extended in place

        Returns:
            ExpansionResult; ``converged`` is False if the round cap or the
            deadline was hit first
        """
        self.logger.info("Seed expansion starts...")
        if self.nucl_depth is not None:
            self.logger.debug(f"nucl_depth={self.nucl_depth} supplied (not used by expansion)")

        strong = np.flatnonzero(self.strong_link_mask(graph))
        strong_set = set(strong.tolist())
        self.logger.info(
            f"{len(strong)} of {len(graph.links)} links pass the growth threshold "
            f"(filter_depth={self.filter_depth}, ratio={self.growth_link_ratio})"
        )

        result = ExpansionResult(seeds=seeds, status=ExpansionStatus.ROUND_CAP, nucl_depth=self.nucl_depth)
        started = time.perf_counter()

        self.logger.info("  round  seeds  admitted  time")
        self.logger.info("-" * 34)
        for round_number in range(1, self.max_rounds + 1):
            round_start = time.perf_counter()
            seeds_before = len(seeds)

            self._run_round(graph, strong_set, seeds)

            stats = ExpansionRound(
                round_number=round_number,
                seeds_before=seeds_before,
                seeds_after=len(seeds),
                elapsed_seconds=time.perf_counter() - round_start
            )
            result.rounds.append(stats)
            self.logger.info(
                f"  No.{round_number:<3d} {seeds_before:<6d} +{stats.admitted:<8d} "
                f"{stats.elapsed_seconds:.2f}s"
            )

            if stats.admitted == 0:
                result.status = ExpansionStatus.FIXED
                break

            if (self.deadline_seconds is not None
                    and time.perf_counter() - started > self.deadline_seconds):
                result.status = ExpansionStatus.DEADLINE
                break
        self.logger.info("-" * 34)

        if result.converged:
            self.logger.info(f"Seed expansion ends: {len(seeds)} seeds after {result.num_rounds} rounds")
        else:
            self.logger.error(
                f"Seed expansion ends abnormally ({result.status.value}) "
                f"after {result.num_rounds} rounds with {len(seeds)} seeds"
            )

        return result

    def _run_round(self, graph: AssemblyGraph, strong_set: Set[int], seeds: SeedSet):
        """One full scan of the links; membership is judged at round start."""
        seeded = set(seeds)
        total = len(graph.links)
        step = max(1, total // PROGRESS_TICKS)

        for index, link in enumerate(graph.links):
            if index in strong_set:
                left_seeded = link.left_id in seeded
                right_seeded = link.right_id in seeded
                if left_seeded and not right_seeded:
                    seeds.add(link.right_id)
                elif right_seeded and not left_seeded:
                    seeds.add(link.left_id)

            if self.progress is not None and (index % step == 0 or index == total - 1):
                self.progress(index + 1, total)


def expand_seeds(
    graph: AssemblyGraph,
    seeds: SeedSet,
    filter_depth: float = 2.0,
    nucl_depth: Optional[float] = None,
    growth_link_ratio: float = 0.5,
    max_rounds: int = 100
) -> ExpansionResult:
    """
    Convenience function for seed expansion.

    Args:
        graph: Contig-overlap graph
        seeds: Initial seeds; extended in place
        filter_depth: Minimum contig depth (exclusive)
        nucl_depth: Accepted for compatibility; not used
        growth_link_ratio: Growth threshold as a fraction of endpoint depth
        max_rounds: Round cap

    Returns:
        ExpansionResult
    """
    expander = SeedExpander(
        filter_depth=filter_depth,
        growth_link_ratio=growth_link_ratio,
        max_rounds=max_rounds,
        nucl_depth=nucl_depth
    )
    return expander.expand(graph, seeds)

# SeedWeaver v0.1.0
# Any usage is subject to this software's license.
