#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SeedWeaver v0.1.0

Graph Cleanup — iterative removal of short bubble contigs from the
seed-induced subgraph.

Author: SeedWeaver Development Team
License: MIT - See LICENSE
"""

from typing import List, Dict, Set, Any
from dataclasses import dataclass, field
import logging

from ..assembly_core.data_structures import (
    AdjacencyEntry,
    AssemblyGraph,
    ContigEnd,
    InducedLink,
    SeedSet,
)

logger = logging.getLogger(__name__)


@dataclass
class Bubble:
    """
    A short contig that redundantly bridges two contigs.

    The contig has exactly one neighbor on each end, and those two
    neighbors are already linked to each other directly.

    Attributes:
        contig_id: The bridging contig
        three_prime_neighbor: Neighbor on the contig's 3' end
        five_prime_neighbor: Neighbor on the contig's 5' end
        length: Length of the bridging contig in bp
        round_number: Collapse round in which it was removed
    """
    contig_id: int
    three_prime_neighbor: int
    five_prime_neighbor: int
    length: int
    round_number: int


@dataclass
class CollapseResult:
    """
    Result of bubble collapsing.

    Attributes:
        seeds: Seed set after collapsing (same object that was passed in)
        links: Surviving induced links
        bubbles: Removed bubble contigs, in removal order
        rounds: Number of adjacency rebuilds performed
        seed_counts: Seed count after each round
        stats: Cleanup statistics
    """
    seeds: SeedSet
    links: List[InducedLink]
    bubbles: List[Bubble] = field(default_factory=list)
    rounds: int = 0
    seed_counts: List[int] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)

    @property
    def removed_contigs(self) -> Set[int]:
        return {b.contig_id for b in self.bubbles}


class BubbleCollapser:
    """
    Remove short redundant bridge contigs until the subgraph is stable.

    Each round rebuilds per-seed adjacency from the current induced links,
    confirms every bubble against that snapshot, then deletes all confirmed
    bubbles and their links at once.
    """

    def __init__(self, bubble_max_length: int = 50):
        """
        Initialize bubble collapser.

        Args:
            bubble_max_length: Contigs at or below this length (bp) are
                bubble candidates
        """
        self.bubble_max_length = bubble_max_length
        self.logger = logging.getLogger(f"{__name__}.BubbleCollapser")

    def collapse(
        self,
        graph: AssemblyGraph,
        seeds: SeedSet,
        links: List[InducedLink]
    ) -> CollapseResult:
        """
        Collapse bubbles in place.

        Args:
            graph: Contig-overlap graph (for contig lengths)
            seeds: Seed set; confirmed bubbles are discarded from it
            links: Induced link set over ``seeds``

        Returns:
            CollapseResult with the surviving links
        """
        self.logger.info("Starting bubble collapse")

        result = CollapseResult(
            seeds=seeds,
            links=list(links),
            stats={
                'initial_seeds': len(seeds),
                'initial_links': len(links)
            }
        )

        while result.links:
            result.rounds += 1
            adjacency = self.build_adjacency(seeds, result.links)
            bubbles = self._find_bubbles(graph, seeds, adjacency, result.rounds)

            if not bubbles:
                result.seed_counts.append(len(seeds))
                break

            removed = {b.contig_id for b in bubbles}
            for contig_id in removed:
                seeds.discard(contig_id)
            result.links = [
                link for link in result.links
                if link.left_id not in removed and link.right_id not in removed
            ]
            result.bubbles.extend(bubbles)
            result.seed_counts.append(len(seeds))

            self.logger.info(
                f"Round {result.rounds}: removed {len(bubbles)} bubble contigs "
                f"({', '.join(str(b.contig_id) for b in bubbles)})"
            )

        result.stats['final_seeds'] = len(seeds)
        result.stats['final_links'] = len(result.links)
        result.stats['bubbles_removed'] = len(result.bubbles)

        self.logger.info(
            f"Bubble collapse complete: {result.stats['bubbles_removed']} bubbles removed, "
            f"{result.stats['final_seeds']} seeds and {result.stats['final_links']} links remain"
        )

        return result

    def build_adjacency(
        self,
        seeds: SeedSet,
        links: List[InducedLink]
    ) -> Dict[int, AdjacencyEntry]:
        """
        Build per-seed neighbor lists keyed by the end each link attaches to.

        A link contributes to its left contig if that contig is the seed
        being built, otherwise to its right contig. Ends without a
        recognized tag are logged and skipped.
        """
        adjacency = {}

        for seed in seeds:
            entry = AdjacencyEntry()
            for link in links:
                if link.left_id == seed:
                    end, neighbor = link.left_end, link.right_id
                elif link.right_id == seed:
                    end, neighbor = link.right_end, link.left_id
                else:
                    continue

                if isinstance(end, ContigEnd):
                    entry.add(end, neighbor)
                else:
                    self.logger.error(f"Wrong link type on contig {seed}: {end!r}")
            adjacency[seed] = entry

        return adjacency

    def _find_bubbles(
        self,
        graph: AssemblyGraph,
        seeds: SeedSet,
        adjacency: Dict[int, AdjacencyEntry],
        round_number: int
    ) -> List[Bubble]:
        """
        Confirm bubbles against one adjacency snapshot.

        A short contig with 3' neighbor A and 5' neighbor B is a bubble if
        A lists the contig and B on the same end, and B lists the contig
        and A on the same end.
        """
        bubbles = []

        for seed in seeds:
            length = graph.contigs.length(seed)
            if length > self.bubble_max_length:
                continue

            entry = adjacency[seed]
            if len(entry.three_prime) != 1 or len(entry.five_prime) != 1:
                continue

            neighbor_3 = entry.three_prime[0]
            neighbor_5 = entry.five_prime[0]

            if (adjacency[neighbor_3].share_end(seed, neighbor_5)
                    and adjacency[neighbor_5].share_end(seed, neighbor_3)):
                self.logger.debug(
                    f"Contig {seed} ({length} bp) bridges {neighbor_3} and {neighbor_5}"
                )
                bubbles.append(Bubble(
                    contig_id=seed,
                    three_prime_neighbor=neighbor_3,
                    five_prime_neighbor=neighbor_5,
                    length=length,
                    round_number=round_number
                ))

        return bubbles


def collapse_bubbles(
    graph: AssemblyGraph,
    seeds: SeedSet,
    links: List[InducedLink],
    bubble_max_length: int = 50
) -> CollapseResult:
    """
    Convenience function for bubble collapsing.

    Args:
        graph: Contig-overlap graph
        seeds: Seed set; modified in place
        links: Induced link set over ``seeds``
        bubble_max_length: Maximum bubble contig length in bp

    Returns:
        CollapseResult
    """
    collapser = BubbleCollapser(bubble_max_length=bubble_max_length)
    return collapser.collapse(graph, seeds, links)

# SeedWeaver v0.1.0
# Any usage is subject to this software's license.
