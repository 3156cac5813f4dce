#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SeedWeaver v0.1.0

Link Filter — derives the seed-induced link set once expansion has reached
its fixpoint.

The retention ratio is looser than the growth ratio used by expansion:
admitting a new contig needs strong evidence, while a link between two
contigs that are both already trusted only needs to clear a lower bar.

Author: SeedWeaver Development Team
License: MIT - See LICENSE
"""

from typing import List, Optional, Union
import logging

import numpy as np

from .data_structures import AssemblyGraph, ContigEnd, InducedLink, SeedSet
from ..errors import InvalidOrientationError

logger = logging.getLogger(__name__)


class LinkFilter:
    """Restrict the link list to sufficiently deep seed-to-seed links."""

    def __init__(self, retention_link_ratio: float = 0.3, invalid_orientation: str = 'skip'):
        """
        Initialize link filter.

        Args:
            retention_link_ratio: Link depth must exceed this fraction of the
                shallower endpoint's depth
            invalid_orientation: 'skip' keeps a link with an unrecognized end
                tag (that end is ignored by adjacency); 'raise' rejects it
        """
        self.retention_link_ratio = retention_link_ratio
        self.invalid_orientation = invalid_orientation
        self.logger = logging.getLogger(f"{__name__}.LinkFilter")

    def filter(self, graph: AssemblyGraph, seeds: SeedSet) -> List[InducedLink]:
        """
        Derive the induced link set over ``seeds``.

        Args:
            graph: Contig-overlap graph
            seeds: Final (fixpoint) seed set

        Returns:
            Retained links, in graph link order

        Raises:
            InvalidOrientationError: Under the 'raise' policy
        """
        if not graph.links:
            return []

        _, _, link_depth = graph.link_arrays()
        deep_enough = link_depth > self.retention_link_ratio * graph.min_endpoint_depths()

        induced = []
        for index in np.flatnonzero(deep_enough):
            link = graph.links[index]
            if link.left_id not in seeds or link.right_id not in seeds:
                continue

            induced.append(InducedLink(
                left_id=link.left_id,
                left_end=self._normalize_end(link.left_end, index),
                right_id=link.right_id,
                right_end=self._normalize_end(link.right_end, index),
                left_length=graph.contigs.length(link.left_id),
                right_length=graph.contigs.length(link.right_id),
                link_depth=link.link_depth
            ))

        self.logger.info(
            f"Retained {len(induced)} of {len(graph.links)} links between {len(seeds)} seeds "
            f"(ratio={self.retention_link_ratio})"
        )
        return induced

    def _normalize_end(self, raw: Union[str, int, ContigEnd], index: int) -> Optional[ContigEnd]:
        try:
            return ContigEnd.parse(raw)
        except InvalidOrientationError:
            if self.invalid_orientation == 'raise':
                raise
            self.logger.error(f"Wrong link type {raw!r} on link {index + 1}; end ignored")
            return None

# SeedWeaver v0.1.0
# Any usage is subject to this software's license.
