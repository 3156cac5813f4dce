#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SeedWeaver v0.1.0

Contig graph data structures — contigs, contig-end links, the dense contig
table, the seed set and the seed-induced link set.

Author: SeedWeaver Development Team
License: MIT - See LICENSE
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Union
import logging
import math

import numpy as np

from ..errors import GraphFormatError, InvalidOrientationError, UnknownContigError

logger = logging.getLogger(__name__)

# Characters stripped from raw end markers such as "3'" or '"5"'
_END_QUOTE_CHARS = "\"'′` \t"


# ============================================================================
# Part 1: Contigs and links
# ============================================================================

class ContigEnd(Enum):
    """Which end of a contig a link attaches to."""
    THREE_PRIME = 3
    FIVE_PRIME = 5

    @classmethod
    def parse(cls, raw: Union[str, int, "ContigEnd"]) -> "ContigEnd":
        """
        Normalize a raw end marker into a ContigEnd.

        Accepts the quoted markers written by upstream graph tools
        ("3'", '"5"', "5′") as well as bare 3/5.

        Raises:
            InvalidOrientationError: If the marker is not a 3' or 5' tag
        """
        if isinstance(raw, ContigEnd):
            return raw
        token = str(raw).strip(_END_QUOTE_CHARS)
        if token == "3":
            return cls.THREE_PRIME
        if token == "5":
            return cls.FIVE_PRIME
        raise InvalidOrientationError(raw)

    def __str__(self) -> str:
        return f"{self.value}'"


@dataclass(frozen=True)
class Contig:
    """
    A contiguous assembled sequence fragment.

    Attributes:
        id: Dense 1-based contig id
        name: Contig name from the assembler
        length: Length in base pairs
        depth: Sequencing depth
    """
    id: int
    name: str
    length: int
    depth: float

    @property
    def score(self) -> float:
        """Depth-weighted length score used to rank seed candidates."""
        return math.sqrt(math.sqrt(self.depth) * self.length)


@dataclass(frozen=True)
class ContigLink:
    """
    Overlap between one end of a contig and one end of another.

    End tags are kept exactly as supplied; they are normalized when the
    induced link set is derived.
    """
    left_id: int
    left_end: Union[str, int, ContigEnd]
    right_id: int
    right_end: Union[str, int, ContigEnd]
    link_depth: float

    def touches(self, contig_id: int) -> bool:
        return self.left_id == contig_id or self.right_id == contig_id


@dataclass(frozen=True)
class InducedLink:
    """
    Seed-to-seed link retained for the reported subgraph.

    An end is None when its raw tag was unrecognized and the link was kept
    under the "skip" orientation policy.
    """
    left_id: int
    left_end: Optional[ContigEnd]
    right_id: int
    right_end: Optional[ContigEnd]
    left_length: int
    right_length: int
    link_depth: float

    def touches(self, contig_id: int) -> bool:
        return self.left_id == contig_id or self.right_id == contig_id


# ============================================================================
# Part 2: Contig table and graph
# ============================================================================

class ContigTable:
    """
    Dense, id-indexed contig container.

    Contig ids must be contiguous 1..N; contig ``i`` lives at offset
    ``i - 1``. Depths and lengths are mirrored into numpy arrays so that
    edge thresholds can be evaluated for all links at once.
    """

    def __init__(self, contigs: Iterable[Contig]):
        ordered = sorted(contigs, key=lambda c: c.id)
        for offset, contig in enumerate(ordered):
            if contig.id != offset + 1:
                raise GraphFormatError(
                    f"Contig ids must be contiguous from 1; expected {offset + 1}, "
                    f"found {contig.id}"
                )
        self._contigs: List[Contig] = ordered
        self.depths = np.array([c.depth for c in ordered], dtype=float)
        self.lengths = np.array([c.length for c in ordered], dtype=np.int64)

    def __len__(self) -> int:
        return len(self._contigs)

    def __iter__(self) -> Iterator[Contig]:
        return iter(self._contigs)

    def __contains__(self, contig_id) -> bool:
        return isinstance(contig_id, (int, np.integer)) and 1 <= contig_id <= len(self._contigs)

    def __getitem__(self, contig_id: int) -> Contig:
        if contig_id not in self:
            raise UnknownContigError(contig_id)
        return self._contigs[contig_id - 1]

    def depth(self, contig_id: int) -> float:
        return self[contig_id].depth

    def length(self, contig_id: int) -> int:
        return self[contig_id].length

    def find_by_name(self, name: str) -> Contig:
        """Look up a contig by its assembler name."""
        for contig in self._contigs:
            if contig.name == name:
                return contig
        raise UnknownContigError(name, "no contig with this name")


@dataclass
class AssemblyGraph:
    """
    Contig-overlap graph: the contig table plus the ordered link list.

    Link order is significant; expansion and filtering scan links in this
    order, which makes seed insertion order deterministic.
    """
    contigs: ContigTable
    links: List[ContigLink] = field(default_factory=list)

    def __post_init__(self):
        for index, link in enumerate(self.links):
            for contig_id in (link.left_id, link.right_id):
                if contig_id not in self.contigs:
                    raise UnknownContigError(contig_id, f"referenced by link {index + 1}")

    @classmethod
    def from_records(cls, contigs: Iterable[Contig], links: Iterable[ContigLink]) -> "AssemblyGraph":
        return cls(contigs=ContigTable(contigs), links=list(links))

    def link_arrays(self):
        """
        Return (left_ids, right_ids, link_depths) as numpy arrays.

        Ids are returned as 0-based offsets into the contig table.
        """
        left = np.fromiter((link.left_id - 1 for link in self.links), dtype=np.int64, count=len(self.links))
        right = np.fromiter((link.right_id - 1 for link in self.links), dtype=np.int64, count=len(self.links))
        depth = np.fromiter((link.link_depth for link in self.links), dtype=float, count=len(self.links))
        return left, right, depth

    def min_endpoint_depths(self) -> np.ndarray:
        """min(depth(left), depth(right)) for every link."""
        left, right, _ = self.link_arrays()
        return np.minimum(self.contigs.depths[left], self.contigs.depths[right])


# ============================================================================
# Part 3: Seed set and adjacency
# ============================================================================

class SeedSet:
    """
    Insertion-ordered set of contig ids.

    Adding an id that is already present is a no-op, so the set never holds
    duplicates. Iteration follows admission order.
    """

    def __init__(self, contig_ids: Iterable[int] = ()):
        self._ids: Dict[int, None] = {}
        for contig_id in contig_ids:
            self.add(contig_id)

    def add(self, contig_id: int) -> bool:
        """Add a contig id; returns True if it was not already a seed."""
        if contig_id in self._ids:
            return False
        self._ids[contig_id] = None
        return True

    def discard(self, contig_id: int):
        self._ids.pop(contig_id, None)

    def copy(self) -> "SeedSet":
        return SeedSet(self._ids)

    def to_list(self) -> List[int]:
        return list(self._ids)

    def __contains__(self, contig_id) -> bool:
        return contig_id in self._ids

    def __iter__(self) -> Iterator[int]:
        return iter(list(self._ids))

    def __len__(self) -> int:
        return len(self._ids)

    def __eq__(self, other) -> bool:
        if isinstance(other, SeedSet):
            return set(self._ids) == set(other._ids)
        if isinstance(other, (set, frozenset)):
            return set(self._ids) == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"SeedSet({self.to_list()})"


@dataclass
class AdjacencyEntry:
    """Neighbors of one seed, split by the end they attach to."""
    three_prime: List[int] = field(default_factory=list)
    five_prime: List[int] = field(default_factory=list)

    def add(self, end: ContigEnd, neighbor: int):
        if end is ContigEnd.THREE_PRIME:
            self.three_prime.append(neighbor)
        else:
            self.five_prime.append(neighbor)

    def share_end(self, first: int, second: int) -> bool:
        """True if both ids appear together in one of the two end lists."""
        return (
            (first in self.three_prime and second in self.three_prime)
            or (first in self.five_prime and second in self.five_prime)
        )


__all__ = [
    'ContigEnd',
    'Contig',
    'ContigLink',
    'InducedLink',
    'ContigTable',
    'AssemblyGraph',
    'SeedSet',
    'AdjacencyEntry',
]

# SeedWeaver v0.1.0
# Any usage is subject to this software's license.
