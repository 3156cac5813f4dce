#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SeedWeaver v0.1.0

Exception hierarchy for seed expansion and graph simplification.

Author: SeedWeaver Development Team
License: MIT - See LICENSE
"""


class SeedWeaverError(Exception):
    """Base class for all SeedWeaver errors."""
    pass


class GraphFormatError(SeedWeaverError):
    """Raised when an assembly graph table cannot be parsed."""
    pass


class UnknownContigError(SeedWeaverError):
    """Raised when a contig id is not present in the contig table."""

    def __init__(self, contig_id, context: str = ""):
        self.contig_id = contig_id
        message = f"Unknown contig id: {contig_id}"
        if context:
            message = f"{message} ({context})"
        super().__init__(message)


class InvalidOrientationError(SeedWeaverError):
    """Raised when a link end tag is neither 3' nor 5'."""

    def __init__(self, raw_end):
        self.raw_end = raw_end
        super().__init__(f"Unrecognized contig end tag: {raw_end!r}")


class NonConvergenceError(SeedWeaverError):
    """
    Raised when seed expansion does not reach a fixpoint.

    Attributes:
        rounds: Number of expansion rounds that were run
        num_seeds: Seed count when expansion stopped
        reason: 'round_cap' or 'deadline'
    """

    def __init__(self, rounds: int, num_seeds: int, reason: str = "round_cap"):
        self.rounds = rounds
        self.num_seeds = num_seeds
        self.reason = reason
        super().__init__(
            f"Seed expansion did not converge after {rounds} rounds "
            f"({num_seeds} seeds, stopped by {reason})"
        )


__all__ = [
    'SeedWeaverError',
    'GraphFormatError',
    'UnknownContigError',
    'InvalidOrientationError',
    'NonConvergenceError',
]

# SeedWeaver v0.1.0
# Any usage is subject to this software's license.
