"""
SeedWeaver v0.1.0

Assembly utilities: post-expansion graph cleanup.

Author: SeedWeaver Development Team
License: MIT - See LICENSE
"""

from .graph_cleanup import Bubble, BubbleCollapser, CollapseResult, collapse_bubbles

__all__ = [
    "Bubble",
    "BubbleCollapser",
    "CollapseResult",
    "collapse_bubbles",
]
