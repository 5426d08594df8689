"""Outcomes of classifying a resource reference."""

from enum import Enum


class MatchOutcome(Enum):
    """Whether a referenced resource is in its owning group's gallery."""

    CORRECT = "correct"
    NEEDS_MOVE = "needs_move"
