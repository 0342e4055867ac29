from __future__ import annotations

from typing import Dict, Iterable, Tuple

from minivote.voting.models import Voting


def _round_half_up(numerator: int, denominator: int) -> int:
    # exact integer form of floor(n / d + 0.5)
    return (2 * numerator + denominator) // (2 * denominator)


def percentage(vote_count: int, participant_count: int) -> int:
    if participant_count <= 0:
        return 0
    return _round_half_up(vote_count * 100, participant_count)


def compute_result_percentages(voting: Voting) -> Dict[int, int]:
    """
    Map each option id to its share of the participants, in whole percent.

    Each option is rounded on its own (half up), so the values are not
    guaranteed to add up to exactly 100.
    """
    return {
        option.id: percentage(option.vote_count, voting.participant_count)
        for option in voting.options
    }


def tally_pairs(voting: Voting) -> Iterable[Tuple[int, int, int]]:
    """Yield ``(option_id, vote_count, percent)`` in option order."""
    percents = compute_result_percentages(voting)
    for option in voting.options:
        yield option.id, option.vote_count, percents[option.id]


__all__ = ["percentage", "compute_result_percentages", "tally_pairs"]
