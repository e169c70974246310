"""
Round robin scheduling using the circle method.
"""
import logging
from typing import List, Sequence

from .models import Match, WINNERS

logger = logging.getLogger(__name__)

# Stands in for the missing opponent when the participant count is odd
_BYE = object()


def generate_round_robin(participant_ids: Sequence) -> List[Match]:
    """
    Generate a round robin schedule where every participant plays every other once.

    The first participant stays fixed while the rest rotate one position per
    round. With an odd count a bye marker is added; whoever meets it sits the
    round out and no match is emitted for that pairing.
    """
    num_teams = len(participant_ids)
    if num_teams < 2:
        return []

    ids = list(participant_ids)
    if num_teams % 2:
        ids.append(_BYE)

    total = len(ids)
    fixed = ids[0]
    rotating = ids[1:]

    matches = []
    for round_idx in range(total - 1):
        order = [fixed] + rotating
        for i in range(total // 2):
            player1 = order[i]
            player2 = order[total - 1 - i]
            if player1 is _BYE or player2 is _BYE:
                continue
            matches.append(Match(
                round=round_idx + 1,
                match_number=len(matches) + 1,
                player1=player1,
                player2=player2,
                bracket=WINNERS,
            ))
        # Move last to front (after the fixed participant)
        rotating.insert(0, rotating.pop())

    logger.debug(f"Round robin: {num_teams} participants, {total - 1} rounds, {len(matches)} matches")
    return matches
