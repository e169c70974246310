"""
Swiss system schedule generation.

Only round 1 can be paired before play starts. Later rounds are emitted as
empty placeholders; pairing them from standings is left to the caller.
"""
import logging
import math
from typing import List, Optional, Sequence

from .models import Match, WINNERS

logger = logging.getLogger(__name__)


def default_swiss_rounds(num_teams: int) -> int:
    """Rounds needed to separate a single unbeaten participant: ceil(log2(n)), at least 1."""
    if num_teams < 2:
        return 0
    return max(1, math.ceil(math.log2(num_teams)))


def generate_swiss(participant_ids: Sequence, rounds: Optional[int] = None) -> List[Match]:
    """
    Generate a Swiss schedule: round 1 paired by seed order (1v2, 3v4, ...),
    later rounds as placeholders with the same number of matches.

    With an odd count the last participant gets a bye in round 1 (paired with None).
    """
    num_teams = len(participant_ids)
    if num_teams < 2:
        return []

    if rounds is None:
        rounds = default_swiss_rounds(num_teams)

    matches_per_round = (num_teams + 1) // 2
    matches = []

    for round_num in range(1, rounds + 1):
        for i in range(matches_per_round):
            player1 = player2 = None
            if round_num == 1:
                player1 = participant_ids[i * 2]
                if i * 2 + 1 < num_teams:
                    player2 = participant_ids[i * 2 + 1]
            matches.append(Match(
                round=round_num,
                match_number=len(matches) + 1,
                player1=player1,
                player2=player2,
                bracket=WINNERS,
            ))

    logger.debug(f"Swiss: {num_teams} participants, {max(rounds, 0)} rounds, {len(matches)} matches")
    return matches
