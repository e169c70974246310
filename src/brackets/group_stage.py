"""
Group stage generation: participants split into groups, round robin inside each.

Advancement out of the groups (standings, tie-breaks, knockout seeding) is
the caller's job.
"""
import logging
import math
from typing import Dict, Optional, Sequence

from .models import Match, group_bracket
from .round_robin import generate_round_robin

logger = logging.getLogger(__name__)


def default_group_count(num_teams: int) -> int:
    """Aim for about four participants per group, never fewer than 2 groups."""
    return max(2, int(math.floor(num_teams / 4 + 0.5)))


def generate_group_stage(participant_ids: Sequence, groups: Optional[int] = None) -> Dict:
    """
    Generate group assignments and every group's round robin matches.

    Participant i goes to group i mod G. Groups left with fewer than 2
    members are dropped. Matches are numbered contiguously across groups,
    group by group, and tagged ``group_<k>`` where k indexes the returned
    groups list.

    Returns dict with:
    - 'groups': list of participant lists
    - 'matches': list of Match
    """
    num_teams = len(participant_ids)
    if num_teams < 2:
        return {'groups': [], 'matches': []}

    group_count = default_group_count(num_teams) if groups is None else groups
    if group_count < 1:
        return {'groups': [], 'matches': []}

    assigned = [[] for _ in range(group_count)]
    for i, participant in enumerate(participant_ids):
        assigned[i % group_count].append(participant)

    valid_groups = [group for group in assigned if len(group) >= 2]
    if len(valid_groups) < len(assigned):
        logger.debug(f"Group stage: dropped {len(assigned) - len(valid_groups)} groups with fewer than 2 participants")

    matches = []
    for group_index, group in enumerate(valid_groups):
        for match in generate_round_robin(group):
            matches.append(Match(
                round=match.round,
                match_number=len(matches) + 1,
                player1=match.player1,
                player2=match.player2,
                bracket=group_bracket(group_index),
            ))

    logger.debug(f"Group stage: {num_teams} participants, {len(valid_groups)} groups, {len(matches)} matches")
    return {'groups': valid_groups, 'matches': matches}
