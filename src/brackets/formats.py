"""
Format registry: one entry point for generating any supported format.
"""
from typing import Dict, List, Optional, Sequence, Union

from .double_elimination import generate_double_elimination
from .elimination import generate_single_elimination
from .group_stage import generate_group_stage
from .models import Match
from .round_robin import generate_round_robin
from .swiss import generate_swiss

SINGLE_ELIMINATION = 'single_elimination'
DOUBLE_ELIMINATION = 'double_elimination'
ROUND_ROBIN = 'round_robin'
SWISS = 'swiss'
GROUP_STAGE = 'group_stage'

FORMATS = (SINGLE_ELIMINATION, DOUBLE_ELIMINATION, ROUND_ROBIN, SWISS, GROUP_STAGE)


def generate_matches(format_type: str, participant_ids: Sequence, rounds: Optional[int] = None,
                     groups: Optional[int] = None) -> Union[List[Match], Dict]:
    """
    Generate matches for ``format_type``.

    Args:
        format_type: one of FORMATS
        participant_ids: participants in seed order
        rounds: Swiss round count (default: ceil(log2(n)))
        groups: group stage group count (default: about 4 per group)

    Returns the generator's result: a list of Match, or for the group stage
    a dict with 'groups' and 'matches'.
    """
    if format_type == SINGLE_ELIMINATION:
        return generate_single_elimination(participant_ids)
    elif format_type == DOUBLE_ELIMINATION:
        return generate_double_elimination(participant_ids)
    elif format_type == ROUND_ROBIN:
        return generate_round_robin(participant_ids)
    elif format_type == SWISS:
        return generate_swiss(participant_ids, rounds)
    elif format_type == GROUP_STAGE:
        return generate_group_stage(participant_ids, groups)
    raise ValueError(
        f"Unknown tournament format: {format_type!r}. "
        f"Valid formats: {', '.join(FORMATS)}"
    )
