"""
Single elimination bracket generation and the knockout helpers shared with
double elimination.
"""
import logging
import math
from typing import Dict, List, Optional, Sequence

from .models import Match, WINNERS

logger = logging.getLogger(__name__)


ROUND_NAMES = {2: "Final", 4: "Semifinal", 8: "Quarterfinal"}


def get_round_name(teams_in_round: int) -> str:
    """Final, Semifinal, Quarterfinal, then "Round of N" for larger rounds."""
    return ROUND_NAMES.get(teams_in_round, f"Round of {teams_in_round}")


def calculate_bracket_size(num_teams: int) -> int:
    """Smallest power of two holding num_teams, or 0 for an empty field."""
    if num_teams <= 0:
        return 0
    return 1 << (num_teams - 1).bit_length()


def calculate_byes(num_teams: int) -> int:
    """Calculate number of byes needed."""
    bracket_size = calculate_bracket_size(num_teams)
    return bracket_size - num_teams


def seed_participants(participant_ids: Sequence, bracket_size: int) -> List[Optional[object]]:
    """
    Place participants into bracket slots in input order.

    Slots past the last participant are None (byes). No strength-based
    seeding is applied: callers order participants before calling.
    """
    seeded = [None] * bracket_size
    for i, participant in enumerate(participant_ids[:bracket_size]):
        seeded[i] = participant
    return seeded


def append_knockout_rounds(matches: List[Match], round_counts: Sequence[int], bracket: str,
                           seeded: Optional[Sequence] = None) -> List[int]:
    """
    Append consecutive knockout rounds to ``matches`` and link them.

    Round ``k`` gets ``round_counts[k]`` matches. When ``seeded`` is given the
    first round is filled from it in adjacent pairs; later rounds are left
    empty for the caller's consumer to fill. Winners advance 1-to-1 when the
    next round has the same number of matches, otherwise two matches feed
    one (``floor(i/2)``).

    Returns the index of the first match of each round.
    """
    round_starts = []
    for round_idx, count in enumerate(round_counts):
        round_starts.append(len(matches))
        for i in range(count):
            player1 = player2 = None
            if round_idx == 0 and seeded is not None:
                player1, player2 = seeded[i * 2], seeded[i * 2 + 1]
            matches.append(Match(
                round=round_idx + 1,
                match_number=len(matches) + 1,
                player1=player1,
                player2=player2,
                bracket=bracket,
            ))

    for round_idx in range(len(round_counts) - 1):
        start = round_starts[round_idx]
        next_start = round_starts[round_idx + 1]
        count = round_counts[round_idx]
        same_size = round_counts[round_idx + 1] == count
        for i in range(count):
            offset = i if same_size else i // 2
            matches[start + i].next_match_index = next_start + offset

    return round_starts


def winners_round_counts(bracket_size: int) -> List[int]:
    """Match counts per winners round: bracket_size/2, bracket_size/4, ..., 1."""
    counts = []
    count = bracket_size // 2
    while count >= 1:
        counts.append(count)
        count //= 2
    return counts


def generate_single_elimination(participant_ids: Sequence) -> List[Match]:
    """
    Generate a single elimination bracket in seed order.

    Participants beyond a power of two are padded with byes. The final has
    no outgoing link.
    """
    num_teams = len(participant_ids)
    if num_teams < 2:
        return []

    bracket_size = calculate_bracket_size(num_teams)
    seeded = seed_participants(participant_ids, bracket_size)

    matches = []
    append_knockout_rounds(matches, winners_round_counts(bracket_size), WINNERS, seeded)

    logger.debug(f"Single elimination: {num_teams} participants, bracket size {bracket_size}, "
                 f"{len(matches)} matches")
    return matches


def get_elimination_bracket_display(participant_ids: Sequence) -> Dict:
    """
    Get single elimination bracket data formatted for UI display.
    """
    matches = generate_single_elimination(participant_ids)
    total_teams = len(participant_ids)

    if not matches:
        return {
            'rounds': {},
            'bracket_size': 0,
            'total_rounds': 0,
            'total_teams': total_teams,
            'byes': 0,
            'matches_per_round': {},
            'total_matches': 0
        }

    bracket_size = calculate_bracket_size(total_teams)

    # Organize matches by round name
    rounds = {}
    for match in matches:
        teams_in_round = bracket_size // (2 ** (match.round - 1))
        round_name = get_round_name(teams_in_round)
        rounds.setdefault(round_name, []).append(match)

    # Count actual matches (non-byes) per round
    matches_per_round = {}
    for round_name, round_matches in rounds.items():
        matches_per_round[round_name] = len([m for m in round_matches if not m.is_bye])

    first_round_byes = sum(1 for m in matches if m.round == 1 and m.is_bye)

    return {
        'rounds': rounds,
        'bracket_size': bracket_size,
        'total_rounds': int(math.log2(bracket_size)),
        'total_teams': total_teams,
        'byes': first_round_byes,
        'matches_per_round': matches_per_round,
        'total_matches': len(matches)
    }
