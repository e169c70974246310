"""
Double elimination bracket generation.

In double elimination:
- Teams must lose twice to be eliminated
- Winners Bracket: Teams that haven't lost yet
- Losers Bracket: Teams that have lost once
- Grand Final: Winners bracket champion vs Losers bracket champion

A single Grand Final decides the champion; no bracket reset match is generated.

Match layout in the returned list (8 teams shown):

    W1 (4)  W2 (2)  W3 (1) | L1 (2)  L2 (2)  L3 (1)  L4 (1) | GF
    0-3     4-5     6      | 7-8     9-10    11      12     | 13
"""
import logging
import math
from typing import Dict, List, Sequence

from .elimination import (
    append_knockout_rounds,
    calculate_bracket_size,
    calculate_byes,
    get_round_name,
    seed_participants,
    winners_round_counts,
)
from .models import Match, GRAND_FINAL, LOSERS, WINNERS

logger = logging.getLogger(__name__)


def get_losers_round_name(round_num: int, total_losers_rounds: int) -> str:
    """Name of a 0-based losers round; the last two are Final and Semifinal."""
    remaining = total_losers_rounds - round_num
    if remaining == 1:
        return "Losers Final"
    if remaining == 2:
        return "Losers Semifinal"
    return f"Losers Round {round_num + 1}"


def get_winners_round_name(teams_in_round: int) -> str:
    """Winners-bracket counterpart of get_round_name."""
    return f"Winners {get_round_name(teams_in_round)}"


def calculate_losers_bracket_rounds(bracket_size: int) -> int:
    """
    Number of losers bracket rounds for a power-of-two capacity.

    Every winners round after the first feeds a major round, and each major
    round is preceded by a minor one, so a capacity with W winners rounds
    has 2 * (W - 1) losers rounds.
    """
    winners_rounds = bracket_size.bit_length() - 1
    if winners_rounds < 1:
        return 0
    return 2 * (winners_rounds - 1)


def losers_round_match_counts(bracket_size: int) -> List[int]:
    """
    Match counts for each losers bracket round.

    Counts come in pairs: a minor round (losers bracket survivors play each
    other) followed by a major round of the same size (survivors meet the
    next wave of winners bracket losers). Round ``lr`` (1-based) therefore
    has ``bracket_size / 2**(ceil(lr/2) + 1)`` matches, which reaches
    exactly 1 at the losers final.
    """
    counts = []
    for lr in range(1, calculate_losers_bracket_rounds(bracket_size) + 1):
        counts.append(max(1, bracket_size >> ((lr + 1) // 2 + 1)))
    return counts


def _link_loser_drop_ins(matches: List[Match], winners_starts: List[int], winners_counts: List[int],
                         losers_starts: List[int]) -> None:
    """
    Route each winners bracket loser to the losers bracket.

    Winners round 1: two losers share one losers round 1 match (floor(i/2)).
    Winners round r >= 2: losers drop 1-to-1 into losers round 2r-2, where
    they meet the survivors of the preceding minor round.
    """
    if not losers_starts:
        return

    for w_round, w_start in enumerate(winners_starts):
        w_count = winners_counts[w_round]

        if w_round == 0:
            l_start = losers_starts[0]
            for i in range(w_count):
                matches[w_start + i].loser_next_match_index = l_start + i // 2
            continue

        l_round = w_round * 2 - 1
        if l_round >= len(losers_starts):
            continue
        l_start = losers_starts[l_round]
        for i in range(w_count):
            target = l_start + i
            if target < len(matches) and matches[target].bracket == LOSERS:
                matches[w_start + i].loser_next_match_index = target


def generate_double_elimination(participant_ids: Sequence) -> List[Match]:
    """
    Generate complete double elimination bracket in seed order.

    Returns a flat list: winners bracket rounds, then losers bracket rounds,
    then the Grand Final. ``next_match_index`` receives the winner and
    ``loser_next_match_index`` receives a winners bracket loser.
    """
    num_teams = len(participant_ids)
    if num_teams < 2:
        return []

    bracket_size = calculate_bracket_size(num_teams)
    seeded = seed_participants(participant_ids, bracket_size)

    matches = []

    # Winners bracket
    winners_counts = winners_round_counts(bracket_size)
    winners_starts = append_knockout_rounds(matches, winners_counts, WINNERS, seeded)
    winners_final_index = len(matches) - 1

    # Losers bracket
    losers_counts = losers_round_match_counts(bracket_size)
    losers_starts = append_knockout_rounds(matches, losers_counts, LOSERS)

    _link_loser_drop_ins(matches, winners_starts, winners_counts, losers_starts)

    # Grand Final
    grand_final_index = len(matches)
    matches.append(Match(round=1, match_number=grand_final_index + 1, bracket=GRAND_FINAL))

    matches[winners_final_index].next_match_index = grand_final_index
    losers_final_index = grand_final_index - 1
    if matches[losers_final_index].bracket == LOSERS:
        matches[losers_final_index].next_match_index = grand_final_index

    logger.debug(f"Double elimination: {num_teams} participants, bracket size {bracket_size}, "
                 f"{len(winners_counts)} winners rounds, {len(losers_counts)} losers rounds, "
                 f"{len(matches)} matches")
    return matches


def generate_bracket_execution_order(matches: List[Match]) -> List[Dict]:
    """
    Group double elimination matches into the order they can be played.

    For a double elimination bracket, the execution order is:
    - All Winners R1 matches first
    - Losers R1 (minor round - W1 losers pair up) - AFTER W1 completes
    - Winners R2
    - Losers R2 (major round - W2 losers drop in) - AFTER W2 AND L1 complete
    - Winners R3
    - Losers R3, Losers R4 ...
    - Grand Final

    Returns list of dicts with 'time_slot', 'bracket', 'round' and the
    'indices' of the matches in that slot.
    """
    winners_by_round = {}
    losers_by_round = {}
    grand_final = []
    for index, match in enumerate(matches):
        if match.bracket == WINNERS:
            winners_by_round.setdefault(match.round, []).append(index)
        elif match.bracket == LOSERS:
            losers_by_round.setdefault(match.round, []).append(index)
        elif match.bracket == GRAND_FINAL:
            grand_final.append(index)

    total_winners_rounds = len(winners_by_round)
    total_losers_rounds = len(losers_by_round)

    order = []

    def add_slot(bracket, round_num, indices):
        order.append({
            'time_slot': len(order),
            'bracket': bracket,
            'round': round_num,
            'indices': indices
        })

    # W1 first, then interleave: L(2k-1) after W(k), L(2k) after W(k+1)
    w_round = 1
    l_round = 1
    if w_round in winners_by_round:
        add_slot(WINNERS, w_round, winners_by_round[w_round])
        w_round += 1

    while l_round <= total_losers_rounds or w_round <= total_winners_rounds:
        if l_round <= total_losers_rounds:
            add_slot(LOSERS, l_round, losers_by_round[l_round])
            l_round += 1
        if w_round <= total_winners_rounds:
            add_slot(WINNERS, w_round, winners_by_round[w_round])
            w_round += 1
        elif l_round <= total_losers_rounds:
            # Winners bracket is finished; remaining losers rounds run back to back
            add_slot(LOSERS, l_round, losers_by_round[l_round])
            l_round += 1

    if grand_final:
        add_slot(GRAND_FINAL, 1, grand_final)

    return order


def get_double_elimination_bracket_display(participant_ids: Sequence) -> Dict:
    """
    Get double elimination bracket data formatted for UI display.
    """
    matches = generate_double_elimination(participant_ids)
    total_teams = len(participant_ids)

    if not matches:
        return {
            'winners_bracket': {},
            'losers_bracket': {},
            'grand_final': None,
            'bracket_size': 0,
            'total_winners_rounds': 0,
            'total_losers_rounds': 0,
            'total_teams': total_teams,
            'byes': 0,
            'empty_slots': 0,
            'total_matches': 0
        }

    bracket_size = calculate_bracket_size(total_teams)
    total_winners_rounds = int(math.log2(bracket_size))
    total_losers_rounds = calculate_losers_bracket_rounds(bracket_size)

    winners_bracket = {}
    losers_bracket = {}
    grand_final = None
    for match in matches:
        if match.bracket == WINNERS:
            teams_in_round = bracket_size // (2 ** (match.round - 1))
            round_name = get_winners_round_name(teams_in_round)
            winners_bracket.setdefault(round_name, []).append(match)
        elif match.bracket == LOSERS:
            round_name = get_losers_round_name(match.round - 1, total_losers_rounds)
            losers_bracket.setdefault(round_name, []).append(match)
        else:
            grand_final = match

    # Count first round byes
    first_round_byes = sum(1 for m in matches if m.bracket == WINNERS and m.round == 1 and m.is_bye)

    return {
        'winners_bracket': winners_bracket,
        'losers_bracket': losers_bracket,
        'grand_final': grand_final,
        'bracket_size': bracket_size,
        'total_winners_rounds': total_winners_rounds,
        'total_losers_rounds': total_losers_rounds,
        'total_teams': total_teams,
        'byes': first_round_byes,
        'empty_slots': calculate_byes(total_teams),
        'total_matches': len(matches)
    }
