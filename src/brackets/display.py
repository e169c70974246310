"""
Display helpers: short match codes and placeholder text for unfilled slots.

Codes follow the familiar bracket notation:
- W1-M1, W2-M1 ... winners bracket (round, match within round)
- L1-M1 ... losers bracket
- GF the grand final
- G1-R1-M1 ... group stage (group numbers are 1-based)
"""
from typing import List, Tuple

from .models import Match, GRAND_FINAL, LOSERS, WINNERS, parse_group_bracket


def get_match_codes(matches: List[Match]) -> List[str]:
    """Return a display code for every match, in list order."""
    codes = []
    seen = {}  # (bracket, round) -> matches emitted so far
    for match in matches:
        key = (match.bracket, match.round)
        seen[key] = seen.get(key, 0) + 1
        position = seen[key]

        if match.bracket == WINNERS:
            codes.append(f"W{match.round}-M{position}")
        elif match.bracket == LOSERS:
            codes.append(f"L{match.round}-M{position}")
        elif match.bracket == GRAND_FINAL:
            codes.append("GF")
        else:
            group_index = parse_group_bracket(match.bracket)
            prefix = f"G{group_index + 1}-" if group_index is not None else f"{match.bracket}-"
            codes.append(f"{prefix}R{match.round}-M{position}")
    return codes


def get_slot_labels(matches: List[Match]) -> List[Tuple[str, str]]:
    """
    Return (label1, label2) for every match.

    Filled slots show the participant. Unfilled slots in a round 1 winners
    match show 'BYE'. Other unfilled slots show where the player comes from,
    e.g. 'Winner W1-M1' or 'Loser W2-M1', in feeder order; slots nothing
    feeds into (Swiss rounds 2+) show 'TBD'.
    """
    codes = get_match_codes(matches)

    feeders = [[] for _ in matches]
    for index, match in enumerate(matches):
        if match.next_match_index is not None:
            feeders[match.next_match_index].append((index, 'Winner'))
        if match.loser_next_match_index is not None:
            feeders[match.loser_next_match_index].append((index, 'Loser'))

    labels = []
    for index, match in enumerate(matches):
        sources = [f"{kind} {codes[source]}" for source, kind in sorted(feeders[index])]
        seeded_round = match.bracket == WINNERS and match.round == 1 and not sources
        slot_labels = []
        for player in match.players:
            if player is not None:
                slot_labels.append(str(player))
            elif seeded_round:
                slot_labels.append('BYE')
            elif sources:
                slot_labels.append(sources.pop(0))
            else:
                slot_labels.append('TBD')
        labels.append(tuple(slot_labels))
    return labels
