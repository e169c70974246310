"""
Match record shared by every bracket generator.

Player slots hold an opaque participant identifier, or None when no
participant is assigned yet (a bye or a winner/loser still to be decided).
Advancement links are integer positions into the same generated list.
"""

WINNERS = 'winners'
LOSERS = 'losers'
GRAND_FINAL = 'grand_final'

KNOCKOUT_BRACKETS = (WINNERS, LOSERS, GRAND_FINAL)


def group_bracket(group_index):
    """Bracket tag for a group stage group (0-based)."""
    return f"group_{group_index}"


def parse_group_bracket(bracket):
    """Return the group index encoded in a group tag, or None."""
    if not isinstance(bracket, str) or not bracket.startswith('group_'):
        return None
    suffix = bracket[len('group_'):]
    return int(suffix) if suffix.isdigit() else None


class Match:
    def __init__(self, round, match_number, player1=None, player2=None, bracket=WINNERS,
                 next_match_index=None, loser_next_match_index=None):
        self.round = round
        self.match_number = match_number
        self.player1 = player1
        self.player2 = player2
        self.bracket = bracket
        self.next_match_index = next_match_index  # Receives this match's winner
        self.loser_next_match_index = loser_next_match_index  # Double elimination only

    @property
    def players(self):
        return (self.player1, self.player2)

    @property
    def is_placeholder(self):
        """Neither slot has been assigned yet."""
        return self.player1 is None and self.player2 is None

    @property
    def is_bye(self):
        """Exactly one slot is filled, so the present player advances automatically."""
        return (self.player1 is None) != (self.player2 is None)

    def to_dict(self):
        return {
            'round': self.round,
            'match_number': self.match_number,
            'player1': self.player1,
            'player2': self.player2,
            'bracket': self.bracket,
            'next_match_index': self.next_match_index,
            'loser_next_match_index': self.loser_next_match_index,
        }

    def __eq__(self, other):
        if not isinstance(other, Match):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return (f"Match(round={self.round}, match_number={self.match_number}, "
                f"player1={self.player1!r}, player2={self.player2!r}, bracket={self.bracket}, "
                f"next_match_index={self.next_match_index}, "
                f"loser_next_match_index={self.loser_next_match_index})")
