"""
Unit tests for single elimination bracket generation and the shared knockout helpers.
"""
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from brackets.elimination import (
    get_round_name,
    calculate_bracket_size,
    calculate_byes,
    seed_participants,
    append_knockout_rounds,
    winners_round_counts,
    generate_single_elimination,
    get_elimination_bracket_display,
)
from brackets.models import WINNERS, LOSERS


class TestBracketHelpers:
    """Tests for bracket helper functions."""

    def test_get_round_name_final(self):
        """Test round name for 2 teams (Final)."""
        assert get_round_name(2) == "Final"

    def test_get_round_name_semifinal(self):
        """Test round name for 4 teams (Semifinal)."""
        assert get_round_name(4) == "Semifinal"

    def test_get_round_name_quarterfinal(self):
        """Test round name for 8 teams (Quarterfinal)."""
        assert get_round_name(8) == "Quarterfinal"

    def test_get_round_name_round_of_n(self):
        """Larger rounds are 'Round of N'."""
        assert get_round_name(16) == "Round of 16"
        assert get_round_name(128) == "Round of 128"

    def test_calculate_bracket_size_exact_power(self):
        """Test bracket size for exact power of 2."""
        assert calculate_bracket_size(8) == 8
        assert calculate_bracket_size(16) == 16
        assert calculate_bracket_size(4) == 4

    def test_calculate_bracket_size_not_power(self):
        """Test bracket size rounds up to next power of 2."""
        assert calculate_bracket_size(5) == 8
        assert calculate_bracket_size(7) == 8
        assert calculate_bracket_size(9) == 16
        assert calculate_bracket_size(33) == 64

    def test_calculate_bracket_size_small(self):
        """Test bracket size for small inputs."""
        assert calculate_bracket_size(2) == 2
        assert calculate_bracket_size(3) == 4
        assert calculate_bracket_size(0) == 0
        assert calculate_bracket_size(1) == 1

    def test_calculate_bracket_size_exact_for_large_fields(self):
        """Powers of two and their neighbours above 2**50 round correctly."""
        assert calculate_bracket_size(2 ** 53) == 2 ** 53
        assert calculate_bracket_size(2 ** 53 + 1) == 2 ** 54
        assert calculate_bracket_size(1025) == 2048

    def test_calculate_byes(self):
        """Test byes calculation."""
        assert calculate_byes(8) == 0
        assert calculate_byes(5) == 3
        assert calculate_byes(12) == 4

    def test_winners_round_counts(self):
        """Each round halves the previous one down to the final."""
        assert winners_round_counts(2) == [1]
        assert winners_round_counts(8) == [4, 2, 1]
        assert winners_round_counts(32) == [16, 8, 4, 2, 1]


class TestSeedParticipants:
    """Tests for the seeding primitive."""

    def test_keeps_input_order(self):
        """Participants fill slots in input order, no re-seeding."""
        assert seed_participants(["D", "A", "C", "B"], 4) == ["D", "A", "C", "B"]

    def test_pads_with_none(self):
        """Unfilled slots are None."""
        assert seed_participants(["A", "B", "C"], 8) == ["A", "B", "C", None, None, None, None, None]

    def test_duplicates_are_kept(self):
        """Identifiers are not validated."""
        assert seed_participants(["A", "A"], 2) == ["A", "A"]


class TestAppendKnockoutRounds:
    """Tests for the shared round builder."""

    def test_halving_rounds_link_two_to_one(self):
        """When the next round is half the size, two matches feed one."""
        matches = []
        starts = append_knockout_rounds(matches, [4, 2, 1], WINNERS, ["A", "B", "C", "D", "E", "F", "G", "H"])
        assert starts == [0, 4, 6]
        assert [m.next_match_index for m in matches] == [4, 4, 5, 5, 6, 6, None]
        assert matches[3].players == ("G", "H")
        assert matches[4].is_placeholder

    def test_equal_rounds_link_one_to_one(self):
        """When consecutive rounds are the same size, each match feeds the same position."""
        matches = []
        append_knockout_rounds(matches, [2, 2, 1, 1], LOSERS)
        assert [m.next_match_index for m in matches] == [2, 3, 4, 4, 5, None]
        assert [m.round for m in matches] == [1, 1, 2, 2, 3, 4]
        assert all(m.bracket == LOSERS for m in matches)

    def test_appends_after_existing_matches(self):
        """Numbering and links continue from the existing list."""
        matches = []
        append_knockout_rounds(matches, [1], WINNERS, ["A", "B"])
        starts = append_knockout_rounds(matches, [1, 1], LOSERS)
        assert starts == [1, 2]
        assert [m.match_number for m in matches] == [1, 2, 3]
        assert matches[1].next_match_index == 2


class TestSingleElimination:
    """Tests for generate_single_elimination."""

    def test_fewer_than_two(self):
        """Less than 2 participants is an empty bracket, not an error."""
        assert generate_single_elimination([]) == []
        assert generate_single_elimination(["A"]) == []

    def test_two_players(self):
        """Two players play a single final with no outgoing link."""
        matches = generate_single_elimination(["A", "B"])
        assert len(matches) == 1
        assert matches[0].players == ("A", "B")
        assert matches[0].round == 1
        assert matches[0].bracket == WINNERS
        assert matches[0].next_match_index is None

    def test_four_players(self, four_players):
        """4 players: 2 semifinals linked to the final."""
        matches = generate_single_elimination(four_players)
        assert len(matches) == 3
        assert matches[0].players == ("A", "B")
        assert matches[1].players == ("C", "D")
        assert matches[2].is_placeholder
        assert matches[2].round == 2
        assert [m.next_match_index for m in matches] == [2, 2, None]

    def test_eight_players(self, eight_players):
        """8 players: 4 + 2 + 1 with floor(i/2) links."""
        matches = generate_single_elimination(eight_players)
        assert len(matches) == 7
        assert [m.round for m in matches] == [1, 1, 1, 1, 2, 2, 3]
        assert [m.next_match_index for m in matches] == [4, 4, 5, 5, 6, 6, None]

    def test_three_players_bye(self):
        """3 players: C gets a bye in the second first-round match."""
        matches = generate_single_elimination(["A", "B", "C"])
        assert len(matches) == 3
        assert matches[1].players == ("C", None)
        assert matches[1].is_bye
        assert matches[1].next_match_index == 2

    def test_five_players(self):
        """
        5 players: capacity 8, 7 matches.

        Seeding is by input order (slots 0-4 filled, 5-7 empty), so the three
        empty slots land in two first-round matches: (E, None) and (None, None).
        """
        matches = generate_single_elimination(["A", "B", "C", "D", "E"])
        assert len(matches) == 7
        first_round = [m for m in matches if m.round == 1]
        with_empty_slot = [m for m in first_round if m.player1 is None or m.player2 is None]
        assert len(with_empty_slot) == 2
        assert first_round[2].players == ("E", None)
        assert first_round[3].players == (None, None)

    def test_later_rounds_are_never_filled(self):
        """Only round 1 gets players."""
        matches = generate_single_elimination([f"P{i}" for i in range(16)])
        assert all(m.is_placeholder for m in matches if m.round > 1)

    @pytest.mark.parametrize("num_players", [2, 3, 5, 8, 13, 16, 31, 64])
    def test_structure(self, num_players):
        """C - 1 matches, contiguous numbering, forward links only, one final."""
        matches = generate_single_elimination([f"P{i}" for i in range(num_players)])
        bracket_size = calculate_bracket_size(num_players)
        assert len(matches) == bracket_size - 1
        assert [m.match_number for m in matches] == list(range(1, len(matches) + 1))
        for index, match in enumerate(matches):
            assert match.loser_next_match_index is None
            if match.next_match_index is not None:
                assert index < match.next_match_index < len(matches)
        assert [m.next_match_index for m in matches].count(None) == 1


class TestEliminationDisplay:
    """Tests for get_elimination_bracket_display."""

    def test_empty(self):
        display = get_elimination_bracket_display(["A"])
        assert display['rounds'] == {}
        assert display['bracket_size'] == 0
        assert display['total_matches'] == 0

    def test_display_six_teams(self):
        """6 teams: bracket of 8, two byes, rounds named by teams in round."""
        display = get_elimination_bracket_display(["A", "B", "C", "D", "E", "F"])
        assert display['bracket_size'] == 8
        assert display['total_rounds'] == 3
        assert display['total_teams'] == 6
        assert display['byes'] == 0  # both empty slots share the last match
        assert list(display['rounds'].keys()) == ["Quarterfinal", "Semifinal", "Final"]
        assert display['matches_per_round'] == {"Quarterfinal": 4, "Semifinal": 2, "Final": 1}
        assert display['total_matches'] == 7

    def test_display_counts_byes(self):
        """A single missing opponent is a bye."""
        display = get_elimination_bracket_display(["A", "B", "C"])
        assert display['byes'] == 1
        assert display['matches_per_round'] == {"Semifinal": 1, "Final": 1}
