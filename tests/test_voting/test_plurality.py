"""Tests for plurality voting system."""

import pytest
from tests.conftest import make_parties, make_votes, result_ids, result_scores

from ballotbox.models import SystemType, Vote
from ballotbox.voting.plurality import PluralitySystem


class TestPlurality:
    def setup_method(self):
        self.system = PluralitySystem()

    def test_name(self):
        assert self.system.name == "Single Vote"
        assert self.system.system_type is SystemType.SINGLE

    def test_clear_winner(self, abc_roster, clear_winner):
        """A, A, B → A=2, B=1, C=0, in that order."""
        result = self.system.tally(abc_roster, clear_winner)
        assert result.system_type is SystemType.SINGLE
        assert result_ids(result) == ["A", "B", "C"]
        assert result_scores(result) == {"A": 2, "B": 1, "C": 0}

    def test_clear_winner_percentages(self, abc_roster, clear_winner):
        result = self.system.tally(abc_roster, clear_winner)
        percentages = [r.percentage for r in result.party_results]
        assert percentages == pytest.approx([200 / 3, 100 / 3, 0])

    def test_no_seats(self, abc_roster, clear_winner):
        result = self.system.tally(abc_roster, clear_winner)
        assert all(r.seats is None for r in result.party_results)

    def test_party_names_carried(self, clear_winner):
        result = self.system.tally(make_parties("A", "B"), clear_winner)
        assert result.get_result("A").party_name == "Party A"

    def test_sorted_by_score(self, abc_roster):
        result = self.system.tally(abc_roster, make_votes("C", "C", "C", "B", "A", "B"))
        assert result_ids(result) == ["C", "B", "A"]

    def test_ties_keep_roster_order(self, abc_roster):
        result = self.system.tally(abc_roster, make_votes("C", "B", "C", "B"))
        assert result_ids(result) == ["B", "C", "A"]

    def test_no_votes(self, abc_roster):
        """Nothing to count → all zero, no division error."""
        result = self.system.tally(abc_roster, [])
        assert result_ids(result) == ["A", "B", "C"]
        assert all(r.score == 0 for r in result.party_results)
        assert all(r.percentage == 0 for r in result.party_results)

    def test_unknown_party_dropped(self):
        """A vote for an unknown party is dropped but still counted as cast."""
        result = self.system.tally(make_parties("A", "B"), [Vote("ghost")])
        assert result_scores(result) == {"A": 0, "B": 0}
        assert all(r.percentage == 0 for r in result.party_results)
        assert result.details["total_votes"] == 1
        assert result.details["ignored_votes"] == 1

    def test_unknown_party_in_denominator(self):
        result = self.system.tally(make_parties("A", "B"), make_votes("A", "ghost", "B", "A"))
        assert result.get_result("A").percentage == pytest.approx(50.0)
        assert result.get_result("B").percentage == pytest.approx(25.0)
        assert result.details["counted_votes"] == 3

    def test_rank_and_weight_ignored(self, abc_roster):
        votes = [Vote("A", rank=3), Vote("B", weight=10), Vote("B")]
        result = self.system.tally(abc_roster, votes)
        assert result_scores(result) == {"A": 1, "B": 2, "C": 0}

    def test_empty_roster(self, clear_winner):
        result = self.system.tally([], clear_winner)
        assert result.party_results == ()

    def test_inputs_not_mutated(self, abc_roster, clear_winner):
        roster_before = list(abc_roster)
        votes_before = list(clear_winner)
        self.system.tally(abc_roster, clear_winner)
        assert abc_roster == roster_before
        assert clear_winner == votes_before

    def test_tally_ballots_flattens(self, abc_roster):
        ballots = [[Vote("A")], [Vote("B")], [Vote("A")]]
        result = self.system.tally_ballots(abc_roster, ballots)
        assert result_scores(result) == {"A": 2, "B": 1, "C": 0}
