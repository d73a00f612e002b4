"""Tests for the demo session generator script."""

from scripts.generate_session import generate_session

from ballotbox.models import SystemType
from ballotbox.session import SessionState, VotingSession, calculate_results


class TestGenerateSession:
    def test_shape(self):
        document = generate_session(num_parties=4, num_voters=25, total_seats=10, seed=7)
        assert len(document["parties"]) == 4
        assert len({p["name"] for p in document["parties"]}) == 4
        for key in ["single", "ranked", "proportional"]:
            assert len(document["ballots"][key]) == 25

    def test_reproducible(self):
        first = generate_session(3, 10, 5, seed=42)
        second = generate_session(3, 10, 5, seed=42)
        assert first == second

    def test_document_tallies(self):
        document = generate_session(num_parties=3, num_voters=50, total_seats=12, seed=1)
        session = calculate_results(VotingSession.from_dict(document))
        assert session.state is SessionState.RESULTS_READY
        proportional = session.results[SystemType.PROPORTIONAL]
        assert sum(r.seats for r in proportional.party_results) == 12
        assert session.results[SystemType.RANKED].details["winner"] is not None
