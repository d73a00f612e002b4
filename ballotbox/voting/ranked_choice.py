"""Ranked choice (Instant Runoff Voting) system."""

import logging
from collections.abc import Sequence

from ballotbox.models import Party, SystemType, Vote, VotingResult
from ballotbox.voting import register_voting_system
from ballotbox.voting.base import InvalidBallotError, VotingSystem, build_result

logger = logging.getLogger(__name__)


@register_voting_system
class RankedChoiceSystem(VotingSystem):
    """Instant Runoff Voting over ranked ballots.

    Each ballot is one voter's list of ranked votes. Votes without a rank
    or naming an unknown party are ignored, and a party ranked twice on the
    same ballot keeps its best rank.

    For each round:
    1. Count every continuing ballot for its highest-ranked remaining party
    2. If someone holds a majority of continuing ballots, they win
    3. Otherwise, eliminate the party with fewest votes and transfer its
       ballots to their next remaining preference; ballots with no further
       preference are exhausted
    4. Repeat until a majority winner emerges

    Tiebreaker: among parties tied for fewest votes, the one listed first
    on the roster is eliminated.

    Scores are the final-round counts; eliminated parties score 0.
    """

    SYSTEM_TYPE = SystemType.RANKED

    @property
    def name(self) -> str:
        return "Ranked Choice"

    @property
    def description(self) -> str:
        return "Voters rank parties in order of preference."

    def tally_ballots(
        self, parties: Sequence[Party], ballots: Sequence[Sequence[Vote]],
    ) -> VotingResult:
        return self.tally(parties, ballots)

    def tally(
        self, parties: Sequence[Party], ballots: Sequence[Sequence[Vote]],
    ) -> VotingResult:
        roster = [party.id for party in parties]
        known = set(roster)
        preferences = [self._preferences(ballot, known) for ballot in ballots]

        first_preferences = {party_id: 0 for party_id in roster}
        for ranking in preferences:
            if ranking:
                first_preferences[ranking[0]] += 1

        votes, continuing, round_details = self._run_irv(roster, preferences)
        eliminated = [r["eliminated"] for r in round_details if "eliminated" in r]
        winner = round_details[-1].get("winner") if round_details else None

        scores = {party_id: votes.get(party_id, 0) for party_id in roster}

        return build_result(
            self.system_type,
            parties,
            scores,
            denominator=continuing,
            details={
                "rounds": round_details,
                "elimination_rounds": len(eliminated),
                "eliminated": eliminated,
                "winner": winner,
                "first_preferences": first_preferences,
                "total_ballots": len(preferences),
            },
        )

    @staticmethod
    def _preferences(ballot: Sequence[Vote], known: set[str]) -> list[str]:
        """Reduce a ballot to its party ids, most preferred first."""
        for vote in ballot:
            if vote.rank is not None and vote.rank <= 0:
                raise InvalidBallotError(
                    f"Vote for {vote.party_id!r} has non-positive rank {vote.rank}"
                )

        ranked = sorted(
            (v for v in ballot if v.rank is not None and v.party_id in known),
            key=lambda v: v.rank,
        )
        preferences: list[str] = []
        for vote in ranked:
            if vote.party_id not in preferences:
                preferences.append(vote.party_id)
        return preferences

    @staticmethod
    def _count_votes(
        preferences: list[list[str]], active: list[str],
    ) -> tuple[dict[str, int], int]:
        """Count each ballot for its first choice among ``active``.

        Returns (votes per active party in roster order, continuing ballots).
        """
        votes = {c: 0 for c in active}
        continuing = 0

        for ranking in preferences:
            for party_id in ranking:
                if party_id in votes:
                    votes[party_id] += 1
                    continuing += 1
                    break

        return votes, continuing

    def _run_irv(
        self, roster: list[str], preferences: list[list[str]],
    ) -> tuple[dict[str, int], int, list[dict]]:
        """Run elimination rounds until a majority winner emerges.

        Returns (final-round votes, final-round continuing ballots, list of
        round details). No rounds are run when no ballot names a party.
        """
        active = list(roster)
        round_details = []
        votes: dict[str, int] = {}
        continuing = 0

        round_num = 0
        while active:
            votes, continuing = self._count_votes(preferences, active)
            if continuing == 0:
                break

            round_num += 1
            majority_threshold = continuing // 2 + 1
            round_info = {
                "round": round_num,
                "votes": dict(votes),
                "continuing": continuing,
                "exhausted": len(preferences) - continuing,
                "majority_needed": majority_threshold,
            }

            # max/min return the first roster entry among equal counts
            leader = max(votes, key=votes.__getitem__)
            if votes[leader] >= majority_threshold:
                round_info["winner"] = leader
                round_info["method"] = "majority"
                round_details.append(round_info)
                logger.info(
                    "%s wins in round %d with %d of %d continuing ballots",
                    leader, round_num, votes[leader], continuing,
                )
                break

            eliminated = min(votes, key=votes.__getitem__)
            round_info["eliminated"] = eliminated
            round_info["method"] = "elimination"
            round_details.append(round_info)
            logger.info(
                "round %d: eliminating %s with %d votes",
                round_num, eliminated, votes[eliminated],
            )

            active.remove(eliminated)

        return votes, continuing, round_details
