"""Plurality (first-past-the-post) voting system."""

import logging
from collections.abc import Sequence

from ballotbox.models import Party, SystemType, Vote, VotingResult
from ballotbox.voting import register_voting_system
from ballotbox.voting.base import VotingSystem, build_result

logger = logging.getLogger(__name__)


@register_voting_system
class PluralitySystem(VotingSystem):
    """Single vote, first-past-the-post counting.

    Every vote naming a party on the roster adds one to that party's score.
    Votes naming an unknown party are dropped, but still count towards the
    percentage denominator, which is the raw number of votes cast.
    """

    SYSTEM_TYPE = SystemType.SINGLE

    @property
    def name(self) -> str:
        return "Single Vote"

    @property
    def description(self) -> str:
        return "Each voter gets one vote for their preferred party."

    def tally(self, parties: Sequence[Party], votes: Sequence[Vote]) -> VotingResult:
        scores = {party.id: 0 for party in parties}

        counted = 0
        for vote in votes:
            if vote.party_id in scores:
                scores[vote.party_id] += 1
                counted += 1

        total_votes = len(votes)
        if counted < total_votes:
            logger.debug("dropped %d votes for unknown parties", total_votes - counted)

        return build_result(
            self.system_type,
            parties,
            scores,
            denominator=total_votes,
            details={
                "total_votes": total_votes,
                "counted_votes": counted,
                "ignored_votes": total_votes - counted,
            },
        )
