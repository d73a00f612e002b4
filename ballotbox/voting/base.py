"""Abstract base class for voting systems, and shared result shaping."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from ballotbox.models import Party, PartyResult, SystemType, Vote, VotingResult


class InvalidBallotError(ValueError):
    """Raised when tally input breaks the ballot contract.

    Covers a non-positive seat count, a negative weight or a non-positive
    rank. Unknown party references are not an error.
    """
    pass


class VotingSystem(ABC):
    """Abstract base class for voting systems.

    Each voting system turns a roster of parties and the ballots cast for it
    into a VotingResult. Systems are registered via the
    @register_voting_system decorator in ballotbox/voting/__init__.py.
    """

    SYSTEM_TYPE: SystemType

    @property
    def system_type(self) -> SystemType:
        """The SystemType this system tallies."""
        return self.SYSTEM_TYPE

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of this voting system."""
        pass

    @property
    def description(self) -> str:
        """Optional description of how this voting system works."""
        return ""

    def tally_ballots(
        self, parties: Sequence[Party], ballots: Sequence[Sequence[Vote]],
    ) -> VotingResult:
        """Tally a session's ballots for this system.

        By default every ballot's votes are counted as one flat vote stream.
        Systems that need ballot boundaries override this.
        """
        votes = [vote for ballot in ballots for vote in ballot]
        return self.tally(parties, votes)

    @abstractmethod
    def tally(self, parties: Sequence[Party], votes: Sequence) -> VotingResult:
        """Calculate the result using this voting system.

        Args:
            parties: The roster, in the order used for tie-breaks
            votes: The votes (or ballots) cast for this system

        Returns:
            VotingResult with one PartyResult per party and calculation details
        """
        pass


def percentage(score: float, denominator: float) -> float:
    """Share of ``denominator`` held by ``score``, 0 when nothing was counted."""
    if denominator <= 0:
        return 0.0
    return score / denominator * 100


def build_result(
    system_type: SystemType,
    parties: Sequence[Party],
    scores: dict[str, float],
    denominator: float,
    seats: dict[str, int] | None = None,
    details: dict | None = None,
) -> VotingResult:
    """Build a VotingResult with one line per party, highest score first.

    The sort is stable, so parties with equal scores keep their roster order.
    """
    party_results = [
        PartyResult(
            party_id=party.id,
            party_name=party.name,
            score=scores[party.id],
            percentage=percentage(scores[party.id], denominator),
            seats=seats[party.id] if seats is not None else None,
        )
        for party in parties
    ]
    party_results.sort(key=lambda r: r.score, reverse=True)

    return VotingResult(
        system_type=system_type,
        party_results=tuple(party_results),
        details=details or {},
    )
