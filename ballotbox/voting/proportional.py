"""Proportional representation with D'Hondt seat allocation."""

import logging
from collections.abc import Sequence

from ballotbox.models import Party, SystemType, Vote, VotingResult
from ballotbox.voting import register_voting_system
from ballotbox.voting.base import InvalidBallotError, VotingSystem, build_result

logger = logging.getLogger(__name__)


DEFAULT_TOTAL_SEATS = 100


@register_voting_system
class ProportionalSystem(VotingSystem):
    """Proportional representation using the D'Hondt highest-averages method.

    Each party's total is the sum of its vote weights (a vote without a
    weight counts as 1). Seats are then awarded one at a time, for exactly
    ``total_seats`` rounds:
    1. Scan the roster in order, computing total / (seats so far + 1)
    2. The running maximum starts at 0 and is only replaced by a strictly
       greater quotient, so on equal quotients the earlier-listed party wins
    3. Award the seat to the holder of the maximum, if any quotient was > 0

    Percentages are shares of the weight of all votes cast, including votes
    for parties not on the roster, which win no seats. Results are ordered
    by vote total, not by seats.
    """

    SYSTEM_TYPE = SystemType.PROPORTIONAL

    def __init__(self, total_seats: int = DEFAULT_TOTAL_SEATS):
        self.total_seats = total_seats

    @property
    def name(self) -> str:
        return "Proportional Representation"

    @property
    def description(self) -> str:
        return "Seats are allocated in proportion to the votes each party receives."

    def tally(
        self, parties: Sequence[Party], votes: Sequence[Vote],
        total_seats: int | None = None,
    ) -> VotingResult:
        if total_seats is None:
            total_seats = self.total_seats
        if total_seats <= 0:
            raise InvalidBallotError(f"Seat count must be positive, got {total_seats}")

        totals: dict[str, float] = {party.id: 0 for party in parties}
        total_votes = 0
        for vote in votes:
            weight = 1 if vote.weight is None else vote.weight
            if weight < 0:
                raise InvalidBallotError(
                    f"Vote for {vote.party_id!r} has negative weight {weight}"
                )
            total_votes += weight
            if vote.party_id in totals:
                totals[vote.party_id] += weight

        seats, seat_awards = self._allocate_seats(parties, totals, total_seats)

        return build_result(
            self.system_type,
            parties,
            totals,
            denominator=total_votes,
            seats=seats,
            details={
                "total_seats": total_seats,
                "allocated_seats": sum(seats.values()),
                "total_votes": total_votes,
                "seat_awards": seat_awards,
            },
        )

    @staticmethod
    def _allocate_seats(
        parties: Sequence[Party], totals: dict[str, float], total_seats: int,
    ) -> tuple[dict[str, int], list[dict]]:
        """Run the D'Hondt rounds.

        Returns (seats per party, list of per-seat award details).
        """
        seats = {party.id: 0 for party in parties}
        seat_awards = []

        for seat in range(1, total_seats + 1):
            max_quotient = 0
            max_party = None
            for party in parties:
                quotient = totals[party.id] / (seats[party.id] + 1)
                if quotient > max_quotient:
                    max_quotient = quotient
                    max_party = party.id

            if max_party is None:
                # Nobody has any votes; no seat can be awarded this round
                continue

            seats[max_party] += 1
            seat_awards.append({
                "seat": seat,
                "party_id": max_party,
                "quotient": max_quotient,
            })

        if seat_awards:
            logger.info("allocated %d of %d seats", len(seat_awards), total_seats)
        else:
            logger.info("no votes to allocate %d seats from", total_seats)
        return seats, seat_awards
