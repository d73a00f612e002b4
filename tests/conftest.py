"""Shared test helpers."""

from ballotbox.models import Party, Vote, VotingResult


def make_parties(*ids: str) -> list[Party]:
    """Build a roster where each party is named after its id."""
    return [Party(id=party_id, name=f"Party {party_id}") for party_id in ids]


def make_votes(*party_ids: str) -> list[Vote]:
    """Build plurality votes, one per party id given."""
    return [Vote(party_id) for party_id in party_ids]


def make_ranked_ballots(*rankings: str) -> list[list[Vote]]:
    """Build ranked ballots from compact strings.

    Args:
        rankings: One string per ballot, most preferred first,
                  e.g. "ABC" ranks A=1, B=2, C=3

    Returns:
        List of ballots, each a list of ranked Votes.
    """
    return [
        [Vote(party_id, rank=rank) for rank, party_id in enumerate(ranking, start=1)]
        for ranking in rankings
    ]


def make_weighted_votes(totals: dict[str, float]) -> list[Vote]:
    """Build one weighted vote per party carrying its whole total."""
    return [Vote(party_id, weight=weight) for party_id, weight in totals.items()]


def result_ids(result: VotingResult) -> list[str]:
    """Extract party ids from a result, in result order."""
    return [r.party_id for r in result.party_results]


def result_scores(result: VotingResult) -> dict[str, float]:
    return {r.party_id: r.score for r in result.party_results}


def result_seats(result: VotingResult) -> dict[str, int]:
    return {r.party_id: r.seats for r in result.party_results}
