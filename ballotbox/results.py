"""Orchestrator: run every selected voting system over a session."""

from typing import TYPE_CHECKING, Any

from ballotbox.models import SystemType, VotingResult
from ballotbox.voting import get_voting_system

# Import voting systems to register them
from ballotbox.voting import plurality  # noqa: F401
from ballotbox.voting import proportional  # noqa: F401
from ballotbox.voting import ranked_choice  # noqa: F401

if TYPE_CHECKING:
    from ballotbox.session import VotingSession


def tally_session(session: "VotingSession") -> dict[SystemType, VotingResult]:
    """Tally the ballots of every system selected in the session.

    Args:
        session: The session holding the roster and the ballots per system

    Returns:
        Mapping of system type to its VotingResult, in selection order

    Raises:
        InvalidBallotError: If any system's ballots break the ballot contract
    """
    results = {}
    for system_type in session.systems:
        options = {}
        if system_type is SystemType.PROPORTIONAL:
            options["total_seats"] = session.total_seats

        voting_system = get_voting_system(system_type, **options)
        results[system_type] = voting_system.tally_ballots(
            session.parties, session.ballots.get(system_type, ()),
        )
    return results


def results_to_dict(results: dict[SystemType, VotingResult]) -> dict[str, Any]:
    """Convert a results map to a JSON-serializable dictionary."""
    return {
        system_type.value: result.to_dict()
        for system_type, result in results.items()
    }
