"""Voting session state and its transitions.

A VotingSession is an immutable value. Every operation on it is a plain
function returning a new session, so a controller (a web handler, a CLI)
only ever has to hold on to the latest value:

    session = create_session()
    session = add_party(session, "Greens")
    session = submit_votes(session, SystemType.SINGLE, [Vote(party_id)])
    session = calculate_results(session)

The session moves through three states: ``empty`` (no parties),
``collecting`` (parties on the roster, ballots being submitted) and
``results_ready``. Changing the roster, the selected systems or the ballots
drops any results computed earlier.
"""

import uuid
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Self

from ballotbox.models import Party, SystemType, Vote, VotingResult
from ballotbox.results import results_to_dict, tally_session
from ballotbox.voting.proportional import DEFAULT_TOTAL_SEATS

DEFAULT_SYSTEMS: tuple[SystemType, ...] = tuple(SystemType)


class SessionError(ValueError):
    """Raised when a session operation is not valid in the session's state."""
    pass


class SessionState(str, Enum):
    EMPTY = "empty"
    COLLECTING = "collecting"
    RESULTS_READY = "results_ready"


@dataclass(frozen=True)
class VotingSession:
    """Roster, selected systems and ballots of one voting exercise.

    Attributes:
        id: Session identifier
        parties: The roster, in display and tie-break order
        systems: Selected voting systems, in SystemType order
        ballots: system type -> ballots cast, each ballot a tuple of Votes
                 (read-only mapping)
        total_seats: Seats to allocate under the proportional system
        results: system type -> VotingResult, once calculated (read-only mapping)
    """
    id: str
    parties: tuple[Party, ...] = ()
    systems: tuple[SystemType, ...] = DEFAULT_SYSTEMS
    ballots: Mapping[SystemType, tuple[tuple[Vote, ...], ...]] = field(
        default_factory=dict, hash=False)
    total_seats: int = DEFAULT_TOTAL_SEATS
    results: Mapping[SystemType, VotingResult] | None = field(default=None, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "ballots", MappingProxyType(dict(self.ballots)))
        if self.results is not None:
            object.__setattr__(self, "results", MappingProxyType(dict(self.results)))

    @property
    def state(self) -> SessionState:
        if self.results is not None:
            return SessionState.RESULTS_READY
        if not self.parties:
            return SessionState.EMPTY
        return SessionState.COLLECTING

    def get_ballots(self, system_type: SystemType) -> tuple[tuple[Vote, ...], ...]:
        """Get the ballots submitted for a system (empty if none)."""
        return self.ballots.get(system_type, ())

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "id": self.id,
            "state": self.state.value,
            "parties": [p.to_dict() for p in self.parties],
            "systems": [s.value for s in self.systems],
            "total_seats": self.total_seats,
            "ballots": {
                system_type.value: [[v.to_dict() for v in ballot] for ballot in ballots]
                for system_type, ballots in self.ballots.items()
            },
            "results": results_to_dict(self.results) if self.results is not None else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Build a session (without results) from a JSON document.

        Expected shape::

            {
                "id": "optional",
                "parties": [{"id": "a", "name": "Alpha"}, ...],
                "systems": ["single", "ranked", "proportional"],
                "total_seats": 100,
                "ballots": {
                    "single": [[{"party_id": "a"}], ...],
                    "ranked": [[{"party_id": "a", "rank": 1}, ...], ...],
                    "proportional": [[{"party_id": "a", "weight": 2}], ...]
                }
            }

        A ballot may also be given as a single vote object.

        Raises:
            SessionError: If the document is malformed
        """
        try:
            parties = tuple(Party.from_dict(p) for p in data.get("parties", []))
            systems = _normalize_systems(data.get("systems", DEFAULT_SYSTEMS))

            ballots = {}
            for key, raw_ballots in data.get("ballots", {}).items():
                system_type = _system_type(key)
                ballots[system_type] = tuple(
                    _parse_ballot(raw_ballot) for raw_ballot in raw_ballots
                )

            return cls(
                id=str(data.get("id") or uuid.uuid4()),
                parties=parties,
                systems=systems,
                ballots=ballots,
                total_seats=_total_seats(data.get("total_seats", DEFAULT_TOTAL_SEATS)),
            )
        except SessionError:
            raise
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise SessionError(f"Invalid session document: {e}") from e


def _system_type(value: Any) -> SystemType:
    try:
        return SystemType(value)
    except ValueError:
        raise SessionError(f"Unknown voting system: {value!r}") from None


def _total_seats(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise SessionError(f"total_seats must be an integer, got {value!r}")
    return value


def _normalize_systems(systems: Iterable[Any]) -> tuple[SystemType, ...]:
    selected = {_system_type(s) for s in systems}
    return tuple(s for s in SystemType if s in selected)


def _parse_ballot(raw_ballot: Any) -> tuple[Vote, ...]:
    if isinstance(raw_ballot, dict):
        raw_ballot = [raw_ballot]
    return tuple(Vote.from_dict(v) for v in raw_ballot)


def create_session(
    parties: Sequence[Party] = (),
    systems: Iterable[SystemType] | None = None,
    total_seats: int = DEFAULT_TOTAL_SEATS,
) -> VotingSession:
    """Start a new session with a fresh identifier."""
    return VotingSession(
        id=str(uuid.uuid4()),
        parties=tuple(parties),
        systems=DEFAULT_SYSTEMS if systems is None else _normalize_systems(systems),
        total_seats=total_seats,
    )


def add_party(session: VotingSession, name: str) -> VotingSession:
    """Append a new party with a generated id to the roster."""
    party = Party(id=str(uuid.uuid4()), name=name)
    return replace(session, parties=session.parties + (party,), results=None)


def remove_party(session: VotingSession, party_id: str) -> VotingSession:
    """Drop a party from the roster. Ballots naming it are kept."""
    parties = tuple(p for p in session.parties if p.id != party_id)
    return replace(session, parties=parties, results=None)


def toggle_voting_system(session: VotingSession, system_type: SystemType) -> VotingSession:
    """Select the system if it is not selected, deselect it otherwise."""
    system_type = _system_type(system_type)
    if system_type in session.systems:
        systems = tuple(s for s in session.systems if s is not system_type)
    else:
        systems = _normalize_systems(session.systems + (system_type,))
    return replace(session, systems=systems, results=None)


def submit_votes(
    session: VotingSession, system_type: SystemType, votes: Sequence[Vote],
) -> VotingSession:
    """Record one voter's ballot for a system.

    Raises:
        SessionError: If the system is not selected in this session
    """
    system_type = _system_type(system_type)
    if system_type not in session.systems:
        raise SessionError(f"Voting system {system_type.value!r} is not selected")

    ballots = dict(session.ballots)
    ballots[system_type] = session.get_ballots(system_type) + (tuple(votes),)
    return replace(session, ballots=ballots, results=None)


def calculate_results(session: VotingSession) -> VotingSession:
    """Tally every selected system and store the results on a new session.

    Raises:
        SessionError: If the session has no parties
        InvalidBallotError: If submitted ballots break the ballot contract
    """
    if not session.parties:
        raise SessionError("Cannot calculate results without any parties")
    return replace(session, results=tally_session(session))


def reset_session() -> VotingSession:
    """Discard everything and start over with an empty session."""
    return create_session()
