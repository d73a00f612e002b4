"""Core data models for parties, votes and voting results."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Self


class SystemType(str, Enum):
    """The voting systems a session can run."""
    SINGLE = "single"
    RANKED = "ranked"
    PROPORTIONAL = "proportional"


@dataclass(frozen=True)
class Party:
    """A party on the roster.

    Attributes:
        id: Unique identifier
        name: Display name (may collide across parties)
    """
    id: str
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(id=str(data["id"]), name=str(data.get("name", "")))


@dataclass(frozen=True)
class Vote:
    """A single mark on a ballot.

    A plurality vote is the bare ``Vote(party_id)`` form. ``rank`` is only
    read by the ranked tally and ``weight`` only by the proportional tally.
    ``party_id`` is not checked against any roster.

    Example:
        >>> Vote("green")
        >>> Vote("green", rank=1)
        >>> Vote("green", weight=2.5)
    """
    party_id: str
    rank: int | None = None
    weight: float | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"party_id": self.party_id}
        if self.rank is not None:
            data["rank"] = self.rank
        if self.weight is not None:
            data["weight"] = self.weight
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Build a Vote from a JSON object.

        Raises:
            ValueError: If ``rank`` is not an integer or ``weight`` is not
                a number
        """
        rank = data.get("rank")
        if rank is not None and (isinstance(rank, bool) or not isinstance(rank, int)):
            raise ValueError(f"rank must be an integer, got {rank!r}")

        weight = data.get("weight")
        if weight is not None and (
            isinstance(weight, bool) or not isinstance(weight, (int, float))
        ):
            raise ValueError(f"weight must be a number, got {weight!r}")

        return cls(party_id=str(data["party_id"]), rank=rank, weight=weight)


@dataclass(frozen=True)
class PartyResult:
    """One party's line in a voting result.

    Attributes:
        party_id: Party identifier
        party_name: Party display name
        score: Vote count (or weighted total for proportional)
        percentage: Share of the countable votes, 0-100
        seats: Seats won, only set by the proportional tally
    """
    party_id: str
    party_name: str
    score: float
    percentage: float
    seats: int | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "party_id": self.party_id,
            "party_name": self.party_name,
            "score": self.score,
            "percentage": self.percentage,
        }
        if self.seats is not None:
            data["seats"] = self.seats
        return data


@dataclass(frozen=True)
class VotingResult:
    """Result from a voting system.

    Attributes:
        system_type: The system that produced this result
        party_results: One entry per roster party, highest score first
        details: System-specific details for transparency/debugging
                 (e.g., elimination rounds, seat awards). Stored as a
                 read-only mapping; treat the values inside as read-only too.
    """
    system_type: SystemType
    party_results: tuple[PartyResult, ...]
    details: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "details", MappingProxyType(dict(self.details)))

    def get_result(self, party_id: str) -> PartyResult | None:
        """Get the result line for a party, or None if not found."""
        for r in self.party_results:
            if r.party_id == party_id:
                return r
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "system_type": self.system_type.value,
            "party_results": [r.to_dict() for r in self.party_results],
            "details": dict(self.details),
        }
