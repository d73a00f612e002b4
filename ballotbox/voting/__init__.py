"""Voting systems for tallying party results."""

from ballotbox.models import SystemType

from .base import InvalidBallotError, VotingSystem

# Voting system registry - import systems here to register them
_voting_systems: dict[SystemType, type[VotingSystem]] = {}


def register_voting_system(system_class: type[VotingSystem]) -> type[VotingSystem]:
    """Decorator to register a voting system class under its system type."""
    _voting_systems[system_class.SYSTEM_TYPE] = system_class
    return system_class


def get_voting_system(system_type: SystemType, **options) -> VotingSystem:
    """Return an instance of the system registered for ``system_type``.

    Keyword options are passed to the system's constructor.

    Raises:
        KeyError: If no system is registered for that type
    """
    return _voting_systems[SystemType(system_type)](**options)


def get_all_voting_systems() -> list[VotingSystem]:
    """Return instances of all registered voting systems, in SystemType order."""
    return [
        _voting_systems[system_type]()
        for system_type in SystemType
        if system_type in _voting_systems
    ]


__all__ = [
    "InvalidBallotError",
    "VotingSystem",
    "get_all_voting_systems",
    "get_voting_system",
    "register_voting_system",
]
