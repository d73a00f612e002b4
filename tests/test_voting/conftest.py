"""Shared fixtures for voting system tests."""

import pytest
from tests.conftest import make_parties, make_ranked_ballots, make_votes


@pytest.fixture
def abc_roster():
    """Three parties listed A, B, C."""
    return make_parties("A", "B", "C")


@pytest.fixture
def clear_winner():
    """Plurality dataset: A, A, B → A=2, B=1, C=0."""
    return make_votes("A", "A", "B")


@pytest.fixture
def ranked_majority():
    """Ranked dataset with a first-round majority.

        Ballots   1st 2nd 3rd
        x3         A   B   C
        x1         B   C   A
        x1         C   B   A

    A holds 3 of 5 first preferences → wins in round 1.
    """
    return make_ranked_ballots("ABC", "ABC", "ABC", "BCA", "CBA")


@pytest.fixture
def ranked_runoff():
    """Ranked dataset where the first-round leader loses after a transfer.

        Ballots   1st 2nd 3rd
        x4         A   B   C
        x3         B   C   A
        x2         C   B   A

    Round 1: A=4, B=3, C=2 (9 continuing, 5 needed). C eliminated.
    Round 2: A=4, B=5 → B wins.
    """
    return make_ranked_ballots(
        "ABC", "ABC", "ABC", "ABC",
        "BCA", "BCA", "BCA",
        "CBA", "CBA",
    )
