"""Generate a fake voting session document for demos and manual testing.

Builds a roster of made-up party names using faker with a fixed seed, casts
random ballots for every voting system, and writes the session as JSON in
the shape accepted by api/tally.py.

Usage:
    python scripts/generate_session.py
    python scripts/generate_session.py -p 5 -v 500 -o session.json
"""

import argparse
import json
import random
from pathlib import Path

from faker import Faker

DEFAULT_OUTPUT = Path("session.json")

SEED = 20260201

PARTY_SUFFIXES = ["Party", "Alliance", "Movement", "League", "Union", "Front"]


def generate_party_names(count: int, fake: Faker) -> list[str]:
    """Generate ``count`` distinct party names like "Harbor Alliance"."""
    names: list[str] = []
    while len(names) < count:
        name = f"{fake.unique.word().title()} {fake.random_element(PARTY_SUFFIXES)}"
        if name not in names:
            names.append(name)
    return names


def generate_ballots(party_ids: list[str], num_voters: int, rng: random.Random) -> dict:
    """Cast one random ballot per voter for each voting system.

    Ranked ballots rank a random non-empty prefix of a shuffled roster.
    Proportional ballots give a single party a weight of 1-5.
    """
    single = []
    ranked = []
    proportional = []

    for _ in range(num_voters):
        single.append([{"party_id": rng.choice(party_ids)}])

        order = rng.sample(party_ids, len(party_ids))
        depth = rng.randint(1, len(order))
        ranked.append([
            {"party_id": party_id, "rank": rank}
            for rank, party_id in enumerate(order[:depth], start=1)
        ])

        proportional.append([{"party_id": rng.choice(party_ids), "weight": rng.randint(1, 5)}])

    return {"single": single, "ranked": ranked, "proportional": proportional}


def generate_session(num_parties: int, num_voters: int, total_seats: int, seed: int) -> dict:
    """Build a complete session document."""
    fake = Faker()
    Faker.seed(seed)
    rng = random.Random(seed)

    names = generate_party_names(num_parties, fake)
    parties = [{"id": f"p{i}", "name": name} for i, name in enumerate(names, start=1)]
    party_ids = [p["id"] for p in parties]

    return {
        "id": f"demo-{seed}",
        "parties": parties,
        "systems": ["single", "ranked", "proportional"],
        "total_seats": total_seats,
        "ballots": generate_ballots(party_ids, num_voters, rng),
    }


def main():
    parser = argparse.ArgumentParser(
        description="Generate a fake voting session document")
    parser.add_argument("-p", "--parties", type=int, default=4,
                        help="Number of parties (default: 4)")
    parser.add_argument("-v", "--voters", type=int, default=100,
                        help="Number of voters (default: 100)")
    parser.add_argument("-s", "--seats", type=int, default=100,
                        help="Seats for the proportional system (default: 100)")
    parser.add_argument("--seed", type=int, default=SEED,
                        help=f"Random seed (default: {SEED})")
    parser.add_argument("-o", "--output", default=str(DEFAULT_OUTPUT),
                        help=f"Output path (default: {DEFAULT_OUTPUT})")
    args = parser.parse_args()

    session = generate_session(args.parties, args.voters, args.seats, args.seed)

    for party in session["parties"]:
        print(f"  {party['id']}: {party['name']}")

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(session, indent=2), encoding="utf-8")
    print(f"Written to {output_path}")


if __name__ == "__main__":
    main()
