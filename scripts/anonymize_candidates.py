"""Anonymize an AEC candidates CSV file.

Replaces every candidate's names and contact details with fake ones
generated by faker with a fixed seed, keeping the state, ticket, ballot
position and party columns intact so the file still counts the same way.

Usage:
    python scripts/anonymize_candidates.py 2016federalelection-all-candidates.csv
    python scripts/anonymize_candidates.py candidates.csv -o output.csv --state TAS
"""

import argparse
import csv
import sys
from pathlib import Path

from faker import Faker

sys.path.insert(0, str(Path(__file__).parent.parent))

from senate.parsers.candidates import CANDIDATE_FIELDS  # noqa: E402

FIXTURES_DIR = Path(__file__).parent.parent / "tests" / "test_parsers" / "fixtures"
DEFAULT_OUTPUT = FIXTURES_DIR / "candidates.csv"

SEED = 20160702

BLANKED_FIELDS = (
    "occupation",
    "address_1",
    "address_2",
    "postal_address_1",
    "postal_address_2",
    "contact_work_ph",
    "contact_home_ph",
    "contact_fax",
    "contact_mobile_no",
    "contact_email",
)


def generate_fake_names(names: set[tuple[str, str]], seed: int) -> dict[tuple[str, str], tuple[str, str]]:
    """Map each real (surname, given names) pair to a fake pair.

    Surnames stay upper case, as the AEC prints them. The same person gets
    the same fake name wherever they appear in the file.
    """
    fake = Faker("en_AU")
    Faker.seed(seed)

    mapping: dict[tuple[str, str], tuple[str, str]] = {}
    used: set[tuple[str, str]] = set(names)
    for name in sorted(names):
        fake_name = (fake.last_name().upper(), fake.first_name())
        while fake_name in used:
            fake_name = (fake.last_name().upper(), fake.first_name())
        used.add(fake_name)
        mapping[name] = fake_name
    return mapping


def anonymize_rows(rows: list[list[str]], mapping: dict[tuple[str, str], tuple[str, str]]) -> list[list[str]]:
    surname_idx = CANDIDATE_FIELDS.index("surname")
    given_idx = CANDIDATE_FIELDS.index("ge_nm")
    blanked = [CANDIDATE_FIELDS.index(f) for f in BLANKED_FIELDS]

    result = []
    for row in rows:
        row = list(row)
        row[surname_idx], row[given_idx] = mapping[(row[surname_idx], row[given_idx])]
        for idx in blanked:
            row[idx] = ""
        result.append(row)
    return result


def main():
    parser = argparse.ArgumentParser(
        description="Anonymize an AEC candidates CSV file")
    parser.add_argument("input", help="Path to the input CSV file")
    parser.add_argument("-o", "--output", default=str(DEFAULT_OUTPUT),
                        help=f"Output path (default: {DEFAULT_OUTPUT})")
    parser.add_argument("--state", default=None,
                        help="Only keep rows for this state")
    args = parser.parse_args()

    with open(args.input, encoding="utf-8-sig", newline="") as f:
        reader = csv.reader(f)
        header = next(reader)
        rows = [row for row in reader if len(row) == len(CANDIDATE_FIELDS)]

    if args.state:
        state_idx = CANDIDATE_FIELDS.index("state_ab")
        rows = [row for row in rows if row[state_idx] == args.state]

    surname_idx = CANDIDATE_FIELDS.index("surname")
    given_idx = CANDIDATE_FIELDS.index("ge_nm")
    names = {(row[surname_idx], row[given_idx]) for row in rows}
    print(f"Found {len(names)} unique candidates in {len(rows)} rows")

    mapping = generate_fake_names(names, SEED)
    result = anonymize_rows(rows, mapping)

    # Verify no original names remain
    remaining = {(row[surname_idx], row[given_idx]) for row in result} & names
    if remaining:
        print(f"WARNING: {len(remaining)} names still found: {sorted(remaining)}")
    else:
        print("All names successfully replaced.")

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        writer.writerows(result)
    print(f"Written to {output_path}")


if __name__ == "__main__":
    main()
