#!/usr/bin/env python3
"""Sample roster generation script.

Generates a roster workbook in the layout read by the check-in tool, for
manual testing and for exercising the scanner on larger sheets:

- per section: a metadata row (``M.D.YYYY`` date, section label in column D)
- a header row (ID / LAST_NAME / SPRIDEN_PFN / SIGN-IN)
- data rows with X-number identifiers

Optional defects (malformed identifiers, blank identifiers, a broken header)
can be mixed in to produce an import that reports issues or pauses.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

LAST_NAMES = ["Doe", "Smith", "Garcia", "Nguyen", "Okafor", "Kowalski", "Haddad", "Tanaka", "Silva", "Murphy"]
FIRST_NAMES = ["Jane", "John", "Maria", "Linh", "Chidi", "Anna", "Omar", "Yuki", "Lucas", "Aoife"]
HEADER = ["ID", "LAST_NAME", "SPRIDEN_PFN", "SIGN-IN"]


def generate_roster_rows(
    sections: int,
    rows_per_section: int,
    *,
    invalid_ratio: float = 0.0,
    missing_ratio: float = 0.0,
    broken_header_section: int | None = None,
    seed: int = 42,
) -> list[list[str]]:
    """Build the sheet as a list of rows (strings, "" for empty cells).

    Args:
        sections: Number of section blocks
        rows_per_section: Data rows per section
        invalid_ratio: Share of data rows with a malformed identifier
        missing_ratio: Share of data rows with an empty identifier
        broken_header_section: 1-based section whose header loses a column
        seed: Random seed for reproducible data

    Returns:
        Sheet rows ready for ``pd.DataFrame(rows).to_excel(header=False)``
    """
    rng = np.random.default_rng(seed)
    sheet: list[list[str]] = []
    next_id = 1

    for s in range(1, sections + 1):
        sheet.append([f"{s}.{15 + s}.2024", "", "", f"Section {s:02d}"])
        header = list(HEADER)
        if broken_header_section == s:
            header[2] = ""
        sheet.append(header)

        for _ in range(rows_per_section):
            identifier = f"X{next_id:08d}"
            next_id += 1
            roll = rng.random()
            if roll < invalid_ratio:
                identifier = identifier[:-2]
            elif roll < invalid_ratio + missing_ratio:
                identifier = ""
            sheet.append([
                identifier,
                str(rng.choice(LAST_NAMES)),
                str(rng.choice(FIRST_NAMES)),
                "",
            ])
    return sheet


def create_roster_file(output_path: Path, rows: list[list[str]], sheet_name: str = "Roster") -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, header=False, index=False)
    print(f"Created roster file: {output_path}")
    print(f"  Sheet rows: {len(rows)}")


def main() -> int:
    """Main CLI interface for roster generation."""
    parser = argparse.ArgumentParser(
        description="Generate a sample attendance roster workbook",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Two sections of 25 attendees
  %(prog)s roster.xlsx

  # Larger roster with some malformed identifiers
  %(prog)s big.xlsx --sections 10 --rows 200 --invalid-ratio 0.02

  # Roster whose second header is incomplete (import pauses)
  %(prog)s paused.xlsx --broken-header 2
        """,
    )
    parser.add_argument("output", type=Path, help="Output workbook path")
    parser.add_argument("--sections", type=int, default=2, help="Number of sections (default: 2)")
    parser.add_argument("--rows", type=int, default=25, help="Data rows per section (default: 25)")
    parser.add_argument("--invalid-ratio", type=float, default=0.0, help="Share of malformed identifiers")
    parser.add_argument("--missing-ratio", type=float, default=0.0, help="Share of blank identifiers")
    parser.add_argument("--broken-header", type=int, default=None, help="Section whose header loses a column")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.sections <= 0 or args.rows <= 0:
        print("Error: --sections and --rows must be positive", file=sys.stderr)
        return 1
    if not 0.0 <= args.invalid_ratio + args.missing_ratio <= 1.0:
        print("Error: ratios must add up to at most 1.0", file=sys.stderr)
        return 1

    rows = generate_roster_rows(
        args.sections,
        args.rows,
        invalid_ratio=args.invalid_ratio,
        missing_ratio=args.missing_ratio,
        broken_header_section=args.broken_header,
        seed=args.seed,
    )
    try:
        create_roster_file(args.output, rows)
    except OSError as e:
        print(f"Error creating roster file: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
