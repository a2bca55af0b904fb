from __future__ import annotations

import re

"""Fixed worksheet layout of an attendance roster.

Each section block of the roster looks like::

    1.15.2024 | <label> | ...      <- section metadata row (date-like first cell)
    ID        | LAST_NAME | SPRIDEN_PFN | SIGN-IN    <- header row
    X00000001 | Doe       | Jane        |            <- data rows
    ...

Column positions are fixed; header texts are matched loosely (see
``checkin.excel.header``).
"""

__all__ = [
    "COLUMN_IDENTIFIER",
    "COLUMN_LAST_NAME",
    "COLUMN_FIRST_NAME",
    "COLUMN_CHECK_IN",
    "REQUIRED_COLUMNS",
    "HEADER_VARIANTS",
    "SECTION_LABEL_COLUMNS",
    "UNKNOWN_SECTION",
    "IDENTIFIER_PATTERN",
    "SECTION_METADATA_PATTERN",
]

# 0-based column indices (A..D)
COLUMN_IDENTIFIER = 0
COLUMN_LAST_NAME = 1
COLUMN_FIRST_NAME = 2
COLUMN_CHECK_IN = 3

# Canonical names, in column order. Used in error details.
REQUIRED_COLUMNS: tuple[str, ...] = ("ID", "LAST_NAME", "SPRIDEN_PFN", "SIGN-IN")

# Accepted header spellings per slot (compared after normalization)
HEADER_VARIANTS: tuple[tuple[str, ...], ...] = (
    ("id", "studentid", "student_id", "xnumber"),
    ("lastname", "last_name", "lastnam"),
    ("spridenpfn", "firstname", "first_name", "firstnam"),
    ("signin", "sign_in", "checkin", "sign-in"),
)

# Section label lookup order on a metadata row: column D, then column B
SECTION_LABEL_COLUMNS: tuple[int, ...] = (3, 1)
UNKNOWN_SECTION = "Unknown Section"

IDENTIFIER_PATTERN = re.compile(r"^X\d{8}$")
SECTION_METADATA_PATTERN = re.compile(r"^\d+\.\d+\.\d+$")
