from __future__ import annotations

import re

from checkin.logging.init import reset_logging

"""SUMMARY line format contract."""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+rows=([0-9]+)\s+processed=([0-9]+)\s+skipped=([0-9]+)\s+"
    r"errors=([0-9]+)\s+requires_action=(yes|no)$"
)


def test_summary_pattern_example_line():
    m = SUMMARY_PATTERN.match("SUMMARY rows=120 processed=110 skipped=8 errors=5 requires_action=no")
    assert m, "SUMMARY line should match contract regex"
    assert m.group(5) == "no"


def test_cli_emits_exactly_one_summary_line(roster_file, two_section_rows, capsys):
    from checkin.cli.__main__ import main

    reset_logging()
    main(["inspect", str(roster_file(two_section_rows))])
    lines = [line for line in capsys.readouterr().out.splitlines() if line.startswith("SUMMARY")]
    reset_logging()
    assert len(lines) == 1
    m = SUMMARY_PATTERN.match(lines[0])
    assert m
    processed, skipped, total = int(m.group(2)), int(m.group(3)), int(m.group(1))
    assert processed + skipped <= total
