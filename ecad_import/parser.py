from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

from typing_extensions import Literal

from .errors import (
    ColumnCountError,
    FormatError,
    MissingAnchorError,
    StructuralError,
    UnknownRoleError,
)
from .records import CATEGORIES, Pseudonym, RightHolder, Work, source_reference

# Work columns are spaced more generously than right holder sub-columns.
WORK_COLUMN_GAP = 4
RIGHT_HOLDER_COLUMN_GAP = 2
WORK_FIELD_COUNT = 5

FIRST_COLUMN_IS_NUMBER_RE = re.compile(r"\d+\s")

# A row number followed by an identifier ("T-...") or a lone "missing
# identifier" dash.
WORK_LINE_RE = re.compile(r"\d+\s+(?:T-|-(?=\s|$))")
WORK_ID_RE = re.compile(r"(?P<id>\d+)\s+")
WORK_COLUMNS_RE = re.compile(r"\s{%d,}" % WORK_COLUMN_GAP)

RIGHT_HOLDER_COLUMNS_RE = re.compile(r"\s{%d,}" % RIGHT_HOLDER_COLUMN_GAP)

# Role code and share, e.g. "    CA  33,33".
ROLE_SHARE_RE = re.compile(
    r"\s+(?P<role>[A-Za-z]{1,2})\s{1,3}(?P<share>\d[\d.,]*)(?=\s|$)"
)

REGISTRY_NUMBER_RE = re.compile(r"\d[\d.]*")
LETTERS_RE = re.compile(r"[A-Z]+")

ColumnKind = Literal["society", "pseudonym"]


@dataclass(frozen=True)
class RightHolderTokens:
    id: str
    name: str
    pseudonym: Optional[str]
    registry_number: Optional[str]
    society: Optional[str]
    role: str
    share: str


# -----------------------------
# Line classification
# -----------------------------
def is_content_line(line: str) -> bool:
    return FIRST_COLUMN_IS_NUMBER_RE.match(line) is not None


def is_work_line(line: str) -> bool:
    return WORK_LINE_RE.match(line) is not None


def content_lines(lines: Iterable[str]) -> List[str]:
    """Keep only rows whose first column is a number; page furniture is dropped."""
    return [line for line in lines if is_content_line(line)]


# -----------------------------
# Work lines
# -----------------------------
def parse_work(line: str) -> Work:
    """
    Split a work line into its columns.

    Columns: row id, identifier (or "-"), title, status, created date.
    The row id is taken first since it may sit closer to the identifier than
    the other columns sit to each other. Missing trailing columns are left
    empty; extra columns are ignored.
    """
    text = line.strip()
    match = WORK_ID_RE.match(text)
    if match:
        rest = text[match.end() :]
        tokens = [match.group("id")] + WORK_COLUMNS_RE.split(rest)
    else:
        tokens = WORK_COLUMNS_RE.split(text)

    tokens = [token.strip() for token in tokens[:WORK_FIELD_COUNT]]
    tokens += [""] * (WORK_FIELD_COUNT - len(tokens))
    work_id, external_code, title, status, created_at = tokens

    return {
        "registry_work_id": work_id,
        "external_code": external_code,
        "title": title,
        "status": status,
        "created_at": created_at,
        "right_holders": [],
        "source_references": [source_reference(work_id)],
    }


# -----------------------------
# Right holder lines
# -----------------------------
def split_columns(text: str, separator: re.Pattern[str]) -> List[Tuple[str, int, int]]:
    """Return (column, start, end) for each column between separator matches."""
    columns: List[Tuple[str, int, int]] = []
    start = 0
    for match in separator.finditer(text):
        if match.start() > start:
            columns.append((text[start : match.start()], start, match.start()))
        start = match.end()
    if start < len(text):
        columns.append((text[start:], start, len(text)))
    return columns


def gap_before(text: str, index: int) -> int:
    head = text[:index]
    return len(head) - len(head.rstrip())


def gap_after(text: str, index: int) -> int:
    tail = text[index:]
    return len(tail) - len(tail.lstrip())


def classify_third_column(left_gap: int, right_gap: int) -> ColumnKind:
    """
    Decide whether a lone third column is a society or a pseudonym.

    Fields are right-aligned in the report, so a column with more blank space
    on its left than on its right sits in the society position.
    """
    if left_gap > right_gap:
        return "society"
    return "pseudonym"


def split_registry_and_society(text: str) -> Tuple[Optional[str], Optional[str]]:
    """Split the combined "12.345.678 BMI" column; either part may be missing."""
    registry_number = None
    society = None
    match = REGISTRY_NUMBER_RE.search(text)
    if match:
        registry_number = match.group(0).replace(".", "") or None
    match = LETTERS_RE.search(text)
    if match:
        society = match.group(0)
    return registry_number, society


def normalize_share(token: str, line: Optional[str] = None) -> float:
    """
    Parse a printed share ("33,33" -> 33.33). The value keeps its printed
    magnitude; it is not divided by 100.
    """
    value = token.strip()
    if "," in value:
        value = value.replace(".", "").replace(",", ".")
    try:
        return float(value)
    except ValueError as exc:
        raise FormatError(f"Invalid share value: {token!r}", line) from exc


def find_role_share(text: str) -> Optional[re.Match[str]]:
    """
    Locate the role/share pair.

    A short pseudonym followed by a registry number ("DJ  12.345.678") looks
    like a role and share too, so the last pair with a known role code wins.
    Without one, the first pair is returned and its role is rejected later.
    """
    matches = list(ROLE_SHARE_RE.finditer(text))
    if not matches:
        return None
    known = [match for match in matches if match.group("role") in CATEGORIES]
    if known:
        return known[-1]
    return matches[0]


def split_right_holder(line: str) -> RightHolderTokens:
    """
    Split a right holder line into its tokens.

    Mandatory: id, name, role, share. Optional: pseudonym, registry number,
    society. Trailing columns (date, link) are ignored.
    """
    text = line.rstrip()

    # The role/share pair is the most regular part of the line, so split
    # around it first.
    anchor = find_role_share(text)
    if anchor is None:
        raise MissingAnchorError("No role and share found on right holder line", line)
    role = anchor.group("role")
    share = anchor.group("share")

    # IPI and society are separated by a single space and stay together here.
    left_block = text[: anchor.start()]
    columns = split_columns(left_block, RIGHT_HOLDER_COLUMNS_RE)
    values = [column for column, _, _ in columns]

    pseudonym = None
    registry_number = None
    society = None

    if len(values) == 2:
        person_id, name = values
    elif len(values) == 3:
        person_id, name, third = values
        _, start, end = columns[2]
        kind = classify_third_column(gap_before(text, start), gap_after(text, end))
        if kind == "society":
            society = third
        else:
            pseudonym = third
    elif len(values) == 4:
        person_id, name, pseudonym, registry_and_society = values
        registry_number, society = split_registry_and_society(registry_and_society)
    else:
        raise ColumnCountError(len(values), line)

    return RightHolderTokens(
        id=person_id,
        name=name,
        pseudonym=pseudonym,
        registry_number=registry_number,
        society=society,
        role=role,
        share=share,
    )


def parse_right_holder(line: str) -> RightHolder:
    if is_work_line(line):
        raise FormatError("Expected a right holder line, got a work line", line)

    tokens = split_right_holder(line)

    role = CATEGORIES.get(tokens.role)
    if role is None:
        raise UnknownRoleError(tokens.role, line)

    pseudonyms: List[Pseudonym] = []
    if tokens.pseudonym:
        pseudonyms.append({"name": tokens.pseudonym, "is_primary": True})

    return {
        "registry_person_id": tokens.id,
        "name": tokens.name,
        "role": role,
        "share": normalize_share(tokens.share, line),
        "society_name": tokens.society,
        "registry_number": tokens.registry_number,
        "pseudonyms": pseudonyms,
        "source_references": [source_reference(tokens.id)],
    }


# -----------------------------
# Aggregation
# -----------------------------
def extract(
    lines: Iterable[str],
    log_fn: Optional[Callable[[str], None]] = None,
) -> List[Work]:
    """
    Build works from content lines in a single forward pass.

    Each work line opens a new work; every following right holder line is
    attached to it until the next work line. A right holder line with no
    work before it raises StructuralError.
    """
    works: List[Work] = []
    current: Optional[Work] = None
    lines_total = 0
    holders_total = 0

    for line in lines:
        lines_total += 1
        if is_work_line(line):
            current = parse_work(line)
            works.append(current)
            continue

        if current is None:
            raise StructuralError("Right holder line found before any work line", line)
        current["right_holders"].append(parse_right_holder(line))
        holders_total += 1

    if log_fn:
        log_fn(
            "ecad parser: "
            f"lines={lines_total} | works={len(works)} | right_holders={holders_total}"
        )
    return works


def extract_from_text(
    lines: Iterable[str],
    log_fn: Optional[Callable[[str], None]] = None,
) -> List[Work]:
    """Filter raw report lines down to content lines, then extract works."""
    return extract(content_lines(lines), log_fn=log_fn)
