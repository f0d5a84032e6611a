"""
Delimited text codec.

parse: one record per line, fields `name,age,email`, no header.
A bad line never stops the parse; it is reported and skipped.

render: the reverse, best effort. Commas inside a field are written as-is,
so rendered text does not always parse back to the same records.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Union

from .errors import MalformedRowError, RecordBenchError
from .models import ParseResult, Record, SkipReport
from .rules import DELIMITER, EXPECTED_COLUMNS, LINE_SEPARATOR, validate_record

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"[+-]?[0-9]+")

LineOutcome = Union[Record, SkipReport]


def _split_lines(text: str) -> List[str]:
    lines = text.split(LINE_SEPARATOR)
    # a trailing newline must not yield an extra (empty) line
    while lines and lines[-1] == "":
        lines.pop()
    return lines


def _parse_age(field: str) -> int:
    if not _INT_RE.fullmatch(field):
        raise MalformedRowError(f"Invalid age format: {field}")
    try:
        return int(field)
    except ValueError:
        # digit-count limit on int() conversion
        raise MalformedRowError(f"Invalid age format: {field}") from None


def _split_fields(line: str) -> List[str]:
    parts = line.split(DELIMITER)
    # trailing empty fields are dropped, so "a,1,x@y," is still three columns
    while parts and parts[-1] == "":
        parts.pop()
    return parts


def _record_from_line(line: str) -> Record:
    parts = _split_fields(line)
    if len(parts) != EXPECTED_COLUMNS:
        raise MalformedRowError("Wrong column count")

    name, age, email = parts
    record = Record(name=name, age=_parse_age(age), email=email)
    validate_record(record)  # may raise
    return record


def parse_line(line: str, line_number: int = 1) -> LineOutcome:
    """Parse one line into either a raw Record or a SkipReport."""
    try:
        return _record_from_line(line)
    except RecordBenchError as ex:
        return SkipReport(line_number=line_number, line=line, reason=ex.reason)


def parse_text(text: str) -> ParseResult:
    """
    Parse delimited text into records.

    Records come back un-normalized and in input order. Every rejected
    line produces exactly one SkipReport carrying its text and reason.
    """
    result = ParseResult()
    for line_number, line in enumerate(_split_lines(text), 1):
        outcome = parse_line(line, line_number)
        if isinstance(outcome, SkipReport):
            logger.warning(f"Skipped line {line_number}: {line!r} | reason: {outcome.reason}")
            result.skipped.append(outcome)
        else:
            result.records.append(outcome)

    logger.debug(f"Parsed {len(result.records)} records, skipped {len(result.skipped)} lines")
    return result


def render_record(record: Record) -> str:
    return f"{record.name}{DELIMITER}{record.age}{DELIMITER}{record.email}"


def render_text(records: Iterable[Record]) -> str:
    """Render records one per line, newline-terminated."""
    return "".join(render_record(r) + LINE_SEPARATOR for r in records)
