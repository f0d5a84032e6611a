"""Command-line driver for recordbench.

Reads delimited user records from a file, stdin, or the built-in sample,
runs the pipeline, and prints:
- valid users
- the CSV export
- the binary vs text comparison
- the records decoded back from the binary form
"""

from __future__ import annotations
import argparse
import logging
import sys
from typing import Optional

from .benchmark import run_benchmark
from .binary_codec import decode_records, encode_records
from .normalize import decode_text, normalize_records
from .settings import BENCHMARK_REPEAT
from .setup_logging import setup_logging
from .text_codec import parse_text, render_record, render_text

logger = logging.getLogger(__name__)

SAMPLE_CSV = (
    "Alice,30,ALICE@MAIL.COM\n"
    "Bob,200,bob@mail.com\n"
    ",25,no_name@mail.com\n"
    "Charlie,40,charlie@mail.com\n"
    "Dave,22,davemail.com\n"
)


def _read_text(path: Optional[str]) -> str:
    """Read raw bytes and decode them the same way uploads are decoded."""
    if path is None or path == "-":
        raw = sys.stdin.buffer.read()
    else:
        with open(path, "rb") as fh:
            raw = fh.read()
    text, _ = decode_text(raw)
    return text


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="recordbench", description="Validate user records and compare binary vs text encodings.")
    p.add_argument("path", nargs="?", default="-", help="Input file path or '-' for stdin")
    p.add_argument("--sample", action="store_true", help="Use the built-in sample instead of reading input")
    p.add_argument("--repeat", type=int, default=BENCHMARK_REPEAT, help="Benchmark runs; durations report the fastest")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    args = p.parse_args(argv)

    setup_logging("DEBUG" if args.verbose else None, stream=sys.stderr)

    if args.repeat < 1:
        sys.stderr.write(f"error: --repeat must be >= 1, got {args.repeat}\n")
        return 2

    try:
        text = SAMPLE_CSV if args.sample else _read_text(args.path)
    except OSError as ex:
        sys.stderr.write(f"error: {ex}\n")
        return 2

    out = sys.stdout
    out.write("=== CSV IMPORT ===\n")
    parsed = parse_text(text)
    for skip in parsed.skipped:
        out.write(f"Skipped line {skip.line_number}: {skip.line} | reason: {skip.reason}\n")

    records = normalize_records(parsed.records)
    out.write("\nValid users:\n")
    for r in records:
        out.write(render_record(r) + "\n")

    out.write("\n=== CSV EXPORT ===\n")
    out.write(render_text(records))

    report = run_benchmark(records, repeat=args.repeat)
    out.write("\n=== SERIALIZATION COMPARISON ===\n")
    out.write(f"Binary size: {report.binary_size} bytes\n")
    out.write(f"Text size:   {report.text_size} bytes\n")
    out.write(f"Binary serialize time: {report.encode_duration} ns\n")
    out.write(f"Text convert time:     {report.render_duration} ns\n")
    out.write(f"Binary decode time:    {report.decode_duration} ns\n")
    out.write(f"Round trip exact:      {report.round_trip_exact}\n")

    out.write("\n=== DESERIALIZED OBJECTS ===\n")
    for r in decode_records(encode_records(records)):
        out.write(render_record(r) + "\n")

    logger.debug(f"Benchmark report: {report.model_dump()}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
