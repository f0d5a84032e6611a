"""Size and timing comparison of the binary and text encodings."""

from __future__ import annotations

import logging
import time
from typing import Sequence

from .binary_codec import decode_records, encode_records
from .models import BenchmarkReport, Record
from .rules import TEXT_ENCODING
from .text_codec import render_text

logger = logging.getLogger(__name__)


def _render_bytes(records: Sequence[Record]) -> bytes:
    return render_text(records).encode(TEXT_ENCODING)


def run_benchmark(records: Sequence[Record], repeat: int = 1) -> BenchmarkReport:
    """
    Time encode / render / decode over the same records.

    With repeat > 1 each duration is the fastest run. The report only
    describes; comparing the numbers is up to the caller.
    """
    if repeat < 1:
        raise ValueError(f"repeat must be >= 1, got {repeat}")

    encode_ns = render_ns = decode_ns = None
    binary = text = b""
    decoded = []

    for _ in range(repeat):
        t1 = time.perf_counter_ns()
        binary = encode_records(records)
        t2 = time.perf_counter_ns()

        t3 = time.perf_counter_ns()
        text = _render_bytes(records)
        t4 = time.perf_counter_ns()

        t5 = time.perf_counter_ns()
        decoded = decode_records(binary)
        t6 = time.perf_counter_ns()

        encode_ns = t2 - t1 if encode_ns is None else min(encode_ns, t2 - t1)
        render_ns = t4 - t3 if render_ns is None else min(render_ns, t4 - t3)
        decode_ns = t6 - t5 if decode_ns is None else min(decode_ns, t6 - t5)

    report = BenchmarkReport(
        record_count=len(records),
        repeat=repeat,
        binary_size=len(binary),
        text_size=len(text),
        encode_duration=encode_ns,
        render_duration=render_ns,
        decode_duration=decode_ns,
        round_trip_exact=decoded == list(records),
    )
    logger.info(
        f"Benchmark over {report.record_count} records: binary {report.binary_size} B "
        f"in {report.encode_duration} ns, text {report.text_size} B in {report.render_duration} ns"
    )
    return report
