"""
Record normalization and the ingest pipeline.

Pipeline shape:
- decode uploaded bytes to text (encoding detection, LF newlines)
- parse lines -> raw records + skip reports
- normalize records
- render text / encode binary
- benchmark both encodings
"""

from __future__ import annotations

import base64
import hashlib
import logging
from typing import Any, Dict, Iterable, List, Tuple

from charset_normalizer import from_bytes

from .benchmark import run_benchmark
from .binary_codec import decode_records, encode_records
from .models import Record
from .rules import TEXT_ENCODING
from .settings import BENCHMARK_REPEAT
from .text_codec import parse_text, render_text

logger = logging.getLogger(__name__)


def _sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def normalize_record(record: Record) -> Record:
    """
    Return a NEW record with name trimmed and email trimmed + lowercased.

    Idempotent. None fields stay None.
    """
    name = record.name.strip() if record.name is not None else None
    email = record.email.strip().lower() if record.email is not None else None
    return record.model_copy(update={"name": name, "email": email})


def normalize_records(records: Iterable[Record]) -> List[Record]:
    return [normalize_record(r) for r in records]


def decode_text(raw: bytes) -> Tuple[str, Dict[str, Any]]:
    """
    Decode uploaded bytes to text with LF newlines.

    Rules:
    - Detect encoding best-effort via charset-normalizer.
    - A UTF-8 BOM is dropped.
    - If the detected encoding cannot decode, fall back to UTF-8 with replacement characters and report it.
    - CRLF and CR become LF.
    """
    detected = None
    match = from_bytes(raw).best()
    if match is not None:
        detected = match.encoding

    decode_used = detected or TEXT_ENCODING
    if raw.startswith(b"\xef\xbb\xbf") and decode_used.lower().replace("-", "_") in ("utf_8", "utf8"):
        decode_used = "utf-8-sig"

    decode_fallback = False
    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        logger.warning(f"Could not decode upload as {decode_used}, falling back to {TEXT_ENCODING}")
        text = raw.decode(TEXT_ENCODING, errors="replace")
        decode_used = TEXT_ENCODING
        decode_fallback = True

    newlines_changed = "\r" in text
    text = text.replace("\r\n", "\n").replace("\r", "\n")

    return text, {
        "detected": detected,
        "decode_used": decode_used,
        "decode_fallback": decode_fallback,
        "newlines_changed": newlines_changed,
    }


def ingest_csv_text(text: str, repeat: int = BENCHMARK_REPEAT) -> Dict[str, Any]:
    """
    Run the whole pipeline over already-decoded text.
    Returns a dict matching the API's IngestResponse envelope.
    """
    parsed = parse_text(text)
    records = normalize_records(parsed.records)

    rendered = render_text(records)
    text_bytes = rendered.encode(TEXT_ENCODING)
    binary = encode_records(records)
    benchmark = run_benchmark(records, repeat=repeat)

    lines = len(parsed.records) + len(parsed.skipped)
    logger.info(f"Ingested {lines} lines: {len(records)} accepted, {len(parsed.skipped)} skipped")

    return {
        "records": [r.model_dump() for r in records],
        "skipped": [s.model_dump() for s in parsed.skipped],
        "summary": {
            "lines": lines,
            "accepted": len(records),
            "skipped": len(parsed.skipped),
        },
        "text": {
            "sha256": _sha256_hex(text_bytes),
            "size": len(text_bytes),
            "content": rendered,
        },
        "binary": {
            "sha256": _sha256_hex(binary),
            "size": len(binary),
            "content_b64": base64.b64encode(binary).decode("ascii"),
        },
        "benchmark": benchmark.model_dump(),
    }


def ingest_csv_bytes(raw: bytes, repeat: int = BENCHMARK_REPEAT) -> Dict[str, Any]:
    text, encoding_report = decode_text(raw)
    logger.debug(f"Decoded upload: {encoding_report}")
    return ingest_csv_text(text, repeat=repeat)


def decode_binary_bytes(raw: bytes) -> Dict[str, Any]:
    """
    Decode a binary payload back into records.

    Raises:
        DecodeError
    """
    records = decode_records(raw)
    return {
        "count": len(records),
        "records": [r.model_dump() for r in records],
    }
