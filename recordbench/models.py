from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, Field


class Record(BaseModel):
    name: Optional[str] = None
    age: int
    email: Optional[str] = None


class SkipReport(BaseModel):
    line_number: int
    line: str
    reason: str


class ParseResult(BaseModel):
    records: List[Record] = Field(default_factory=list)
    skipped: List[SkipReport] = Field(default_factory=list)


class BenchmarkReport(BaseModel):
    record_count: int = 0
    repeat: int = 1
    binary_size: int
    text_size: int
    encode_duration: int = Field(description="nanoseconds")
    render_duration: int = Field(description="nanoseconds")
    decode_duration: int = Field(description="nanoseconds")
    round_trip_exact: bool = True


class IngestSummary(BaseModel):
    lines: int = 0
    accepted: int = 0
    skipped: int = 0


class TextPayload(BaseModel):
    sha256: str
    size: int
    content: str


class BinaryPayload(BaseModel):
    sha256: str
    size: int
    content_b64: str


class IngestResponse(BaseModel):
    records: List[Record] = Field(default_factory=list)
    skipped: List[SkipReport] = Field(default_factory=list)
    summary: IngestSummary
    text: TextPayload
    binary: BinaryPayload
    benchmark: BenchmarkReport


class DecodeResponse(BaseModel):
    count: int
    records: List[Record] = Field(default_factory=list)


class HealthResponse(BaseModel):
    ok: bool = True
