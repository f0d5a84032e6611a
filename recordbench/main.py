from fastapi import FastAPI, UploadFile, File, HTTPException
from .errors import DecodeError
from .models import DecodeResponse, HealthResponse, IngestResponse
from .normalize import decode_binary_bytes, ingest_csv_bytes
from .setup_logging import setup_logging

setup_logging()

app = FastAPI(
    title="recordbench",
    description="User record ingestion with binary vs text encoding comparison",
    version="0.1.0",
)

@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}

@app.post("/ingest", response_model=IngestResponse)
async def ingest_csv(file: UploadFile = File(...)):
    if not (file.filename or "").lower().endswith(".csv"):
        raise HTTPException(status_code=422, detail="Only CSV files are supported")

    raw = await file.read()
    return ingest_csv_bytes(raw)

@app.post("/decode", response_model=DecodeResponse)
async def decode_binary(file: UploadFile = File(...)):
    raw = await file.read()
    try:
        return decode_binary_bytes(raw)
    except DecodeError as e:
        raise HTTPException(status_code=422, detail=e.reason)
