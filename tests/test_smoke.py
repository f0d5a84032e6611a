import base64

from fastapi.testclient import TestClient
from recordbench.main import app

client = TestClient(app)

SAMPLE = (
    "Alice,30,ALICE@MAIL.COM\n"
    "Bob,200,bob@mail.com\n"
    ",25,no_name@mail.com\n"
    "Charlie,40,charlie@mail.com\n"
    "Dave,22,davemail.com\n"
)

def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}

def test_ingest_sample():
    files = {"file": ("users.csv", SAMPLE.encode("utf-8"), "text/csv")}
    r = client.post("/ingest", files=files)
    assert r.status_code == 200

    data = r.json()
    assert [u["name"] for u in data["records"]] == ["Alice", "Charlie"]
    assert data["records"][0]["email"] == "alice@mail.com"
    assert [s["reason"] for s in data["skipped"]] == [
        "Invalid age: 200",
        "Name is empty",
        "Invalid email: davemail.com",
    ]
    assert data["summary"] == {"lines": 5, "accepted": 2, "skipped": 3}
    assert data["text"]["content"] == "Alice,30,alice@mail.com\nCharlie,40,charlie@mail.com\n"
    assert data["benchmark"]["round_trip_exact"] is True
    assert data["benchmark"]["binary_size"] == data["binary"]["size"]

def test_ingest_crlf_and_latin1():
    # CRLF newlines and a Latin-1 character in a name
    raw = "José,41,JOSE@MAIL.COM\r\nAna,29,ana@mail.com\r\n".encode("latin-1")
    files = {"file": ("users.csv", raw, "text/csv")}
    r = client.post("/ingest", files=files)
    assert r.status_code == 200

    data = r.json()
    assert data["skipped"] == []
    assert data["records"][0]["email"] == "jose@mail.com"
    assert data["records"][1] == {"name": "Ana", "age": 29, "email": "ana@mail.com"}

def test_ingest_rejects_non_csv():
    files = {"file": ("users.txt", b"Alice,30,a@b", "text/plain")}
    r = client.post("/ingest", files=files)
    assert r.status_code == 422

def test_binary_payload_decodes_back():
    files = {"file": ("users.csv", SAMPLE.encode("utf-8"), "text/csv")}
    ingested = client.post("/ingest", files=files).json()

    binary = base64.b64decode(ingested["binary"]["content_b64"])
    r = client.post("/decode", files={"file": ("users.bin", binary, "application/octet-stream")})
    assert r.status_code == 200
    assert r.json() == {"count": 2, "records": ingested["records"]}

def test_decode_rejects_garbage():
    r = client.post("/decode", files={"file": ("junk.bin", b"not a record buffer", "application/octet-stream")})
    assert r.status_code == 422
    assert "magic" in r.json()["detail"]
