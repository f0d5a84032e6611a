import pytest

from recordbench.errors import ValidationError
from recordbench.models import Record
from recordbench.normalize import normalize_record, normalize_records
from recordbench.rules import is_valid, validate_record


def test_valid_record_passes():
    validate_record(Record(name="Alice", age=30, email="alice@mail.com"))


@pytest.mark.parametrize(
    "record, reason",
    [
        (Record(name="", age=30, email="a@b"), "Name is empty"),
        (Record(name="   ", age=30, email="a@b"), "Name is empty"),
        (Record(name=None, age=30, email="a@b"), "Name is empty"),
        (Record(name="Bob", age=-1, email="a@b"), "Invalid age: -1"),
        (Record(name="Bob", age=121, email="a@b"), "Invalid age: 121"),
        (Record(name="Bob", age=22, email="bobmail.com"), "Invalid email: bobmail.com"),
        (Record(name="Bob", age=22, email=None), "Invalid email: None"),
    ],
)
def test_validation_reasons(record, reason):
    with pytest.raises(ValidationError) as exc:
        validate_record(record)
    assert exc.value.reason == reason


def test_first_failing_rule_wins():
    # every field is bad; the name rule is checked first
    with pytest.raises(ValidationError, match="Name is empty"):
        validate_record(Record(name=" ", age=500, email="nope"))

    with pytest.raises(ValidationError, match="Invalid age: 500"):
        validate_record(Record(name="Zed", age=500, email="nope"))


def test_age_bounds_are_inclusive():
    assert is_valid(Record(name="Baby", age=0, email="b@b"))
    assert is_valid(Record(name="Elder", age=120, email="e@e"))


def test_email_rule_is_permissive():
    assert is_valid(Record(name="X", age=1, email="@@"))
    assert is_valid(Record(name="X", age=1, email="trailing@"))


def test_normalize_trims_and_lowercases():
    r = normalize_record(Record(name="  Alice ", age=30, email="  ALICE@Mail.COM \t"))
    assert r == Record(name="Alice", age=30, email="alice@mail.com")


def test_normalize_does_not_mutate_input():
    raw = Record(name=" Alice", age=30, email="ALICE@MAIL.COM")
    normalize_record(raw)
    assert raw.name == " Alice"
    assert raw.email == "ALICE@MAIL.COM"


def test_normalize_is_idempotent():
    records = [
        Record(name="  Alice ", age=30, email=" ALICE@MAIL.COM "),
        Record(name="Charlie", age=40, email="charlie@mail.com"),
        Record(name="\tÉmile\n", age=77, email="\tÉMILE@Exemple.FR"),
    ]
    once = normalize_records(records)
    twice = normalize_records(once)
    assert once == twice


def test_normalize_keeps_none_fields():
    r = normalize_record(Record(name=None, age=5, email=None))
    assert r.name is None
    assert r.email is None
