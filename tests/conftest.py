"""Shared fixtures: a small word space."""

import json

import pytest

from wordspace.core.types import WordRecord
from wordspace.store.memory_store import InMemoryWordSpaceStore


def make_record(word, freq=10, dsb="", dsb_sim="", **collocations):
    """
    Build a record; collocations are passed as rel1=(" a b", " 1.0 2.0") ...
    """
    kol = []
    kol_sig = []
    for rel in range(1, 7):
        words, values = collocations.get(f"rel{rel}", ("", ""))
        kol.append(words)
        kol_sig.append(values)
    return WordRecord(
        word=word,
        freq=freq,
        dsb=dsb,
        dsb_sim=dsb_sim,
        kol=tuple(kol),
        kol_sig=tuple(kol_sig),
    )


SAMPLE_RECORDS = [
    make_record(
        "house", freq=1200,
        dsb=" building home", dsb_sim=" 500 250",
        rel1=(" the big", " 3.0 1.0"),
        rel3=(" stands", " 2.0"),
    ),
    make_record(
        "building", freq=800,
        dsb=" house tower", dsb_sim=" 500 125",
        rel1=(" the tall", " 2.0 1.5"),
        rel3=(" stands", " 1.0"),
    ),
    make_record(
        "tower", freq=150,
        dsb=" building", dsb_sim=" 125",
        rel1=(" tall", " 4.0"),
    ),
    make_record("loner", freq=3),
]


@pytest.fixture
def records():
    return list(SAMPLE_RECORDS)


@pytest.fixture
def store(records):
    return InMemoryWordSpaceStore(records)


@pytest.fixture
def wordspace_dir(tmp_path, records):
    """A JSON-lines word space on disk with one corrupt line."""
    lines = [json.dumps(r.to_fields()) for r in records]
    lines.insert(2, "{not json")
    (tmp_path / "wordspace.jsonl").write_text("\n".join(lines) + "\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def record_factory():
    return make_record
