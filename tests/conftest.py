"""Shared fixtures for the gacs-pack test suite."""

import pytest

from gacs_pack.adapters import PassThroughShield, RecordingEventSink, StaticGraphSource
from gacs_pack.config import EngineConfig
from gacs_pack.storage import InMemorySnapshotStore
from gacs_pack.token_budget import GreedyPrefixTokenizer


class FixedCostTokenizer(GreedyPrefixTokenizer):
    """Every non-empty text costs the same number of tokens."""

    def __init__(self, cost: int = 10):
        self.cost = cost

    def count_text(self, text: str) -> int:
        return self.cost


@pytest.fixture
def fixed_tokenizer():
    """Tokenizer charging 10 tokens per section."""
    return FixedCostTokenizer(10)


@pytest.fixture
def sample_sections():
    """Sections as a graph source would return them."""
    return [
        {
            "key": "demographics",
            "title": "Demographics",
            "body": "Jane Doe, 45",
            "weight": 1.0,
            "lineage": ["patient:123", "demographics"],
            "refs": ["patient:123"],
        },
        {
            "key": "conditions",
            "title": "Conditions",
            "body": "Type 2 diabetes",
            "weight": 2.0,
            "lineage": ["patient:123", "conditions", "icd10:E11"],
        },
    ]


@pytest.fixture
def graph(sample_sections):
    """Static graph source serving sample sections for Patient 123."""
    return StaticGraphSource({("Patient", 123): sample_sections})


@pytest.fixture
def store():
    return InMemorySnapshotStore()


@pytest.fixture
def events():
    return RecordingEventSink()


@pytest.fixture
def engine_config(graph, fixed_tokenizer, store, events):
    """Fully wired engine configuration using reference collaborators."""
    return EngineConfig(
        graph=graph,
        pii_shield=PassThroughShield(),
        tokenizer=fixed_tokenizer,
        store=store,
        events=events,
    )


@pytest.fixture
def build_params():
    return {
        "subject_id": 123,
        "subject_type": "Patient",
        "intent": "care_gap_analysis",
        "role": "provider",
        "budget_tokens": 8000,
    }
