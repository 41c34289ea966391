"""Tests for the module-level configure/build convenience."""

import json
import re

import pytest
import structlog

import gacs_pack
from gacs_pack.adapters import PassThroughShield
from gacs_pack.exceptions import CollaboratorNotConfigured
from gacs_pack.storage import InMemorySnapshotStore
from gacs_pack.token_budget import CharRatioTokenizer


@pytest.fixture(autouse=True)
def restore_default_config():
    original = gacs_pack.get_config()
    yield
    gacs_pack.configure(**{
        name: getattr(original, name)
        for name in ("graph", "pii_shield", "tokenizer", "store", "events", "policy_version", "logger")
    })


def test_unconfigured_build_fails_fast(build_params):
    gacs_pack.configure()

    with pytest.raises(CollaboratorNotConfigured):
        gacs_pack.build(**build_params)


def test_configure_and_build(graph, fixed_tokenizer, store, build_params):
    config = gacs_pack.configure(
        graph=graph,
        pii_shield=PassThroughShield(),
        tokenizer=fixed_tokenizer,
        store=store,
        policy_version="caregap-v1",
    )

    pack_id, view = gacs_pack.build(**build_params)

    assert gacs_pack.get_config() is config
    assert re.match(r"^[a-f0-9]{64}$", pack_id)
    assert view["policy_version"] == "caregap-v1"
    assert pack_id in store


def test_exceptions_share_base():
    assert issubclass(CollaboratorNotConfigured, gacs_pack.GacsPackError)
    assert issubclass(gacs_pack.EventSinkFailure, gacs_pack.GacsPackError)


class TestConfigureFromSettings:
    """Settings drive both logging and the default wiring."""

    @pytest.fixture(autouse=True)
    def reset_structlog(self):
        yield
        structlog.reset_defaults()

    def test_wires_reference_collaborators(self, graph, build_params):
        settings = gacs_pack.PackSettings(policy_version="p1", tokenizer={"kind": "chars"})

        config = gacs_pack.configure_from_settings(
            settings,
            graph=graph,
            pii_shield=PassThroughShield(),
            logger=structlog.get_logger("gacs_pack.api_test"),
        )

        assert gacs_pack.get_config() is config
        assert isinstance(config.tokenizer, CharRatioTokenizer)
        assert isinstance(config.store, InMemorySnapshotStore)
        pack_id, view = gacs_pack.build(**build_params)
        assert view["policy_version"] == "p1"
        assert pack_id in config.store

    def test_applies_log_level(self, graph, capsys):
        settings = gacs_pack.PackSettings(log_level="WARNING")

        gacs_pack.configure_from_settings(settings, graph=graph, pii_shield=PassThroughShield())
        logger = structlog.get_logger("gacs_pack.api_test")
        logger.info("quiet")
        logger.warning("loud")

        lines = [json.loads(line) for line in capsys.readouterr().out.splitlines() if line.strip()]
        assert [line["event"] for line in lines] == ["loud"]
