import logging

import pytest

from shotgun_tsp.config import DEFAULT_WORKERS, env_int


def test_default_workers_is_positive():
    assert DEFAULT_WORKERS >= 1


def test_env_int_unset_uses_default(monkeypatch):
    monkeypatch.delenv("SHOTGUN_TSP_WORKERS", raising=False)
    assert env_int("SHOTGUN_TSP_WORKERS", 3) == 3


def test_env_int_reads_value(monkeypatch):
    monkeypatch.setenv("SHOTGUN_TSP_WORKERS", " 6 ")
    assert env_int("SHOTGUN_TSP_WORKERS", 3) == 6


@pytest.mark.parametrize("raw", ["four", "2.5", "0", "-1"])
def test_env_int_bad_value_falls_back(raw, monkeypatch, caplog):
    monkeypatch.setenv("SHOTGUN_TSP_WORKERS", raw)
    with caplog.at_level(logging.WARNING, logger="shotgun_tsp.config"):
        assert env_int("SHOTGUN_TSP_WORKERS", 3) == 3
    assert "SHOTGUN_TSP_WORKERS" in caplog.text


def test_env_int_blank_uses_default(monkeypatch):
    monkeypatch.setenv("SHOTGUN_TSP_WORKERS", "")
    assert env_int("SHOTGUN_TSP_WORKERS", 3) == 3
