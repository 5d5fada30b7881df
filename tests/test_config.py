"""
Tests for environment-driven settings.

Run with: pytest tests/test_config.py -v
"""

import pytest
from powerplay.config import _optional_int, _overs_cap


class TestOversCap:
    """MAX_OVERS_PER_BOWLER parsing"""

    def test_unset_uses_default(self, monkeypatch):
        monkeypatch.delenv("MAX_OVERS_PER_BOWLER", raising=False)
        assert _overs_cap("MAX_OVERS_PER_BOWLER", 4) == 4

    def test_number(self, monkeypatch):
        monkeypatch.setenv("MAX_OVERS_PER_BOWLER", " 5 ")
        assert _overs_cap("MAX_OVERS_PER_BOWLER", 4) == 5

    @pytest.mark.parametrize("value", ["", "none", "None", "  NONE "])
    def test_empty_or_none_lifts_cap(self, monkeypatch, value):
        monkeypatch.setenv("MAX_OVERS_PER_BOWLER", value)
        assert _overs_cap("MAX_OVERS_PER_BOWLER", 4) is None

    def test_garbage_is_rejected(self, monkeypatch):
        monkeypatch.setenv("MAX_OVERS_PER_BOWLER", "lots")
        with pytest.raises(ValueError):
            _overs_cap("MAX_OVERS_PER_BOWLER", 4)


class TestMatchSeed:
    def test_unset_is_unseeded(self, monkeypatch):
        monkeypatch.delenv("MATCH_SEED", raising=False)
        assert _optional_int("MATCH_SEED") is None

    def test_seed_value(self, monkeypatch):
        monkeypatch.setenv("MATCH_SEED", "42")
        assert _optional_int("MATCH_SEED") == 42
