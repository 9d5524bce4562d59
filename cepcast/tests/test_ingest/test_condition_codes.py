"""Tests for the condition code decoder."""

import pytest

from cepcast.ingest.condition_codes import (
    decode,
    register_condition,
    register_conditions,
)
from cepcast.models.forecast import ConditionSymbol


class TestDecode:
    @pytest.mark.parametrize(
        "code,symbol",
        [
            ("c", ConditionSymbol.SUN),
            ("ci", ConditionSymbol.PARTLY_CLOUDY),
            ("pnt", ConditionSymbol.AFTERNOON_SHOWERS),
            ("pn", ConditionSymbol.NIGHT_SHOWERS),
            ("ps", ConditionSymbol.MORNING_SHOWERS),
            ("e", ConditionSymbol.OVERCAST_ISOLATED_RAIN),
        ],
    )
    def test_known_codes(self, code: str, symbol: ConditionSymbol):
        assert decode(code) == symbol

    @pytest.mark.parametrize("code", ["", "zz", "sol", "C I", "🌧️"])
    def test_unknown_codes(self, code: str):
        assert decode(code) == ConditionSymbol.UNKNOWN

    def test_non_string_is_unknown(self):
        assert decode(None) == ConditionSymbol.UNKNOWN
        assert decode(42) == ConditionSymbol.UNKNOWN  # type: ignore[arg-type]

    def test_case_and_whitespace_insensitive(self):
        assert decode(" CI ") == ConditionSymbol.PARTLY_CLOUDY

    def test_every_symbol_has_emoji_and_label(self):
        for symbol in ConditionSymbol:
            assert symbol.emoji
            assert symbol.label


class TestRegister:
    def test_register_new_code(self):
        assert decode("cv") == ConditionSymbol.UNKNOWN
        register_condition("cv", ConditionSymbol.MORNING_SHOWERS)
        assert decode("cv") == ConditionSymbol.MORNING_SHOWERS

    def test_override_existing(self):
        register_condition("E", ConditionSymbol.PARTLY_CLOUDY)
        assert decode("e") == ConditionSymbol.PARTLY_CLOUDY

    def test_register_many(self):
        register_conditions({"n1": ConditionSymbol.SUN, "n2": ConditionSymbol.NIGHT_SHOWERS})
        assert decode("n1") == ConditionSymbol.SUN
        assert decode("n2") == ConditionSymbol.NIGHT_SHOWERS

    def test_blank_code_rejected(self):
        with pytest.raises(ValueError):
            register_condition("  ", ConditionSymbol.SUN)
