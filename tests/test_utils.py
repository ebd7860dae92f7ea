import pytest

from v4v.utils import clean_text, millisats_to_sats, sats_to_millisats


def test_millisat_conversion_rounds_down() -> None:
    assert sats_to_millisats(21) == 21000
    assert millisats_to_sats(21999) == 21
    assert millisats_to_sats(999) == 0


def test_millisat_conversion_rejects_negative_amounts() -> None:
    with pytest.raises(ValueError, match="non-negative"):
        millisats_to_sats(-1)
    with pytest.raises(ValueError, match="non-negative"):
        sats_to_millisats(-1)


def test_clean_text_collapses_whitespace() -> None:
    assert clean_text("  The \t Host\n ") == "The Host"
