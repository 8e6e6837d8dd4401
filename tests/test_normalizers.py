from __future__ import annotations

import pytest

from ubigeo_pe.core.normalizers import (
    is_zero_code,
    normalize_code,
    normalize_name,
    normalize_optional_code,
    pad_part,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("  san   JUAN de   lurigancho ", "San Juan De Lurigancho"),
        ("ÑUÑOA", "Ñuñoa"),
        ("\táncash\n", "Áncash"),
        ("lima", "Lima"),
        ("", ""),
        (None, ""),
    ],
)
def test_normalize_name(raw, expected):
    assert normalize_name(raw) == expected


@pytest.mark.parametrize("raw", ["  la   VICTORIA ", "MAGDALENA DEL MAR", "ñuñoa", "x", "ßa", "ǆungla"])
def test_normalize_name_is_idempotent(raw):
    once = normalize_name(raw)
    assert normalize_name(once) == once


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("150122", "150122"),
        ("15-01-22", "150122"),
        (" 20105 ", "020105"),
        (10101, "010101"),
        ("", "000000"),
        (None, "000000"),
        ("abc", "000000"),
        ("1234567", "1234567"),
        ("１５０１２２", "000000"),
        ("١٥٠١٢٢", "000000"),
        ("15０1२2", "001512"),
    ],
)
def test_normalize_code(raw, expected):
    assert normalize_code(raw) == expected


def test_normalize_code_is_idempotent():
    assert normalize_code(normalize_code("15 01 22")) == "150122"


def test_optional_code_treats_zero_as_absent():
    assert normalize_optional_code("0") is None
    assert normalize_optional_code(0) is None
    assert normalize_optional_code("") is None
    assert normalize_optional_code(None) is None
    assert normalize_optional_code("150140") == "150140"


def test_zero_code_and_padding():
    assert is_zero_code("000000")
    assert not is_zero_code("000001")
    assert pad_part(1) == "01"
    assert pad_part("15") == "15"
    assert pad_part(None) == "00"


def test_expanding_uppercase_is_title_cased_once():
    assert normalize_name("ßa") == "Ssa"
