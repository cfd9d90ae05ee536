# -*- coding: utf-8 -*-
"""Unit tests for address and id helpers."""

from __future__ import annotations

from datetime import datetime, timezone

from coin_maker.utils.ids import from_millis, new_id, to_millis
from coin_maker.utils.validation import mask_address, normalize_address, same_address


def test_normalize_address_strips_punctuation_and_lowercases() -> None:
    assert normalize_address("UQ-Am_TM/eE+8") == "uqamtmee8"
    assert normalize_address(None) == ""


def test_same_address_requires_both_non_empty() -> None:
    assert same_address("UQ_abc", "uq-ABC")
    assert not same_address("", "")
    assert not same_address(None, "abc")
    assert not same_address("abc", "abd")


def test_mask_address() -> None:
    assert mask_address("UQAmTM_EE8D6seecLKf-h8aXVQasliniDDQ52EvBj7PqExNr") == "UQAmTM...ExNr"
    assert mask_address("short") == "***"
    assert mask_address(None) == "***"


def test_new_id_shape_and_uniqueness() -> None:
    ids = {new_id() for _ in range(50)}

    assert len(ids) == 50
    assert all(i.startswith("id_") and i[3:].isalnum() for i in ids)
    assert new_id("s_").startswith("s_")


def test_millis_roundtrip() -> None:
    dt = datetime(2026, 2, 13, 12, 0, 0, tzinfo=timezone.utc)

    assert to_millis(dt) == 1_770_984_000_000
    assert from_millis(to_millis(dt)) == dt
