# -*- coding: utf-8 -*-
"""Utility modules."""

from coin_maker.utils.ids import from_millis, new_id, to_millis, utc_now
from coin_maker.utils.units import parse_chain_value, round_nano, to_decimal
from coin_maker.utils.validation import mask_address, normalize_address, same_address

__all__ = [
    "from_millis",
    "mask_address",
    "new_id",
    "normalize_address",
    "parse_chain_value",
    "round_nano",
    "same_address",
    "to_decimal",
    "to_millis",
    "utc_now",
]
