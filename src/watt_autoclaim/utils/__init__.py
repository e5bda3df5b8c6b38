# -*- coding: utf-8 -*-
"""Utility modules."""

from watt_autoclaim.utils.validation import (
    from_raw_amount,
    mask_address,
    to_raw_amount,
)

__all__ = ["from_raw_amount", "mask_address", "to_raw_amount"]
