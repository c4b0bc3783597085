"""
Display Downsampling

Bounds rendering cost for long series by uniform stride sampling.
"""

import math
from typing import Sequence, TypeVar

T = TypeVar("T")


def downsample(data: Sequence[T], target_length: int) -> list[T]:
    """
    Keep every `ceil(len / target_length)`-th element, starting at index 0.

    Never reorders or interpolates. The result always includes data[0]
    and has at most target_length + 1 elements.
    """
    if target_length < 1:
        raise ValueError(f"target_length must be >= 1, got {target_length}")
    if not data:
        return []

    step = math.ceil(len(data) / target_length)
    return list(data[::step])


def show_all(data: Sequence[T]) -> list[T]:
    """Full series, bypassing downsampling."""
    return list(data)
