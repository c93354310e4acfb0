"""
Dispersion statistics used by the aggregator.

Standard deviations are population standard deviations (divide by N) and all
values are rounded half away from zero, so the same input always yields the
same rounded output.
"""

from typing import Sequence

import numpy as np

from randstats._internal import settings


def round_half_away(value: float, places: int = settings.STD_DEV_DECIMALS) -> float:
    if np.isnan(value):
        raise ValueError("Cannot round NaN")
    precision = 10.0**places
    digit = abs(value) * precision
    rounded = np.floor(digit)
    if digit - rounded >= 0.5:
        rounded += 1
    return float(np.copysign(rounded / precision, value))


def std_dev(data: Sequence[int]) -> float:
    """
    Population standard deviation of `data`. An empty sequence has zero dispersion.
    """
    if len(data) == 0:
        return 0.0
    return float(np.std(np.asarray(data, dtype=np.float64), ddof=0))


def rounded_std_dev(data: Sequence[int], places: int = settings.STD_DEV_DECIMALS) -> float:
    return round_half_away(std_dev(data), places)


def sequence_sums(sequences: Sequence[Sequence[int]]) -> list[int]:
    return [int(np.sum(np.asarray(seq, dtype=np.int64))) for seq in sequences]
