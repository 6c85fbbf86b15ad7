#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Small helpers shared across :mod:`petriforge`.
"""

from __future__ import annotations
import numbers
import random as _py_random

import numpy as np
from numpy.random import Generator as _NPGen, RandomState as _NPRandomState, SeedSequence, default_rng

from typing import Union

__all__ = [
    "is_integer",
    "is_positive_integer",
    "is_nonnegative_integer",
]


def _coerce_rng(rng : Union[int, _NPGen, _NPRandomState, _py_random.Random, None] = None) -> _NPGen:
    """
    Return a NumPy Generator given a variety of rng-like inputs.

    **Accepts:**

      - None                -> default_rng()
      - int (seed)          -> default_rng(seed)
      - np.random.Generator -> returned as-is
      - np.random.RandomState -> converted via SeedSequence
      - random.Random       -> converted via SeedSequence

    **Raises:**

        - TypeError: for unsupported inputs.
    """
    if rng is None:
        return default_rng()
    if isinstance(rng, _NPGen):
        return rng
    if isinstance(rng, (int, np.integer)) and not isinstance(rng, bool):
        return default_rng(int(rng))
    if isinstance(rng, _NPRandomState):
        entropy = rng.randint(0, 2**32, size=4, dtype=np.uint32)
        return default_rng(SeedSequence(entropy))
    if isinstance(rng, _py_random.Random):
        entropy = [rng.getrandbits(32) for _ in range(4)]
        return default_rng(SeedSequence(entropy))
    raise TypeError(f"Unsupported rng type: {type(rng)!r}")


def is_integer(value) -> bool:
    """
    Return True if ``value`` is an integral number (Python or NumPy).

    Booleans are rejected even though ``bool`` subclasses ``int``.
    """
    return isinstance(value, numbers.Integral) and not isinstance(value, (bool, np.bool_))


def is_positive_integer(value) -> bool:
    return is_integer(value) and value > 0


def is_nonnegative_integer(value) -> bool:
    return is_integer(value) and value >= 0
