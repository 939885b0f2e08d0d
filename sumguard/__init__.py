"""Sliding-window pair-sum validator.

Reads a stream of integers and flags every value, after an initial warm-up,
that is not the sum of two distinct values among the most recent ``capacity``
values. Integers are Python ints, so sums never overflow.
"""

__all__ = [
    "config",
    "core",
    "data",
    "utils",
]
