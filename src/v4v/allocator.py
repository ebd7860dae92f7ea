"""Proportional sat allocation.

Splits an integer number of indivisible units across proportional weights so
that the result sums exactly to the total and, when there are enough units,
every recipient with a nonzero weight receives at least one.
"""

from __future__ import annotations

import math
from decimal import Decimal
from fractions import Fraction
from typing import Sequence, TypeVar, Union

Weight = Union[int, Decimal, Fraction]
T = TypeVar("T")


class InvalidInputError(ValueError):
    pass


def compute_allocations(weights: Sequence[Weight], total: int) -> list[int]:
    """Allocate ``total`` units across ``weights`` using the largest-remainder method.

    Each weight first receives the floor of its exact share; the leftover units go
    to the largest fractional parts, ties going to the lower index. If that leaves a
    nonzero weight with nothing while ``total`` covers one unit per nonzero weight,
    every nonzero weight is given one unit up front and the rest is distributed the
    same way on top.

    >>> compute_allocations([1, 98, 1], 10)
    [1, 8, 1]
    >>> compute_allocations([1, 1], 1)
    [1, 0]
    """
    _validate_total(total)
    scaled = _scale_to_integers(weights)

    if not scaled:
        return []
    if total == 0 or sum(scaled) == 0:
        return [0] * len(scaled)

    allocations = _largest_remainder(scaled, total)
    nonzero = [idx for idx, weight in enumerate(scaled) if weight > 0]
    if total < len(nonzero) or all(allocations[idx] > 0 for idx in nonzero):
        return allocations

    residual = _largest_remainder(scaled, total - len(nonzero))
    return [(1 if weight > 0 else 0) + extra for weight, extra in zip(scaled, residual)]


def compute_sat_recipients(splits: Sequence[Weight], total_sats: int) -> list[int]:
    return compute_allocations(splits, total_sats)


def compute_allocations_for(items: Sequence[T], weights: Sequence[Weight], total: int) -> list[tuple[T, int]]:
    if len(items) != len(weights):
        raise InvalidInputError(
            f"Got {len(items)} recipients but {len(weights)} weights; each recipient needs exactly one weight."
        )
    return list(zip(items, compute_allocations(weights, total)))


def count_nonzero_weights(weights: Sequence[Weight]) -> int:
    return sum(1 for weight in _scale_to_integers(weights) if weight > 0)


def _largest_remainder(weights: list[int], total: int) -> list[int]:
    total_weight = sum(weights)

    floor_allocations: list[int] = []
    remainders: list[tuple[int, int]] = []
    for idx, weight in enumerate(weights):
        floor_value, remainder = divmod(total * weight, total_weight)
        floor_allocations.append(floor_value)
        remainders.append((remainder, idx))

    # Fewer leftover units than positive remainders, so zero weights never get one.
    remainder_units = total - sum(floor_allocations)
    for _, idx in sorted(remainders, key=lambda item: (-item[0], item[1]))[:remainder_units]:
        floor_allocations[idx] += 1

    return floor_allocations


def _validate_total(total: int) -> None:
    if isinstance(total, bool) or not isinstance(total, int):
        raise InvalidInputError(f"Total must be an integer number of units, got {type(total).__name__}.")
    if total < 0:
        raise InvalidInputError(f"Total must be non-negative, got {total}.")


def _scale_to_integers(weights: Sequence[Weight]) -> list[int]:
    exact = [_to_fraction(idx, weight) for idx, weight in enumerate(weights)]
    common = math.lcm(*(value.denominator for value in exact))
    return [value.numerator * (common // value.denominator) for value in exact]


def _to_fraction(idx: int, weight: Weight) -> Fraction:
    if isinstance(weight, bool):
        raise InvalidInputError(f"Weight at index {idx} must be numeric, got bool.")
    if isinstance(weight, Decimal):
        if not weight.is_finite():
            raise InvalidInputError(f"Weight at index {idx} must be finite, got {weight}.")
        value = Fraction(weight)
    elif isinstance(weight, (int, Fraction)):
        value = Fraction(weight)
    else:
        raise InvalidInputError(
            f"Weight at index {idx} must be an int, Decimal or Fraction, got {type(weight).__name__}."
        )

    if value < 0:
        raise InvalidInputError(f"Weight at index {idx} is negative: {weight}.")
    return value
