"""Seeded deterministic random number generation.

Every stochastic decision in the simulation draws from an explicitly
passed RNG instance so a stored seed replays the exact same outcomes.
The generator is Mulberry32 over 32-bit unsigned state with wraparound,
which makes the sequence identical to any other implementation of the
same transform.

Example:
    >>> rng = RNG(42)
    >>> roll = rng.random_int(1, 6)
    >>> rng.uuid()  # reproducible for seed 42
"""

from __future__ import annotations

import math
import time
from collections.abc import Sequence
from typing import TypeVar

from shitbox_engine.core.constants import DEFAULT_SEED_DAY_STRIDE, UINT32_MASK
from shitbox_engine.core.exceptions import EmptyInputError
from shitbox_engine.core.logging import get_logger


logger = get_logger(__name__)

T = TypeVar("T")

_MULBERRY_INCREMENT = 0x6D2B79F5
_TWO_POW_32 = 4294967296.0
_UUID_VARIANTS = ("8", "9", "a", "b")


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiply."""
    return (a * b) & UINT32_MASK


class RNG:
    """Mulberry32 pseudo-random generator.

    All derived operations are built from ``next()`` only, so their draw
    counts are part of the reproducibility contract: changing how many
    draws an operation makes changes every later outcome.

    Example:
        >>> rng = RNG(1234)
        >>> rng.chance(0.25)
        False
    """

    __slots__ = ("_state",)

    def __init__(self, seed: int) -> None:
        """Initialize the generator.

        Args:
            seed: Integer seed; reduced modulo 2**32.
        """
        self._state = int(seed) & UINT32_MASK

    def __repr__(self) -> str:
        return f"RNG(state={self._state})"

    @classmethod
    def from_time(cls) -> RNG:
        """Create a generator seeded from the wall clock.

        Only whole-session creation may use this; every simulated outcome
        afterwards derives from the stored seed.
        """
        seed = int(time.time() * 1000) & UINT32_MASK
        logger.info("RNG seeded from wall clock", seed=seed)
        return cls(seed)

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def get_seed(self) -> int:
        """Get the internal 32-bit state, for snapshotting."""
        return self._state

    def set_seed(self, seed: int) -> None:
        """Restore the internal state from a snapshot."""
        self._state = int(seed) & UINT32_MASK

    # -------------------------------------------------------------------------
    # Core transform
    # -------------------------------------------------------------------------

    def next(self) -> float:
        """Return a float in [0, 1)."""
        self._state = (self._state + _MULBERRY_INCREMENT) & UINT32_MASK
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & UINT32_MASK
        return ((t ^ (t >> 14)) & UINT32_MASK) / _TWO_POW_32

    # -------------------------------------------------------------------------
    # Derived operations
    # -------------------------------------------------------------------------

    def random_int(self, min_value: int, max_value: int) -> int:
        """Return an integer in [min_value, max_value], both inclusive."""
        return math.floor(self.next() * (max_value - min_value + 1)) + min_value

    def random_in_range(self, min_value: float, max_value: float) -> float:
        """Return a float in [min_value, max_value)."""
        return self.next() * (max_value - min_value) + min_value

    def pick(self, items: Sequence[T]) -> T:
        """Pick one element uniformly.

        Raises:
            EmptyInputError: If ``items`` is empty.
        """
        if not items:
            raise EmptyInputError("Cannot pick from an empty sequence", operation="pick")
        return items[math.floor(self.next() * len(items))]

    def shuffle(self, items: Sequence[T]) -> list[T]:
        """Return a Fisher-Yates shuffled copy; the input is not touched."""
        result = list(items)
        for i in range(len(result) - 1, 0, -1):
            j = math.floor(self.next() * (i + 1))
            result[i], result[j] = result[j], result[i]
        return result

    def chance(self, probability: float) -> bool:
        """Return True with the given probability."""
        return self.next() < probability

    def weighted_pick(self, options: Sequence[tuple[T, float]]) -> T:
        """Pick from ``(item, weight)`` pairs by cumulative weight.

        Falls back to the last item when float rounding leaves residual
        weight.

        Raises:
            EmptyInputError: If ``options`` is empty.
        """
        if not options:
            raise EmptyInputError(
                "Cannot pick from an empty sequence",
                operation="weighted_pick",
            )
        total_weight = sum(weight for _, weight in options)
        remaining = self.next() * total_weight
        for item, weight in options:
            remaining -= weight
            if remaining <= 0:
                return item
        return options[-1][0]

    def gaussian(self, mean: float = 0.0, std_dev: float = 1.0) -> float:
        """Normally distributed value via Box-Muller (two draws).

        A first draw of exactly 0.0 is replaced by 2**-32 so ``log`` stays
        finite; every other pair of draws maps through plain Box-Muller.
        """
        u1 = self.next() or 1 / _TWO_POW_32
        u2 = self.next()
        z = math.sqrt(-2 * math.log(u1)) * math.cos(2 * math.pi * u2)
        return z * std_dev + mean

    def uuid(self) -> str:
        """Generate an RFC-4122-shaped version 4 id from this generator.

        Not cryptographically secure; reproducible for a given state.
        """

        def hex_digits(count: int) -> str:
            return "".join(format(math.floor(self.next() * 16), "x") for _ in range(count))

        first = hex_digits(8)
        second = hex_digits(4)
        third = hex_digits(3)
        variant = _UUID_VARIANTS[self.random_int(0, 3)]
        fourth = hex_digits(3)
        fifth = hex_digits(12)
        return f"{first}-{second}-4{third}-{variant}{fourth}-{fifth}"

    def derive(self) -> RNG:
        """Create an independent child generator from one parent draw."""
        return RNG(math.floor(self.next() * UINT32_MASK))


def derive_action_seed(
    session_seed: int,
    day: int,
    action_count: int,
    *,
    stride: int = DEFAULT_SEED_DAY_STRIDE,
) -> int:
    """Compute the seed for one player action.

    Each day owns ``stride`` consecutive seeds. When ``action_count``
    reaches ``stride`` the seed overlaps the next day's range, so the
    stride must exceed the most actions a day can hold for seeds to stay
    unique.

    Args:
        session_seed: Seed stored in the save.
        day: Current simulated day.
        action_count: Actions committed so far.
        stride: Seed space reserved per day.

    Returns:
        A 32-bit unsigned seed.
    """
    return (session_seed + day * stride + action_count) & UINT32_MASK


__all__ = ["RNG", "derive_action_seed"]
