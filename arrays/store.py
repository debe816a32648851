"""
store.py — Array Container & Generator
=======================================
Single source of truth for the array the user is playing with.  The
trace engine never touches this object: the host takes a snapshot and
hands the plain values to the generator.

Responsibilities:
  1. Insert / delete / sort                 (the Arrays tab buttons)
  2. Random-array factory                   (the "Random Array" button)
  3. Snapshots                              (tuple handed to generators)
  4. Serialisation round-trip               (to_dict / from_dict)

Design decisions:
  - Values live in a plain list; every mutation replaces it wholesale, so
    a snapshot taken before a mutation is never affected by it.
  - Random values are integers in [0, max_value), matching the random-array button.
"""

import random
from typing import List, Optional, Sequence, Tuple


class ArrayStore:
    """
    Attributes:
        values    : Current array contents.
        max_value : Exclusive upper bound for random values.
    """

    def __init__(self, values: Optional[Sequence[float]] = None, max_value: int = 100):
        self.values:    List[float] = list(values or [])
        self.max_value: int         = max_value

    def __len__(self) -> int:
        return len(self.values)

    # ==================================================================
    # MUTATIONS
    # ==================================================================
    def append(self, value: float) -> int:
        """Add `value` at the end.  Returns its index."""
        self.values = self.values + [value]
        return len(self.values) - 1

    def insert_random(self, rng: Optional[random.Random] = None) -> float:
        value = (rng or random).randrange(self.max_value)
        self.append(value)
        return value

    def delete(self, index: int) -> float:
        """Remove the element at `index`.  Raises IndexError when out of range."""
        if not 0 <= index < len(self.values):
            raise IndexError(f"Index {index} out of range for array of length {len(self.values)}")
        removed = self.values[index]
        self.values = self.values[:index] + self.values[index + 1:]
        return removed

    def sort(self) -> bool:
        """Sort ascending in place.  Returns True if the order changed."""
        ordered = sorted(self.values)
        changed = ordered != self.values
        self.values = ordered
        return changed

    def is_sorted(self) -> bool:
        return all(a <= b for a, b in zip(self.values, self.values[1:]))

    def snapshot(self) -> Tuple[float, ...]:
        return tuple(self.values)

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {"values": list(self.values), "max_value": self.max_value}

    @classmethod
    def from_dict(cls, data: dict) -> "ArrayStore":
        return cls(values=data.get("values", []), max_value=data.get("max_value", 100))

    # ==================================================================
    # GENERATORS — Factory class-methods
    # ==================================================================
    @classmethod
    def generate_random(
        cls,
        length: int = 8,
        max_value: int = 100,
        seed: Optional[int] = None,
    ) -> "ArrayStore":
        """`length` integers drawn uniformly from [0, max_value)."""
        rng = random.Random(seed)
        return cls([rng.randrange(max_value) for _ in range(length)], max_value=max_value)

    def __repr__(self) -> str:
        return f"ArrayStore({self.values!r})"
