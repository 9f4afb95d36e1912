"""Account number allocation with smallest-first recycling.

Fresh numbers come from a strictly increasing counter.  Numbers freed by
deletion go into a :class:`ReclaimedNumberPool` and are handed out again,
smallest first, before the counter advances.

The pool sorts on read: :meth:`ReclaimedNumberPool.add` only appends, and
the pool is put into ascending order right before a number is consumed.

INVARIANT: ``next_fresh`` never decreases and is unaffected by deletions.
"""

from __future__ import annotations

from collections.abc import Iterator

DEFAULT_FIRST_NUMBER = 100


class ReclaimedNumberPool:
    """Numbers vacated by deleted accounts, eligible for reuse."""

    def __init__(self) -> None:
        self._numbers: list[int] = []
        self._sorted = True

    def __len__(self) -> int:
        return len(self._numbers)

    def __bool__(self) -> bool:
        return bool(self._numbers)

    def __contains__(self, number: object) -> bool:
        return number in self._numbers

    def __iter__(self) -> Iterator[int]:
        """Iterate in ascending order without reordering the pool."""
        return iter(sorted(self._numbers))

    def __repr__(self) -> str:
        return f"ReclaimedNumberPool({sorted(self._numbers)!r})"

    def add(self, number: int) -> None:
        """Append *number*; the pool is unsorted until the next read.

        Raises:
            ValueError: If *number* is already pooled.
        """
        if number in self._numbers:
            msg = f"Account number {number} is already in the reclaimed pool"
            raise ValueError(msg)
        self._numbers.append(number)
        if len(self._numbers) > 1 and self._numbers[-2] > number:
            self._sorted = False

    def sort_ascending(self) -> None:
        """Put the pool in ascending order (no-op when already ordered)."""
        if self._sorted:
            return
        self._numbers.sort()
        self._sorted = True

    def smallest(self) -> int:
        """Return the smallest pooled number without removing it.

        Raises:
            IndexError: If the pool is empty.
        """
        self.sort_ascending()
        return self._numbers[0]

    def pop_smallest(self) -> int:
        """Remove and return the smallest pooled number.

        Raises:
            IndexError: If the pool is empty.
        """
        self.sort_ascending()
        return self._numbers.pop(0)

    def clear(self) -> int:
        """Drop every pooled number, returning how many were released."""
        released = len(self._numbers)
        self._numbers.clear()
        self._sorted = True
        return released


class NumberAllocator:
    """Decides between reusing a reclaimed number and issuing a fresh one.

    Each call to :meth:`allocate` mutates exactly one of the pool (removal
    of its minimum) or the fresh counter (increment by one).
    """

    def __init__(self, pool: ReclaimedNumberPool, first_number: int = DEFAULT_FIRST_NUMBER) -> None:
        self._pool = pool
        self._next_fresh = first_number

    @property
    def next_fresh(self) -> int:
        """The number the counter will issue once the pool is exhausted."""
        return self._next_fresh

    def peek(self) -> int:
        """Return the number the next :meth:`allocate` call will yield."""
        if self._pool:
            return self._pool.smallest()
        return self._next_fresh

    def allocate(self) -> int:
        """Claim the next account number. Never fails."""
        if self._pool:
            return self._pool.pop_smallest()
        number = self._next_fresh
        self._next_fresh += 1
        return number
