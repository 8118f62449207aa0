from __future__ import annotations

DEFAULT_INITIAL_CAPACITY = 256
SENTINEL = 0


class OutputSequence:
    """Append-only byte accumulator that the renderer writes HTML into.

    Storage is a pre-sized ``bytearray``. When an append would overflow it the
    capacity doubles (starting from ``initial_capacity``) until the request fits,
    so appends are amortized O(1) and bytes already written are never touched.
    """

    def __init__(self, *, initial_capacity: int = DEFAULT_INITIAL_CAPACITY) -> None:
        if initial_capacity < 1:
            raise ValueError("initial_capacity must be >= 1")
        self._initial_capacity = initial_capacity
        self._items = bytearray()
        self._count = 0
        self._terminated = False

    def __len__(self) -> int:
        return self._count

    def __repr__(self) -> str:
        return f"OutputSequence(count={self._count}, capacity={self.capacity})"

    @property
    def capacity(self) -> int:
        return len(self._items)

    def reserve(self, expected_capacity: int) -> None:
        if expected_capacity <= self.capacity:
            return
        capacity = self.capacity or self._initial_capacity
        while expected_capacity > capacity:
            capacity *= 2
        self._items.extend(bytes(capacity - len(self._items)))

    def append_byte(self, value: int) -> None:
        self.reserve(self._count + 1)
        self._items[self._count] = value
        self._count += 1

    def append_bytes(self, run: bytes | bytearray | memoryview) -> None:
        size = len(run)
        if not size:
            return
        self.reserve(self._count + size)
        self._items[self._count : self._count + size] = run
        self._count += size

    def append_str(self, literal: str) -> None:
        self.append_bytes(literal.encode("utf-8"))

    def terminate(self) -> None:
        """Append the NUL sentinel so consumers expecting C-style text can stop at it."""
        if self._terminated:
            return
        self.append_byte(SENTINEL)
        self._terminated = True

    @property
    def terminated(self) -> bool:
        return self._terminated

    def getvalue(self) -> bytes:
        return bytes(self._items[: self._count])

    def fragment(self) -> bytes:
        """Rendered bytes without the trailing sentinel."""
        end = self._count - 1 if self._terminated else self._count
        return bytes(self._items[:end])
