"""PCG random-number generator (64-bit state, 32-bit XSH-RR output).

See https://www.pcg-random.org/ for the algorithm. The sequence is fully
determined by the two constructor integers, so every random sweep in the
harness can be replayed bit-for-bit, in this or any other implementation of
the same generator.

The generator is a plain sequential state machine: draws must not be
interleaved from several threads of control.
"""

from __future__ import annotations

MULTIPLIER = 6364136223846793005
MASK64 = (1 << 64) - 1
MASK32 = (1 << 32) - 1


class PCG:
    """Deterministic 64/32 permuted congruential generator.

    Construction forces the increment (``seed``) odd, mixes in the initial
    state and advances twice before the first value is emitted, so
    ``PCG(s, q)`` yields the reference pcg32 stream for ``(s, q)`` with its
    first two outputs skipped.

    Example:
        >>> rng = PCG(42, 54)
        >>> hex(rng.next_uint32())
        '0xba1d3330'
    """

    __slots__ = ("_state", "_seed")

    def __init__(self, state: int = 0, seed: int = 0) -> None:
        self._seed = ((seed << 1) | 1) & MASK64
        self._state = ((self._seed + (state & MASK64)) * MULTIPLIER + self._seed) & MASK64
        self._advance()
        self._advance()

    @property
    def state(self) -> int:
        """Current 64-bit state."""
        return self._state

    @property
    def seed(self) -> int:
        """Odd 64-bit increment derived at construction."""
        return self._seed

    def _advance(self) -> None:
        self._state = (self._state * MULTIPLIER + self._seed) & MASK64

    def next_uint32(self) -> int:
        """Return the next value in [0, 4294967295]."""
        old = self._state
        self._advance()
        # top 5 bits select the rotation: 64 - 5 = 59, 32 - 5 = 27, (32 + 5) // 2 = 18
        xorshifted = (((old >> 18) ^ old) >> 27) & MASK32
        rot = old >> 59
        return ((xorshifted >> rot) | (xorshifted << ((-rot) & 31))) & MASK32

    def next_uint64(self) -> int:
        """Return the next value in [0, 2**64 - 1], high word drawn first."""
        high = self.next_uint32()
        return (high << 32) | self.next_uint32()

    def copy(self) -> PCG:
        """Return an independent generator positioned at the same point."""
        clone = PCG.__new__(PCG)
        clone._state = self._state
        clone._seed = self._seed
        return clone

    def __repr__(self) -> str:
        return f"PCG(state=0x{self._state:016x}, seed=0x{self._seed:016x})"
