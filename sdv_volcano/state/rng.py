"""
System.Random port - Exact replication of the game's random number generator.

The game runs on .NET and seeds every dungeon generator with the legacy
(pre-.NET 6 "Net5Compat") subtractive generator from Knuth's Seminumerical
Algorithms. All dungeon generation is deterministic from the seed, so the
port has to be bit-exact, including the quirks .NET shipped with:

- The state fill stride is 21 (Knuth uses 31) and ``inextp`` starts at 21.
- ``next()`` writes the *normalized* result back into the state array.
- ``INT32_MAX`` is never returned (it is decremented to ``INT32_MAX - 1``).

Seeds are produced by the game's ``Utility.CreateRandomSeed`` mixing
function, ported here as ``seed_mix``:

- Legacy mode (1.5 saves / "legacy random" option): plain sum of the inputs.
- Modern mode: inputs packed as five little-endian int32 words and hashed
  with xxHash32 (seed 0).

Reference: dotnet/runtime src/libraries/System.Private.CoreLib/src/System/Random.Net5CompatImpl.cs
"""

import math
import struct
from typing import List, Sequence

import xxhash


INT32_MAX = 2147483647
INT32_MIN = -2147483648

# Seed constant from Knuth (golden ratio * 10^8)
MSEED = 161803398

# Number of inputs Utility.CreateRandomSeed accepts
SEED_MIX_SLOTS = 5


def wrap_i32(value: int) -> int:
    """Wrap an arbitrary Python int to signed 32-bit (two's complement)."""
    value &= 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return value


def saturate_i32(value: float) -> int:
    """
    Truncate a double toward zero into the int32 range.

    Matches the ``(int)`` conversion the seed mixer relies on: NaN maps to 0
    and out-of-range values clamp to INT32_MIN / INT32_MAX.
    """
    if math.isnan(value):
        return 0
    if value >= INT32_MAX:
        return INT32_MAX
    if value <= INT32_MIN:
        return INT32_MIN
    return int(value)


def next_up(x: float) -> float:
    """Next representable double above ``x``."""
    return math.nextafter(x, math.inf)


class DotnetRandom:
    """
    Legacy System.Random - subtractive lagged-Fibonacci generator.

    State is 56 signed 32-bit words (index 0 unused) and two cursors.
    One instance belongs to one generation pass; use copy() only to fork
    an independent future on purpose.
    """

    def __init__(self, seed: int):
        """
        Seed the state array.

        C#: public Net5CompatSeedImpl(int Seed) {
            int subtraction = (Seed == int.MinValue) ? int.MaxValue : Math.Abs(Seed);
            int mj = MSEED - subtraction;
            _seedArray[55] = mj;
            int mk = 1;
            int ii = 0;
            for (int i = 1; i < 55; i++) {
                if ((ii += 21) >= 55) ii -= 55;
                _seedArray[ii] = mk;
                mk = mj - mk;
                if (mk < 0) mk += int.MaxValue;
                mj = _seedArray[ii];
            }
            for (int k = 1; k < 5; k++) {
                for (int i = 1; i < 56; i++) {
                    int n = i + 30;
                    if (n >= 55) n -= 55;
                    _seedArray[i] -= _seedArray[1 + n];
                    if (_seedArray[i] < 0) _seedArray[i] += int.MaxValue;
                }
            }
            _inextp = 21;
        }
        """
        seed = wrap_i32(seed)
        subtraction = INT32_MAX if seed == INT32_MIN else abs(seed)

        state = [0] * 56
        mj = MSEED - subtraction
        state[55] = mj
        mk = 1
        ii = 0
        for _ in range(1, 55):
            ii = (ii + 21) % 55
            state[ii] = mk
            mk = wrap_i32(mj - mk)
            if mk < 0:
                mk += INT32_MAX
            mj = state[ii]

        for _ in range(1, 5):
            for i in range(1, 56):
                n = (i + 30) % 55
                value = wrap_i32(state[i] - state[1 + n])
                if value < 0:
                    value += INT32_MAX
                state[i] = value

        self.state: List[int] = state
        self.inext = 0
        self.inextp = 21
        self.counter = 0

    def next(self) -> int:
        """
        Raw draw in [0, INT32_MAX).

        C#: private int InternalSample() {
            int locINext = _inext;
            if (++locINext >= 56) locINext = 1;
            int locINextp = _inextp;
            if (++locINextp >= 56) locINextp = 1;
            int retVal = _seedArray[locINext] - _seedArray[locINextp];
            if (retVal == int.MaxValue) retVal--;
            if (retVal < 0) retVal += int.MaxValue;
            _seedArray[locINext] = retVal;
            ...
            return retVal;
        }

        Note: the value written back is the normalized result, not the raw
        difference. Later draws read it, so this must not be "fixed".
        """
        self.inext = (self.inext % 55) + 1
        self.inextp = (self.inextp % 55) + 1
        result = wrap_i32(self.state[self.inext] - self.state[self.inextp])
        if result == INT32_MAX:
            result -= 1
        if result < 0:
            result += INT32_MAX
        self.state[self.inext] = result
        self.counter += 1
        return result

    def next_f64(self) -> float:
        """
        Random double in [0, 1).

        C#: protected virtual double Sample() {
            return InternalSample() * (1.0 / int.MaxValue);
        }
        """
        return self.next() * (1.0 / INT32_MAX)

    def next_range(self, bound: int) -> int:
        """
        Random int in [0, bound) - truncated, never rounded.

        C#: public virtual int Next(int maxValue) {
            return (int)(Sample() * maxValue);
        }
        """
        if bound < 0:
            raise ValueError("bound must be non-negative")
        return int(self.next_f64() * bound)

    def skip(self, count: int = 1) -> None:
        """Consume ``count`` draws whose values the caller does not need."""
        for _ in range(count):
            self.next()

    def copy(self) -> 'DotnetRandom':
        """Create an independent generator with the same state."""
        new = DotnetRandom.__new__(DotnetRandom)
        new.state = list(self.state)
        new.inext = self.inext
        new.inextp = self.inextp
        new.counter = self.counter
        return new


# ============================================================================
# SEED MIXING
# ============================================================================

def stardew_hashcode(data: bytes) -> int:
    """
    xxHash32 (seed 0) reinterpreted as a signed int32.

    The game casts the unsigned hash to int assuming two's complement.
    """
    return wrap_i32(xxhash.xxh32(data, seed=0).intdigest())


def seed_mix(legacy_rng: bool, values: Sequence[float]) -> int:
    """
    Combine up to five values into a generator seed.

    Matches Utility.CreateRandomSeed(a, b, c = 0, d = 0, e = 0):
    - legacy: (int)(a % int.MaxValue + b % int.MaxValue + ...)
    - modern: GetDeterministicHashCode((int)(a % int.MaxValue), ..., (int)(e % int.MaxValue))
      where the five ints are hashed as little-endian bytes with xxHash32.
    """
    if len(values) > SEED_MIX_SLOTS:
        raise ValueError(f"seed_mix takes at most {SEED_MIX_SLOTS} values, got {len(values)}")

    if legacy_rng:
        total = 0.0
        for value in values:
            total += math.fmod(float(value), float(INT32_MAX))
        return saturate_i32(total)

    words = [saturate_i32(math.fmod(float(value), float(INT32_MAX))) for value in values]
    words.extend([0] * (SEED_MIX_SLOTS - len(words)))
    return stardew_hashcode(struct.pack("<5i", *words))


__all__ = [
    "INT32_MAX",
    "INT32_MIN",
    "DotnetRandom",
    "seed_mix",
    "stardew_hashcode",
    "saturate_i32",
    "wrap_i32",
    "next_up",
]
