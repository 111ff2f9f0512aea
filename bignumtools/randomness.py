import os
import random
import secrets
from enum import Enum, unique

from bignumtools.bigint import BigInt, BASE
from bignumtools.error import InvalidRangeError

__all__ = ['RandomSource', 'SeededRandomSource', 'SOURCE', 'default_source', 'default_rounds', 'DEFAULT_ROUNDS']

DEFAULT_ROUNDS = 40


@unique
class SOURCE(Enum):
    SYSTEM = 'system'
    SEEDED = 'seeded'


def current_source():
    return SOURCE(os.environ.get('BIGNUMTOOLS_RANDOM', 'system'))


def default_rounds():
    return int(os.environ.get('BIGNUMTOOLS_ROUNDS', DEFAULT_ROUNDS))


class RandomSource:
    """Uniform integers in a closed range, backed by the system CSPRNG"""

    def randbelow(self, n: int) -> int:
        return secrets.randbelow(n)

    def randint(self, lo, hi):
        """Uniform integer in [lo, hi]. BigInt bounds give a BigInt, native bounds an int"""
        if isinstance(lo, BigInt) or isinstance(hi, BigInt):
            return self._randint_big(BigInt.coerce(lo), BigInt.coerce(hi))

        if lo > hi:
            raise InvalidRangeError(f'Empty range [{lo}, {hi}]', lo, hi)
        return lo + self.randbelow(hi - lo + 1)

    def _randint_big(self, lo: BigInt, hi: BigInt) -> BigInt:
        if lo > hi:
            raise InvalidRangeError(f'Empty range [{lo}, {hi}]', lo, hi)

        bound = hi.subtract(lo)
        span = bound.digits
        top = span[-1]
        while True:
            # Draw the top digit in [0, top] and the rest freely, then reject
            # anything above span. Accepted values are uniform over [0, span].
            digits = [self.randbelow(BASE) for _ in range(len(span) - 1)]
            digits.append(self.randbelow(top + 1))
            candidate = BigInt._from_magnitude(digits)
            if candidate.compare_to(bound) <= 0:
                return lo.add(candidate)


class SeededRandomSource(RandomSource):
    """Reproducible source for tests and experiments. Not for key material."""

    def __init__(self, seed=0):
        self.seed = seed
        self._random = random.Random(seed)

    def randbelow(self, n: int) -> int:
        if n <= 0:
            raise InvalidRangeError(f'Empty range [0, {n})', 0, n)
        return self._random.randrange(n)


def default_source() -> RandomSource:
    if current_source() is SOURCE.SEEDED:
        return SeededRandomSource(int(os.environ.get('BIGNUMTOOLS_SEED', 0)))
    return RandomSource()
