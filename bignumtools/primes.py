"""
Probabilistic primality tests over BigInt.

Every test returns False when n is certainly composite and True when n is
probably prime. A composite verdict is an ordinary result, never an exception.
"""

import logging
from enum import Enum, unique

from bignumtools.bigint import BigInt, ONE, TWO
from bignumtools.number_theory_stuff import gcd, jacobi
from bignumtools.randomness import default_source, default_rounds

__all__ = ['PrimalityTest', 'quick_reject', 'trial_division', 'fermat', 'solovay_strassen', 'miller_rabin',
           'is_prime', 'random_prime']

logger = logging.getLogger(__name__)

SMALL_PRIMES = (3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)

# Miller-Rabin never runs fewer rounds than this, however small n is
MIN_ROUNDS = 8


@unique
class PrimalityTest(Enum):
    FERMAT = 'fermat'
    SOLOVAY_STRASSEN = 'solovay_strassen'
    MILLER_RABIN = 'miller_rabin'


def quick_reject(n):
    """
        Settle the trivial cases without any random rounds.

        Returns True when n is a known prime, False when n is certainly
        composite (or below 2) and None when a probabilistic test is needed.
        Anything left undecided is odd and larger than the small primes, so
        the witness range [2, n-2] of the tests is never empty.
    """
    n = BigInt.coerce(n)
    if n == TWO:
        return True

    # 0, 1, negatives and even numbers
    if n.sign() <= 0 or n == ONE or n.is_even():
        return False

    for p in SMALL_PRIMES:
        if n == p:
            return True
        if n.modulo(p).is_zero():
            return False
    return None


def trial_division(n: int) -> bool:
    """https://en.wikipedia.org/wiki/Primality_test#Simple_methods, exact for native integers"""
    n = int(n)
    if n <= 1:
        return False
    if n <= 3:
        return True

    if n % 2 == 0 or n % 3 == 0:
        return False

    # every prime above 3 has the form 6k - 1 or 6k + 1
    i = 5
    while i * i <= n:
        if n % i == 0 or n % (i + 2) == 0:
            return False
        i += 6
    return True


def fermat(n, t=None, source=None) -> bool:
    """
        Fermat test with t random witnesses.

        Carmichael numbers pass for every witness coprime to them, so a True
        verdict carries no guarantee for those.
    """
    n = BigInt.coerce(n)
    verdict = quick_reject(n)
    if verdict is not None:
        return verdict

    source = default_source() if source is None else source
    t = default_rounds() if t is None else t
    n_minus_one = n.subtract(ONE)

    for _ in range(t):
        a = source.randint(TWO, n.subtract(TWO))
        if a.power(n_minus_one, n) != ONE:
            logger.debug('Fermat witness %s proves %s composite', a, n)
            return False
    return True


def _solovay_strassen_witness(n: BigInt, source):
    # Witnesses come from a range polynomial in the bit length of n
    cap = n.bit_length() ** 3
    if n.compare_to(cap + 2) > 0:
        return BigInt.from_int(source.randint(2, cap))
    return source.randint(TWO, n.subtract(TWO))


def solovay_strassen(n, k=None, source=None) -> bool:
    """
        https://en.wikipedia.org/wiki/Solovay%E2%80%93Strassen_primality_test

        Unlike the Fermat test it recognises Carmichael numbers as composite.
    """
    n = BigInt.coerce(n)
    verdict = quick_reject(n)
    if verdict is not None:
        return verdict

    source = default_source() if source is None else source
    k = default_rounds() if k is None else k
    exponent = n.subtract(ONE).divide(TWO)

    for _ in range(k):
        a = _solovay_strassen_witness(n, source)

        if gcd(a, n) != ONE:
            logger.debug('%s shares a factor with %s', a, n)
            return False

        # -1 from the Jacobi symbol is n - 1 modulo n
        symbol = BigInt.from_int(jacobi(a, n)).modulo(n)
        if a.power(exponent, n) != symbol:
            logger.debug('Euler witness %s proves %s composite', a, n)
            return False
    return True


def miller_rabin(n, rounds=None, source=None) -> bool:
    """
        https://en.wikipedia.org/wiki/Miller%E2%80%93Rabin_primality_test

        The error probability is at most 4^-rounds. Without an explicit count
        one round runs for every two bits of n, so the bound tightens as n grows.
    """
    n = BigInt.coerce(n)
    verdict = quick_reject(n)
    if verdict is not None:
        return verdict

    source = default_source() if source is None else source
    if rounds is None:
        rounds = max(MIN_ROUNDS, (n.bit_length() + 1) // 2)

    n_minus_one = n.subtract(ONE)
    s, d = 0, n_minus_one
    while d.is_even():
        s += 1
        d = d.divide(TWO)

    for _ in range(rounds):
        a = source.randint(TWO, n.subtract(TWO))
        x = a.power(d, n)
        if x == ONE or x == n_minus_one:
            continue
        for _ in range(s - 1):
            x = x.multiply(x).modulo(n)
            if x == n_minus_one:
                break
        else:
            logger.debug('Miller-Rabin witness %s proves %s composite', a, n)
            return False
    return True


TESTS = {
    PrimalityTest.FERMAT: fermat,
    PrimalityTest.SOLOVAY_STRASSEN: solovay_strassen,
    PrimalityTest.MILLER_RABIN: miller_rabin,
}


def is_prime(n, test=PrimalityTest.MILLER_RABIN, rounds=None, source=None) -> bool:
    return TESTS[PrimalityTest(test)](n, rounds, source=source)


def random_prime(bits, test=PrimalityTest.MILLER_RABIN, source=None) -> BigInt:
    """A probable prime of exactly `bits` bits"""
    if bits < 2:
        raise ValueError('Prime size must be at least 2 bits')

    source = default_source() if source is None else source
    lo = TWO.power(bits - 1)
    hi = TWO.power(bits).subtract(ONE)

    attempts = 0
    while True:
        attempts += 1
        candidate = source.randint(lo, hi)
        if candidate.is_even():
            candidate = candidate.add(ONE)
        if is_prime(candidate, test, source=source):
            logger.debug('Found %d-bit prime after %d candidates', bits, attempts)
            return candidate
