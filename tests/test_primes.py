import logging
import unittest

from bignumtools import BigInt
from bignumtools.primes import (PrimalityTest, quick_reject, trial_division, fermat, solovay_strassen, miller_rabin,
                                is_prime, random_prime)
from bignumtools.randomness import RandomSource, SeededRandomSource

PRIMES = [2, 3, 97, 7919]
COMPOSITES = [1, 4, 100, 561]

# Carmichael numbers whose factors all lie above the small primes of the fast path
CARMICHAEL = [1152271, 43 * 3361 * 3907]

TESTS = [fermat, solovay_strassen, miller_rabin]


def slow_is_prime(n):
    if n < 2:
        return False
    i = 2
    while i * i <= n:
        if n % i == 0:
            return False
        i += 1
    return True


class ExplodingSource(RandomSource):

    def randbelow(self, n):
        raise AssertionError('No random draw expected')


class FixedWitnesses(RandomSource):

    def __init__(self, witnesses):
        self.witnesses = list(witnesses)
        self.calls = 0

    def randint(self, lo, hi):
        witness = self.witnesses[self.calls % len(self.witnesses)]
        self.calls += 1
        return BigInt.coerce(witness) if isinstance(lo, BigInt) else witness


class TestQuickReject(unittest.TestCase):

    def test_trivial_cases(self):
        expected = {0: False, 1: False, 2: True, 4: False, 9: False}
        for n, verdict in expected.items():
            self.assertIs(quick_reject(BigInt.from_int(n)), verdict, n)

    def test_negative(self):
        self.assertIs(quick_reject(BigInt('-7')), False)

    def test_undecided(self):
        self.assertIsNone(quick_reject(BigInt('97')))
        self.assertIsNone(quick_reject(BigInt('7919')))

    def test_no_random_rounds(self):
        for test in TESTS:
            for n in [0, 1, 2, 4, 9, 3, 561]:
                test(BigInt.from_int(n), 5, source=ExplodingSource())


class TestTrialDivision(unittest.TestCase):

    def test_fixtures(self):
        for p in PRIMES:
            self.assertTrue(trial_division(p), p)
        for c in COMPOSITES:
            self.assertFalse(trial_division(c), c)

    def test_squares_of_primes(self):
        for p in [5, 7, 11, 13, 97]:
            self.assertFalse(trial_division(p * p), p * p)

    def test_against_reference(self):
        for n in range(-5, 3000):
            self.assertEqual(trial_division(n), slow_is_prime(n), n)


class TestProbabilistic(unittest.TestCase):

    def test_fixtures(self):
        for test in TESTS:
            source = SeededRandomSource(10)
            for p in PRIMES:
                self.assertTrue(test(BigInt.from_int(p), 20, source=source), f'{test.__name__}({p})')
            for c in COMPOSITES:
                self.assertFalse(test(BigInt.from_int(c), 20, source=source), f'{test.__name__}({c})')

    def test_primes_always_pass(self):
        source = SeededRandomSource(11)
        primes = [n for n in range(2, 2000) if trial_division(n)]
        for test in TESTS:
            for p in primes:
                self.assertTrue(test(BigInt.from_int(p), 3, source=source), f'{test.__name__}({p})')

    def test_large_prime(self):
        p = BigInt('170141183460469231731687303715884105727')  # 2^127 - 1
        source = SeededRandomSource(12)
        for test in TESTS:
            self.assertTrue(test(p, 5, source=source), test.__name__)

    def test_semiprimes(self):
        source = SeededRandomSource(13)
        for n in [41 * 43, 7907 * 7919, 1000003 * 1000033]:
            for test in TESTS:
                self.assertFalse(test(BigInt.from_int(n), 40, source=source), f'{test.__name__}({n})')

    def test_carmichael_rejected(self):
        source = SeededRandomSource(14)
        for n in CARMICHAEL:
            self.assertFalse(solovay_strassen(BigInt.from_int(n), 40, source=source), n)
            self.assertFalse(miller_rabin(BigInt.from_int(n), 40, source=source), n)

    def test_carmichael_fools_fermat(self):
        # every witness coprime to a Carmichael number is a Fermat liar
        source = FixedWitnesses([2, 3, 5, 7, 10, 1000])
        self.assertTrue(fermat(BigInt('1152271'), 6, source=source))
        self.assertEqual(source.calls, 6)

    def test_fermat_fixed_witness_rejects(self):
        self.assertFalse(fermat(BigInt('1763'), 1, source=FixedWitnesses([2])))

    def test_default_rounds_for_miller_rabin(self):
        source = FixedWitnesses([2])
        miller_rabin(BigInt('7919'), source=source)
        self.assertEqual(source.calls, 8)

        source = FixedWitnesses([2])
        miller_rabin(BigInt('170141183460469231731687303715884105727'), source=source)
        self.assertEqual(source.calls, 64)

    def test_solovay_strassen_native_witnesses(self):
        seen = []

        class Recording(SeededRandomSource):
            def randint(self, lo, hi):
                seen.append((lo, hi))
                return super().randint(lo, hi)

        solovay_strassen(BigInt('7919'), 3, source=Recording(15))
        self.assertEqual(seen, [(2, 13 ** 3)] * 3)

    def test_accepts_native_int(self):
        self.assertTrue(miller_rabin(7919, source=SeededRandomSource(16)))

    def test_logs_composite_witness(self):
        with self.assertLogs('bignumtools.primes', level=logging.DEBUG) as logs:
            miller_rabin(BigInt('1763'), 10, source=SeededRandomSource(17))
        self.assertTrue(any('1763' in line for line in logs.output))


class TestDispatch(unittest.TestCase):

    def test_is_prime(self):
        source = SeededRandomSource(18)
        for test in PrimalityTest:
            self.assertTrue(is_prime(BigInt('7919'), test, 10, source=source))
            self.assertFalse(is_prime(BigInt('7917'), test.value, 10, source=source))

    def test_unknown_test(self):
        with self.assertRaises(ValueError):
            is_prime(BigInt('7919'), 'lucas')


class TestRandomPrime(unittest.TestCase):

    def test_bit_length(self):
        source = SeededRandomSource(19)
        for bits in [2, 3, 8, 16, 48]:
            p = random_prime(bits, source=source)
            self.assertEqual(p.bit_length(), bits)
            self.assertTrue(p.is_odd())
        self.assertTrue(slow_is_prime(int(random_prime(24, source=source))))

    def test_with_every_test(self):
        source = SeededRandomSource(20)
        for test in PrimalityTest:
            p = random_prime(20, test, source=source)
            self.assertTrue(slow_is_prime(int(p)), f'{test}: {p}')

    def test_too_small(self):
        with self.assertRaises(ValueError):
            random_prime(1)


if __name__ == '__main__':
    unittest.main()
