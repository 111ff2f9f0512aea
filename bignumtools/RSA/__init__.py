from bignumtools.bigint import BigInt, ONE
from bignumtools.number_theory_stuff import gcd, mulinv
from bignumtools.primes import PrimalityTest, random_prime
from bignumtools.randomness import default_source

__all__ = ['generate_keypair', 'encrypt', 'decrypt']


def generate_keypair(bits, e=65537, test=PrimalityTest.MILLER_RABIN, source=None):
    e = BigInt.coerce(e)
    if e.compare_to(ONE) <= 0 or e.is_even():
        raise ValueError('Public exponent must be odd and larger than 1')

    source = default_source() if source is None else source
    while True:
        p = random_prime(bits // 2, test, source)
        q = random_prime(bits - bits // 2, test, source)
        if p == q:
            continue

        phi = p.subtract(ONE).multiply(q.subtract(ONE))
        if gcd(e, phi) == ONE:
            break

    n = p.multiply(q)
    d = mulinv(e, phi)

    private = (d, n)
    public = (e, n)
    return private, public


def _apply(m, key):
    exponent, n = key
    m = BigInt.coerce(m)
    if m.is_negative or m.compare_to(n) >= 0:
        raise ValueError('Message must be smaller than the modulus')
    return m.power(exponent, n)


def encrypt(m, public) -> BigInt:
    return _apply(m, public)


def decrypt(c, private) -> BigInt:
    return _apply(c, private)
