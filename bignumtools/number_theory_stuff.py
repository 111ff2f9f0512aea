from bignumtools.bigint import BigInt, ZERO, ONE, TWO

__all__ = ['gcd', 'xgcd', 'mulinv', 'jacobi', 'legendre']


def gcd(a, b) -> BigInt:
    a, b = BigInt.coerce(a).abs(), BigInt.coerce(b).abs()
    while not b.is_zero():
        a, b = b, a.modulo(b)
    return a


def xgcd(b, n):
    """Takes positive integers b, n as input, and return a triple (g, x, y), such that bx + ny = g = gcd(b, n)"""
    b, n = BigInt.coerce(b), BigInt.coerce(n)
    x0, x1, y0, y1 = ONE, ZERO, ZERO, ONE
    while not n.is_zero():
        q, r = b.divmod(n)
        b, n = n, r
        x0, x1 = x1, x0.subtract(q.multiply(x1))
        y0, y1 = y1, y0.subtract(q.multiply(y1))
    return b, x0, y0


def mulinv(b, n) -> BigInt:
    """An application of extended GCD algorithm to finding modular inverses"""
    n = BigInt.coerce(n)
    g, x, _ = xgcd(BigInt.coerce(b).modulo(n), n)
    if g != ONE:
        raise ValueError('Numbers must be coprimes')
    return x.modulo(n)


def jacobi(m, n) -> int:
    """
        https://en.wikipedia.org/wiki/Jacobi_symbol

        Returns (m/n) in {-1, 0, 1} for a positive odd n. Any other n has no
        Jacobi symbol and gives 0, as does an m sharing a factor with n.
    """
    m, n = BigInt.coerce(m), BigInt.coerce(n)
    if n.sign() <= 0 or n.is_even():
        return 0

    j = 1
    if m.is_negative:
        m = m.negate()
        if n.modulo(4) == 3:
            j = -j

    m = m.modulo(n)
    while not m.is_zero():
        while m.is_even():
            m = m.divide(TWO)
            if n.modulo(8) in (3, 5):
                j = -j

        # quadratic reciprocity
        m, n = n, m
        if m.modulo(4) == 3 and n.modulo(4) == 3:
            j = -j

        m = m.modulo(n)

    return j if n == ONE else 0


def legendre(a, p) -> int:
    """https://en.wikipedia.org/wiki/Legendre_symbol, p must be an odd prime"""
    a, p = BigInt.coerce(a), BigInt.coerce(p)
    mod = a.power(p.subtract(ONE).divide(TWO), p)
    return -1 if mod == p.subtract(ONE) else int(mod)
