"""
Arbitrary-precision signed integers stored as sign and magnitude.

Every number is kept as

    x = a[n] * BASE^n + a[n-1] * BASE^(n-1) + ... + a[1] * BASE + a[0]

with each a[i] in [0, BASE), least significant digit first, plus a separate
negative flag. Operations never modify their operands, they always build a
new BigInt.
"""

import re

from bignumtools.error import FormatError, DivisionByZeroError, UnsupportedOperationError

__all__ = ['BigInt', 'BASE', 'DIGIT_WIDTH', 'ZERO', 'ONE', 'TWO']

DIGIT_WIDTH = 4
BASE = 10 ** DIGIT_WIDTH

LITERAL = re.compile(r'-?[0-9]+', re.ASCII)


# Helpers on magnitudes (lists of digits, least significant first).
# Every helper returns a fresh list and leaves its arguments alone.

def _trim(digits):
    while len(digits) > 1 and digits[-1] == 0:
        digits.pop()
    return digits


def _is_zero(digits):
    return len(digits) == 1 and digits[0] == 0


def _compare(a, b):
    if len(a) != len(b):
        return 1 if len(a) > len(b) else -1
    for i in reversed(range(len(a))):
        if a[i] != b[i]:
            return 1 if a[i] > b[i] else -1
    return 0


def _add(a, b):
    result = []
    carry = 0
    for i in range(max(len(a), len(b))):
        total = (a[i] if i < len(a) else 0) + (b[i] if i < len(b) else 0) + carry
        carry, digit = divmod(total, BASE)
        result.append(digit)
    if carry:
        result.append(carry)
    return result


def _subtract(a, b):
    """a - b for magnitudes with a >= b"""
    result = []
    borrow = 0
    for i in range(max(len(a), len(b))):
        diff = (a[i] if i < len(a) else 0) - (b[i] if i < len(b) else 0) - borrow
        if diff < 0:
            diff += BASE
            borrow = 1
        else:
            borrow = 0
        result.append(diff)
    if borrow:
        raise ValueError('Subtrahend larger than minuend')
    return _trim(result)


def _shift(digits, n):
    if _is_zero(digits):
        return [0]
    return [0] * n + digits


def _multiply_by_digit(digits, value):
    if value == 0:
        return [0]
    result = []
    carry = 0
    for digit in digits:
        carry, low = divmod(digit * value + carry, BASE)
        result.append(low)
    while carry:
        carry, digit = divmod(carry, BASE)
        result.append(digit)
    return _trim(result)


def _karatsuba(x, y):
    """https://en.wikipedia.org/wiki/Karatsuba_algorithm"""
    if len(x) == 1:
        return _multiply_by_digit(y, x[0])
    if len(y) == 1:
        return _multiply_by_digit(x, y[0])

    mid = min(len(x), len(y)) // 2

    low1, high1 = _trim(x[:mid]), x[mid:]
    low2, high2 = _trim(y[:mid]), y[mid:]

    z0 = _karatsuba(low1, low2)
    z1 = _karatsuba(_add(low1, high1), _add(low2, high2))
    z2 = _karatsuba(high1, high2)

    # z1 - z2 - z0 == low1 * high2 + high1 * low2
    middle = _subtract(_subtract(z1, z2), z0)

    return _trim(_add(_add(_shift(z2, 2 * mid), _shift(middle, mid)), z0))


def _divmod_by_digit(digits, divisor):
    quotient = [0] * len(digits)
    remainder = 0
    for i in reversed(range(len(digits))):
        quotient[i], remainder = divmod(remainder * BASE + digits[i], divisor)
    return _trim(quotient), [remainder]


def _divmod(a, b):
    """
        Schoolbook long division of magnitudes, b != 0

        https://en.wikipedia.org/wiki/Long_division, Knuth's Algorithm D: both
        operands are scaled so the top digit of b is at least BASE / 2, then
        every quotient digit guessed from the leading digits is at most two
        too large.
    """
    if len(b) == 1:
        return _divmod_by_digit(a, b[0])
    if _compare(a, b) < 0:
        return [0], list(a)

    scale = BASE // (b[-1] + 1)
    a, b = _multiply_by_digit(a, scale), _multiply_by_digit(b, scale)
    n, top = len(b), b[-1]

    quotient = [0] * len(a)
    remainder = [0]
    for i in reversed(range(len(a))):
        remainder = _trim([a[i]] + remainder)

        # remainder < b * BASE here, so the quotient digit fits in one digit
        high = remainder[n] if len(remainder) > n else 0
        low = remainder[n - 1] if len(remainder) >= n else 0
        q = min((high * BASE + low) // top, BASE - 1)

        product = _multiply_by_digit(b, q)
        while _compare(product, remainder) > 0:
            q -= 1
            product = _subtract(product, b)

        quotient[i] = q
        remainder = _subtract(remainder, product)

    return _trim(quotient), _divmod_by_digit(remainder, scale)[0]


def _bits(digits):
    """Binary digits of a magnitude, least significant first"""
    bits = []
    while not _is_zero(digits):
        digits, remainder = _divmod_by_digit(digits, 2)
        bits.append(remainder[0])
    return bits


class BigInt:
    """
        Immutable arbitrary-precision integer

        divide() truncates toward zero, so there is deliberately no // or divmod()
        operator, which Python defines as floor division.
    """

    def __init__(self, x):
        if not isinstance(x, str) or not LITERAL.fullmatch(x):
            raise FormatError(f"Invalid number '{x}'")

        negative = x.startswith('-')
        x = x.lstrip('-').lstrip('0') or '0'

        digits = []
        for end in range(len(x), 0, -DIGIT_WIDTH):
            digits.append(int(x[max(0, end - DIGIT_WIDTH):end]))

        self._digits = _trim(digits)
        self._negative = negative and not _is_zero(self._digits)

    @classmethod
    def _from_magnitude(cls, digits, negative=False):
        result = cls.__new__(cls)
        result._digits = _trim(list(digits))
        result._negative = negative and not _is_zero(result._digits)
        return result

    @classmethod
    def from_int(cls, i: int) -> 'BigInt':
        if isinstance(i, bool) or not isinstance(i, int):
            raise TypeError(f'Expected an int, got {type(i).__name__}')
        negative = i < 0
        i = abs(i)
        digits = []
        while True:
            i, digit = divmod(i, BASE)
            digits.append(digit)
            if i == 0:
                break
        return cls._from_magnitude(digits, negative)

    @classmethod
    def coerce(cls, value) -> 'BigInt':
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls(value)
        return cls.from_int(value)

    @property
    def digits(self):
        return tuple(self._digits)

    @property
    def is_negative(self):
        return self._negative

    def sign(self) -> int:
        if _is_zero(self._digits):
            return 0
        return -1 if self._negative else 1

    def is_zero(self):
        return _is_zero(self._digits)

    def is_even(self):
        # BASE is even, so parity is decided by the lowest digit
        return self._digits[0] % 2 == 0

    def is_odd(self):
        return not self.is_even()

    def bit_length(self) -> int:
        return len(_bits(self._digits))

    def abs(self) -> 'BigInt':
        return self._from_magnitude(self._digits)

    def negate(self) -> 'BigInt':
        return self._from_magnitude(self._digits, not self._negative)

    def add(self, x) -> 'BigInt':
        x = self.coerce(x)
        if self._negative == x._negative:
            return self._from_magnitude(_add(self._digits, x._digits), self._negative)

        order = _compare(self._digits, x._digits)
        if order == 0:
            return ZERO
        if order > 0:
            return self._from_magnitude(_subtract(self._digits, x._digits), self._negative)
        return self._from_magnitude(_subtract(x._digits, self._digits), x._negative)

    def subtract(self, x) -> 'BigInt':
        # a - b == a + (-b), the sign handling lives in add()
        return self.add(self.coerce(x).negate())

    def multiply(self, x) -> 'BigInt':
        x = self.coerce(x)
        return self._from_magnitude(_karatsuba(self._digits, x._digits), self._negative != x._negative)

    def multiply_by_simple_value(self, value: int) -> 'BigInt':
        """Linear time multiplication by a native integer"""
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f'Expected an int, got {type(value).__name__}')
        return self._from_magnitude(_multiply_by_digit(self._digits, abs(value)), self._negative != (value < 0))

    def multiply_by_order(self, n: int) -> 'BigInt':
        """Multiply by BASE^n, e.g. 123 with n = 2 is 12300000 when BASE = 10^4"""
        if n < 0:
            raise ValueError('Order must be non-negative')
        return self._from_magnitude(_shift(self._digits, n), self._negative)

    def divmod(self, x):
        """Truncated division, the remainder takes the sign of the dividend"""
        x = self.coerce(x)
        if x.is_zero():
            raise DivisionByZeroError('Division by zero')
        quotient, remainder = _divmod(self._digits, x._digits)
        return (self._from_magnitude(quotient, self._negative != x._negative),
                self._from_magnitude(remainder, self._negative))

    def divide(self, x) -> 'BigInt':
        return self.divmod(x)[0]

    def remainder(self, x) -> 'BigInt':
        return self.divmod(x)[1]

    def modulo(self, n) -> 'BigInt':
        """Canonical residue in [0, |n|)"""
        n = self.coerce(n)
        remainder = self.remainder(n)
        if remainder._negative:
            remainder = remainder.add(n.abs())
        return remainder

    def power(self, x, n=None) -> 'BigInt':
        """self^x, or self^x mod n by square-and-multiply when a modulus is given"""
        x = self.coerce(x)
        if x._negative:
            raise UnsupportedOperationError('Negative exponents are not supported')

        bits = _bits(x._digits)

        if n is None:
            result, base = ONE, self
            for i, bit in enumerate(bits):
                if bit:
                    result = result.multiply(base)
                if i < len(bits) - 1:
                    base = base.multiply(base)
            return result

        n = self.coerce(n)
        if n.is_zero():
            raise DivisionByZeroError('Modulus must be non-zero')

        result, base = ONE.modulo(n), self.modulo(n)
        for i, bit in enumerate(bits):
            if bit:
                result = result.multiply(base).modulo(n)
            if i < len(bits) - 1:
                base = base.multiply(base).modulo(n)
        return result

    def compare_to(self, x) -> int:
        x = self.coerce(x)
        if self._negative != x._negative:
            return -1 if self._negative else 1
        order = _compare(self._digits, x._digits)
        return -order if self._negative else order

    def to_string(self) -> str:
        if self.is_zero():
            return '0'
        head = str(self._digits[-1])
        tail = ''.join(f'{digit:0{DIGIT_WIDTH}d}' for digit in reversed(self._digits[:-1]))
        return ('-' if self._negative else '') + head + tail

    def pretty(self) -> str:
        if self.is_zero():
            return '0'
        terms = ' + '.join(f'{digit}*{BASE}^{i}' for i, digit in reversed(list(enumerate(self._digits))) if digit)
        return f'-({terms})' if self._negative else terms

    def __int__(self):
        value = 0
        for digit in reversed(self._digits):
            value = value * BASE + digit
        return -value if self._negative else value

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return f"BigInt('{self.to_string()}')"

    def __hash__(self):
        # equal to hash(int(self)) so BigInt and int keys mix in sets and dicts
        return hash(int(self))

    def __bool__(self):
        return not self.is_zero()

    def _compare_other(self, other):
        if isinstance(other, BigInt) or (isinstance(other, int) and not isinstance(other, bool)):
            return self.compare_to(other)
        return None

    def __eq__(self, other):
        order = self._compare_other(other)
        return NotImplemented if order is None else order == 0

    def __lt__(self, other):
        order = self._compare_other(other)
        return NotImplemented if order is None else order < 0

    def __le__(self, other):
        order = self._compare_other(other)
        return NotImplemented if order is None else order <= 0

    def __gt__(self, other):
        order = self._compare_other(other)
        return NotImplemented if order is None else order > 0

    def __ge__(self, other):
        order = self._compare_other(other)
        return NotImplemented if order is None else order >= 0

    def __neg__(self):
        return self.negate()

    def __abs__(self):
        return self.abs()

    def __add__(self, other):
        return self.add(other)

    def __radd__(self, other):
        return self.add(other)

    def __sub__(self, other):
        return self.subtract(other)

    def __rsub__(self, other):
        return self.coerce(other).subtract(self)

    def __mul__(self, other):
        return self.multiply(other)

    def __rmul__(self, other):
        return self.multiply(other)

    def __mod__(self, other):
        return self.modulo(other)

    def __pow__(self, exponent, modulus=None):
        return self.power(exponent, modulus)


ZERO = BigInt('0')
ONE = BigInt('1')
TWO = BigInt('2')
