"""Helper Functions to convert between data types and BigInt"""

from bignumtools.bigint import BigInt, ZERO
from bignumtools.error import FormatError

__all__ = ['bytes_to_bigint', 'bigint_to_bytes', 'str_to_bigint', 'bigint_to_str', 'hex_to_bigint',
           'bigint_to_hex', 'int_to_bigint', 'bigint_to_int']

HEX = '0123456789abcdef'


def _from_radix(values, radix):
    result = ZERO
    for value in values:
        result = result.multiply_by_simple_value(radix).add(value)
    return result


def _to_radix(b, radix):
    b = BigInt.coerce(b)
    if b.is_negative:
        raise ValueError('Cannot convert negative integers')
    values = []
    while True:
        b, value = b.divmod(radix)
        values.append(int(value))
        if b.is_zero():
            break
    return values[::-1]


def int_to_bigint(i):
    return BigInt.from_int(i)


def bigint_to_int(b):
    return int(b)


def bytes_to_bigint(bts):
    return _from_radix(bts, 256)


def bigint_to_bytes(b):
    return bytes(_to_radix(b, 256))


def str_to_bigint(s, encoding='utf-8'):
    return bytes_to_bigint(str.encode(s, encoding))


def bigint_to_str(b, encoding='utf-8'):
    return bigint_to_bytes(b).decode(encoding)


def hex_to_bigint(h):
    h = h.lower()
    if not h or any(c not in HEX for c in h):
        raise FormatError(f"Invalid hex string '{h}'")
    return _from_radix((HEX.index(c) for c in h), 16)


def bigint_to_hex(b):
    return ''.join(HEX[value] for value in _to_radix(b, 16))
