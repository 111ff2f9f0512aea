"""
Arbitrary-precision integers and probabilistic primality tests for generating asymmetric keys.
"""

from bignumtools import bigint, error, number_theory_stuff, primes, randomness, transformations
from bignumtools.bigint import *
from bignumtools.error import *
from bignumtools.number_theory_stuff import *
from bignumtools.primes import *
from bignumtools.randomness import *
from bignumtools.transformations import *
from bignumtools import RSA

__all__ = ['RSA']

for _module in (bigint, error, number_theory_stuff, primes, randomness, transformations):
    __all__.extend(getattr(_module, '__all__', []))

__version__ = "0.1"
