__all__ = ['BigNumError', 'FormatError', 'DivisionByZeroError', 'InvalidRangeError', 'UnsupportedOperationError']


class BigNumError(Exception):
    pass


class FormatError(BigNumError, ValueError):
    pass


class DivisionByZeroError(BigNumError, ZeroDivisionError):
    pass


class InvalidRangeError(BigNumError, ValueError):
    def __init__(self, message, lo=None, hi=None):
        super().__init__(message)
        self.message = message
        self.lo = lo
        self.hi = hi


class UnsupportedOperationError(BigNumError, NotImplementedError):
    pass
