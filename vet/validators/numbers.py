import math

from .base import Primitive
from .types import to_int, to_float
from ..schema.const import ISSUE, KIND


def _identity(v):
    return v


def _is_multiple(v, step):
    """ Test whether `v` is a multiple of `step`, tolerating float rounding """
    if isinstance(v, int) and isinstance(step, int):
        return v % step == 0
    if not math.isfinite(v):
        return False
    quotient = v / step
    return math.isclose(quotient, round(quotient), rel_tol=1e-9, abs_tol=1e-9)


class Number(Primitive):
    """ Base for numeric schemas.

    Every bound is inclusive unless noted otherwise, and all failing constraints are reported together:

    ```python
    from vet import Int

    schema = Int().min(0).max(100).step(5)

    schema(15)  #-> 15
    schema(101)
    #-> Invalid: Multiple validation errors:
    #     - [too_big]: Must be <= 100
    #     - [not_multiple_of]: Must be a multiple of 5
    ```
    """

    #region Bounds

    def min(self, n, message=None):
        """ Value `>= n`: `too_small` """
        return self._constrain('min', ISSUE.TOO_SMALL, lambda v: v >= n, {'min': n, 'inclusive': True},
                               message, _identity)

    def max(self, n, message=None):
        """ Value `<= n`: `too_big` """
        return self._constrain('max', ISSUE.TOO_BIG, lambda v: v <= n, {'max': n, 'inclusive': True},
                               message, _identity)

    gte = min
    lte = max

    def gt(self, n, message=None):
        """ Value `> n`: `too_small` """
        return self._constrain('min', ISSUE.TOO_SMALL, lambda v: v > n, {'min': n, 'inclusive': False},
                               message, _identity)

    def lt(self, n, message=None):
        """ Value `< n`: `too_big` """
        return self._constrain('max', ISSUE.TOO_BIG, lambda v: v < n, {'max': n, 'inclusive': False},
                               message, _identity)

    def range(self, min, max, message=None):
        """ `min <= value <= max` """
        assert min <= max, 'range(): min > max'
        return self.min(min, message).max(max, message)

    #endregion

    #region Sign

    def positive(self, message=None):
        """ Value `> 0`: `not_positive` """
        return self._constrain('sign', ISSUE.NOT_POSITIVE, lambda v: v > 0, {}, message, _identity)

    def negative(self, message=None):
        """ Value `< 0`: `not_negative` """
        return self._constrain('sign', ISSUE.NOT_NEGATIVE, lambda v: v < 0, {}, message, _identity)

    def nonnegative(self, message=None):
        """ Value `>= 0`: `too_small` """
        return self._constrain('sign', ISSUE.TOO_SMALL, lambda v: v >= 0, {'min': 0, 'inclusive': True},
                               message, _identity)

    #endregion

    def step(self, n, message=None):
        """ A multiple of `n`: `not_multiple_of` """
        assert n, 'step() must be non-zero'
        return self._constrain('step', ISSUE.NOT_MULTIPLE_OF, lambda v: _is_multiple(v, n), {'step': n},
                               message, _identity)

    multiple_of = step


class Int(Number):
    """ Validate an integer.

    Booleans are rejected, even though `bool` is a subclass of `int` in Python.

    With `coerce()`, numeric strings and whole floats are accepted: `'42'`, `' 42 '`, `42.0`.
    """

    kind = KIND.INT
    expected = 'int'
    default_coercer = staticmethod(to_int)

    def _check_type(self, v):
        return isinstance(v, int) and not isinstance(v, bool)


class Float(Number):
    """ Validate a floating-point number.

    Only `float` is accepted: use `coerce()` to also accept integers and numeric strings.
    """

    kind = KIND.FLOAT
    expected = 'float'
    default_coercer = staticmethod(to_float)

    def _check_type(self, v):
        return isinstance(v, float)

    def finite(self, message=None):
        """ Reject NaN and infinities: `not_finite` """
        return self._constrain('finite', ISSUE.NOT_FINITE, math.isfinite, {}, message)


__all__ = ('Int', 'Float')
