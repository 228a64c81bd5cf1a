import re
from urllib.parse import urlsplit

from .base import Primitive
from .types import to_string
from ..schema.const import ISSUE, KIND


_email_rex = re.compile(r'^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$')
_uuid_rex = re.compile(r'^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$')


def _is_url(v):
    """ Absolute URL: has both a scheme and a host """
    if not v or any(c.isspace() for c in v):
        return False
    try:
        parts = urlsplit(v)
    except ValueError:  # e.g. malformed IPv6 netloc
        return False
    return bool(parts.scheme) and bool(parts.netloc)


class String(Primitive):
    """ Validate a string.

    ```python
    from vet import String

    schema = String().trim().min(3).max(20)

    schema('  hello ')  #-> 'hello'
    schema('hi')
    #-> Invalid: [too_short]: Must be at least 3 characters
    schema(123)
    #-> Invalid: [invalid_type]: Expected string, got int
    ```

    Normalization (`trim()`, `lower()`, `upper()`) happens before the constraints are checked,
    and the normalized string is what you get back.

    Every constraint method accepts an optional `message` that overrides the default one.

    With `coerce()`, any value except `None` is converted with `str()`.
    """

    kind = KIND.STRING
    expected = 'string'
    default_coercer = staticmethod(to_string)

    def __init__(self):
        super().__init__()
        self.trimmed = False
        self.case = None

    #region Normalization

    def trim(self):
        """ Strip surrounding whitespace """
        return self._replace(trimmed=True)

    def lower(self):
        """ Convert to lowercase """
        return self._replace(case='lower')

    def upper(self):
        """ Convert to UPPERCASE """
        return self._replace(case='upper')

    def _check_type(self, v):
        return isinstance(v, str)

    def _normalize(self, v):
        if self.trimmed:
            v = v.strip()
        if self.case == 'lower':
            v = v.lower()
        elif self.case == 'upper':
            v = v.upper()
        return v

    #endregion

    #region Length

    def min(self, n, message=None):
        """ At least `n` characters: `too_short` """
        return self._constrain('min', ISSUE.TOO_SHORT, lambda v: len(v) >= n, {'min': n}, message, len)

    def max(self, n, message=None):
        """ At most `n` characters: `too_long` """
        return self._constrain('max', ISSUE.TOO_LONG, lambda v: len(v) <= n, {'max': n}, message, len)

    def length(self, n, message=None):
        """ Exactly `n` characters: `too_short` or `too_long` """
        return self.min(n, message).max(n, message)

    def nonempty(self, message=None):
        """ At least one character """
        return self.min(1, message)

    #endregion

    #region Format

    def _format(self, key, format, test, message=None, **params):
        params['format'] = format
        return self._constrain(key, ISSUE.INVALID_FORMAT, test, params, message)

    def regex(self, pattern, name='pattern', message=None):
        """ Match a regular expression.

        The pattern is searched anywhere in the string: use `^...$` to match the whole of it.

        :param pattern: RegExp pattern: a string, or a compiled pattern
        :type pattern: str|re.Pattern
        :param name: Format name for the message: "Invalid {name} format"
        :type name: str
        """
        rex = re.compile(pattern)  # accepts compiled patterns as well
        return self._format('regex', name, lambda v: rex.search(v) is not None, message, pattern=rex.pattern)

    def email(self, message=None):
        """ Email address """
        return self._format('email', 'email', lambda v: _email_rex.match(v) is not None, message)

    def url(self, message=None):
        """ Absolute URL, with the scheme and the host """
        return self._format('url', 'url', _is_url, message)

    def uuid(self, message=None):
        """ UUID in the canonical 8-4-4-4-12 form """
        return self._format('uuid', 'uuid', lambda v: _uuid_rex.match(v) is not None, message)

    def starts_with(self, prefix, message=None):
        return self._format('starts_with', 'prefix', lambda v: v.startswith(prefix), message, prefix=prefix)

    def ends_with(self, suffix, message=None):
        return self._format('ends_with', 'suffix', lambda v: v.endswith(suffix), message, suffix=suffix)

    #endregion

    def one_of(self, values, message=None):
        """ One of the listed strings: `invalid_enum` """
        values = tuple(values)
        allowed = frozenset(values)
        return self._constrain('one_of', ISSUE.INVALID_ENUM, lambda v: v in allowed, {'allowed': values}, message)


__all__ = ('String',)
