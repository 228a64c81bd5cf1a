""" Coercion: best-effort conversion of the raw input before a primitive schema runs its checks.

Every primitive schema has a `coerce()` method which enables conversion:

```python
from vet import Int

schema = Int().coerce().min(10)

schema('12')  #-> 12
schema('5')
#-> Invalid: [too_small]: Must be >= 10
schema('abc')
#-> Invalid: [invalid_coercion]: Cannot convert to int
```

Note that conversion happens first, and only then the value is checked against the constraints:
hence `'5'` is reported as too small, not as a wrong type.

For convenience, there are shortcuts: `Coerce(int)`, `CoerceInt()`, `CoerceFloat()`, `CoerceBool()`,
`CoerceString()`, `CoerceDateTime()`.

The conversion functions raise `TypeError` or `ValueError` when conversion is not possible.
"""

from datetime import datetime, timezone


def to_int(v):
    """ Convert to `int`: integers, whole floats, and numeric strings """
    if isinstance(v, bool):
        raise TypeError('Booleans are not converted to numbers')
    if isinstance(v, int):
        return v
    if isinstance(v, float):
        if not v.is_integer():
            raise ValueError('Not a whole number: {!r}'.format(v))
        return int(v)
    if isinstance(v, str):
        return int(v.strip())
    raise TypeError('Cannot convert {} to int'.format(type(v).__name__))


def to_float(v):
    """ Convert to `float`: numbers and numeric strings """
    if isinstance(v, bool):
        raise TypeError('Booleans are not converted to numbers')
    if isinstance(v, (int, float)):
        return float(v)
    if isinstance(v, str):
        return float(v.strip())
    raise TypeError('Cannot convert {} to float'.format(type(v).__name__))


#: Case-insensitive constants for boolean strings
_true_values = frozenset(('1', 'y', 'yes', 'true', 'on'))
_false_values = frozenset(('0', 'n', 'no', 'false', 'off'))


def to_bool(v):
    """ Convert human-readable boolean values to a `bool`.

    The following values are supported:

    * `bool`: direct
    * `int`: `1` = `True`, `0` = `False`; other numbers fail
    * `str`: case-insensitive `1|y|yes|true|on` and `0|n|no|false|off`, surrounding whitespace ignored
    """
    if isinstance(v, bool):
        return v
    if isinstance(v, int):
        if v in (0, 1):
            return v == 1
        raise ValueError('Wrong boolean value: {!r}'.format(v))
    if isinstance(v, str):
        s = v.strip().lower()
        if s in _true_values:
            return True
        if s in _false_values:
            return False
        raise ValueError('Wrong boolean value: {!r}'.format(v))
    raise TypeError('Cannot convert {} to bool'.format(type(v).__name__))


def to_string(v):
    """ Convert any value to `str`. `None` fails; bytes are decoded as UTF-8 """
    if v is None:
        raise TypeError('Cannot convert None to string')
    if isinstance(v, str):
        return v
    if isinstance(v, bytes):
        return v.decode('utf-8')
    return str(v)


def parse_datetime(v, formats=()):
    """ Parse a string into a `datetime`.

    Tries the `strptime()` formats in order, or ISO 8601 when no formats are given.
    A trailing `Z` is understood as UTC.

    :type v: str
    :param formats: `strptime()` formats
    :type formats: tuple[str]
    :rtype: datetime
    :raises ValueError: unparsable string
    """
    s = v.strip()
    if not formats:
        if s.endswith(('Z', 'z')):
            s = s[:-1] + '+00:00'
        return datetime.fromisoformat(s)

    for fmt in formats:
        try:
            return datetime.strptime(s, fmt)
        except ValueError:
            pass
    raise ValueError('Datetime {!r} does not match any of the formats'.format(v))


def to_datetime(v):
    """ Convert to `datetime`: datetimes, ISO 8601 strings, and epoch timestamps in milliseconds (as UTC) """
    if isinstance(v, datetime):
        return v
    if isinstance(v, bool):
        raise TypeError('Booleans are not converted to dates')
    if isinstance(v, (int, float)):
        try:
            return datetime.fromtimestamp(v / 1000, tz=timezone.utc)
        except (OverflowError, OSError) as e:  # OSError: EOVERFLOW from the platform's gmtime()
            raise ValueError('Timestamp out of range: {!r}'.format(v)) from e
    if isinstance(v, str):
        return parse_datetime(v)
    raise TypeError('Cannot convert {} to datetime'.format(type(v).__name__))


def CoerceInt():
    """ `Int().coerce()` """
    from .numbers import Int
    return Int().coerce()


def CoerceFloat():
    """ `Float().coerce()` """
    from .numbers import Float
    return Float().coerce()


def CoerceBool():
    """ `Bool().coerce()` """
    from .boolean import Bool
    return Bool().coerce()


def CoerceString():
    """ `String().coerce()` """
    from .strings import String
    return String().coerce()


def CoerceDateTime():
    """ `DateTime().coerce()` """
    from .dates import DateTime
    return DateTime().coerce()


def Coerce(t):
    """ Get a coercing schema for the Python type.

    ```python
    from vet import Coerce

    Coerce(int)('1')  #-> 1
    Coerce(bool)('yes')  #-> True
    ```

    :param t: One of: `int`, `float`, `bool`, `str`, `datetime`
    :type t: type
    :rtype: vet.validators.base.Primitive
    :raises SchemaError: Unsupported type
    """
    from ..schema.errors import SchemaError

    factories = {
        int: CoerceInt,
        float: CoerceFloat,
        bool: CoerceBool,
        str: CoerceString,
        datetime: CoerceDateTime,
    }
    try:
        return factories[t]()
    except (KeyError, TypeError):
        raise SchemaError('Coercion to {!r} is not supported'.format(t))


__all__ = ('Coerce', 'CoerceInt', 'CoerceFloat', 'CoerceBool', 'CoerceString', 'CoerceDateTime')
