from datetime import datetime, tzinfo

from .base import Primitive
from .types import parse_datetime, to_datetime
from ..schema import Failure
from ..schema.const import ISSUE, KIND
from ..schema.errors import Issue


def _isoformat(dt):
    return dt.isoformat()


def _is_aware(dt):
    return dt.tzinfo is not None and dt.utcoffset() is not None


class DateTime(Primitive):
    """ Validate that the input is a Python `datetime`.

    Supports the following input values:

    1. `datetime`: passthrough
    2. string: parses the string with any of the specified formats
        (see [strptime()](https://docs.python.org/3/library/datetime.html#strftime-and-strptime-behavior)),
        or as ISO 8601 when no formats are given. A trailing `Z` means UTC.
    3. With `coerce()`: a timestamp in milliseconds since the epoch, converted to an aware UTC `datetime`.

    ```python
    from datetime import datetime
    from vet import DateTime

    schema = DateTime().after(datetime(2020, 1, 1))

    schema('2021-09-06T21:22:23')  #-> datetime.datetime(2021, 9, 6, 21, 22, 23)
    schema('2019-01-01')
    #-> Invalid: [date_too_early]: Date must be after 2020-01-01T00:00:00
    schema('yesterday')
    #-> Invalid: [invalid_date]: Expected a datetime, an ISO 8601 string or a timestamp
    ```

    Notes on timezones:

    * A string without an offset is parsed into a *naive* `datetime`; with an offset, into an *aware* one.
    * A naive `datetime` can't be compared to an aware one: each such bound reports `invalid_date`,
      while the other bounds are still checked.

    If your application wants different rules, use `localize` and `astz`:

    * `localize` is the default timezone to set on *naive* datetimes,
        or a callable which is applied to the input and should return an adjusted `datetime`.
    * `astz` is the timezone to adjust the *aware* datetime to, or a callable.

    Both are applied before the bounds are checked.

    :param formats: Supported format string, or an iterable of formats to try them all.
        `None` for ISO 8601.
    :type formats: str|Iterable[str]|None
    :param localize: Adjust *naive* `datetimes` to a timezone, making it *aware*.
    :type localize: datetime.tzinfo|Callable|None
    :param astz: Adjust *aware* `datetimes` to another timezone.
    :type astz: datetime.tzinfo|Callable|None
    """

    kind = KIND.DATETIME
    expected = 'datetime'
    default_coercer = staticmethod(to_datetime)

    def __init__(self, formats=None, localize=None, astz=None):
        super().__init__()

        # Ensure a tuple
        self.formats = tuple([formats] if isinstance(formats, str) else formats or ())

        # Converters
        if isinstance(localize, tzinfo):
            self.localize = lambda dt: dt.replace(tzinfo=localize)
        else:
            self.localize = localize
        if isinstance(astz, tzinfo):
            self.astz = lambda dt: dt.astimezone(astz)
        else:
            self.astz = astz

    def _check_type(self, v):
        return isinstance(v, datetime)

    def _normalize(self, dt):
        if self.localize and dt.tzinfo is None:
            dt = self.localize(dt)
        if self.astz and dt.tzinfo is not None:
            dt = self.astz(dt)
        return dt

    def _validate(self, v):
        # Strings are always parsed: coercion only adds timestamps
        if isinstance(v, str):
            try:
                v = parse_datetime(v, self.formats)
            except ValueError:
                return Failure([Issue(ISSUE.INVALID_DATE, None, (), v, {'formats': self.formats})])
        return super()._validate(v)

    def _check(self, c, dt):
        # A bound can't be compared to a datetime of the other kind
        if _is_aware(c.params['bound']) != _is_aware(dt):
            return Issue(ISSUE.INVALID_DATE, None, (), dt, {
                'reason': 'cannot compare naive and aware datetimes',
                'bound': c.params['bound'],
            })
        return super()._check(c, dt)

    #region Bounds

    def after(self, dt, message=None):
        """ Not earlier than `dt`, inclusive: `date_too_early` """
        assert isinstance(dt, datetime), 'after() expects a datetime'
        return self._constrain('min', ISSUE.DATE_TOO_EARLY, lambda v: v >= dt,
                               {'min': dt.isoformat(), 'bound': dt}, message, _isoformat)

    def before(self, dt, message=None):
        """ Not later than `dt`, inclusive: `date_too_late` """
        assert isinstance(dt, datetime), 'before() expects a datetime'
        return self._constrain('max', ISSUE.DATE_TOO_LATE, lambda v: v <= dt,
                               {'max': dt.isoformat(), 'bound': dt}, message, _isoformat)

    min = after
    max = before

    def between(self, start, end, message=None):
        """ `start <= value <= end` """
        return self.after(start, message).before(end, message)

    #endregion


__all__ = ('DateTime',)
