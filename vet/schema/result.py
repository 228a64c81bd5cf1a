""" Validation outcome: either a [`Success`](#success) carrying the validated value,
or a [`Failure`](#failure) carrying a non-empty list of issues.

```python
from vet import Int

result = Int().min(18).validate(10)

result.ok  #-> False
result.issues  #-> (Issue(code='too_small', ...),)
result.value_or(18)  #-> 18

result.match(
    lambda value: print('Valid:', value),
    lambda issues: print('Invalid:', issues),
)
```

Both variants support structural pattern matching:

```python
match schema.validate(value):
    case Success(value):
        ...
    case Failure(issues):
        ...
```
"""

from .errors import Invalid


class Result:
    """ Base for validation results """

    __slots__ = ()

    #: Whether validation has succeeded
    ok = None

    def __bool__(self):
        return self.ok

    def map(self, fn):
        """ Apply `fn` to the successful value; failures pass through

        :type fn: callable
        :rtype: Result
        """
        raise NotImplementedError

    def match(self, on_success, on_failure):
        """ Dispatch on the outcome: calls `on_success(value)` or `on_failure(issues)`

        :return: Whatever the called branch returns
        """
        raise NotImplementedError

    def value_or(self, default):
        """ Get the validated value, or `default` on failure """
        raise NotImplementedError

    def value_or_throw(self):
        """ Get the validated value, or raise `Invalid` with all issues

        :raises Invalid: on failure
        """
        raise NotImplementedError


class Success(Result):
    """ Successful validation

    :param value: The validated value
    """

    __slots__ = ('value',)
    __match_args__ = ('value',)

    ok = True

    #: Successes never carry issues
    issues = ()

    def __init__(self, value):
        self.value = value

    def map(self, fn):
        return Success(fn(self.value))

    def match(self, on_success, on_failure):
        return on_success(self.value)

    def value_or(self, default):
        return self.value

    def value_or_throw(self):
        return self.value

    def __eq__(self, other):
        return isinstance(other, Success) and type(other.value) is type(self.value) and other.value == self.value

    def __ne__(self, other):
        return not self == other

    __hash__ = None

    def __repr__(self):
        return 'Success({!r})'.format(self.value)


class Failure(Result):
    """ Failed validation

    :param issues: The collected issues, at least one
    :type issues: list[Issue]
    :raises ValueError: empty issues list
    """

    __slots__ = ('issues',)
    __match_args__ = ('issues',)

    ok = False

    #: Failures have no value
    value = None

    def __init__(self, issues):
        issues = tuple(issues)
        if not issues:
            raise ValueError('A Failure must carry at least one issue')
        self.issues = issues

    def map(self, fn):
        return self

    def match(self, on_success, on_failure):
        return on_failure(self.issues)

    def value_or(self, default):
        return default

    def value_or_throw(self):
        raise Invalid(self.issues)

    def __eq__(self, other):
        return isinstance(other, Failure) and other.issues == self.issues

    def __ne__(self, other):
        return not self == other

    __hash__ = None

    def __repr__(self):
        return 'Failure({!r})'.format(list(self.issues))
