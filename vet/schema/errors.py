"""
Source: [vet/schema/errors.py](vet/schema/errors.py)

When [validating user input](#validating), a [`Schema`](#schema) collects all problems and reports them
after the whole input value is validated. This makes sure that you can report *all* errors at once.

Every problem is an [`Issue`](#issue): an immutable record with a code, a message, and a path to the value.
`Schema.validate()` returns them in a [`Failure`](#result); `Schema.validate_or_throw()` raises them
in a single [`Invalid`](#invalid) exception.

All errors are available right at the top-level:

```python
from vet import Issue, Invalid, SchemaError
```
"""

from collections import namedtuple

from . import messages


_IssueTuple = namedtuple('Issue', ('code', 'message', 'path', 'received', 'metadata'))


def format_path(path):
    """ Format a path as a JavaScript-friendly string: `users[1].email`

    :type path: tuple
    :rtype: str
    """
    s = ''
    for segment in path:
        if isinstance(segment, int) and not isinstance(segment, bool):
            s += '[{}]'.format(segment)
        else:
            s += ('.' if s else '') + str(segment)
    return s


class Issue(_IssueTuple):
    """ A single validation problem.

    Issues are immutable: `with_path()` and `with_message()` return new issues.

    :param code: Issue code, e.g. `'too_short'`. See `vet.schema.const.ISSUE`.
    :type code: str
    :param message: Human-readable message.

        If not provided -- it's resolved from the `code` and `metadata` with the active
        [message resolver](#message-resolution).

    :type message: str|None
    :param path: Path to the offending value, outer-to-inner.

        E.g. if an invalid value was encountered at `users[1].email`, then `path=('users', 1, 'email')`.

    :type path: tuple
    :param received: The value that has failed validation
    :param metadata: Code-specific details: `expected`, `received`, `min`, `actual`, ...
    :type metadata: dict|None
    """

    __slots__ = ()

    def __new__(cls, code, message=None, path=(), received=None, metadata=None):
        metadata = dict(metadata or {})
        if message is None:
            message = messages.resolve(code, metadata)
        return super().__new__(cls, code, message, tuple(path), received, metadata)

    def with_path(self, segment):
        """ Get a copy of this issue with the `segment` prepended to its path.

        Composite schemas call it on every issue reported by a child, so the path grows outwards:

        ```python
        Issue('too_short').with_path('email').with_path(1).with_path('users').path
        #-> ('users', 1, 'email')
        ```

        :param segment: Field name or index
        :type segment: str|int
        :rtype: Issue
        """
        return self._replace(path=(segment,) + self.path)

    def prepend_path(self, segments):
        """ Get a copy of this issue with several segments prepended to its path

        :type segments: list|tuple
        :rtype: Issue
        """
        return self._replace(path=tuple(segments) + self.path)

    def with_message(self, message):
        """ Get a copy of this issue with a different message

        :type message: str
        :rtype: Issue
        """
        return self._replace(message=message)

    @property
    def path_string(self):
        """ The path as a string: `users[1].email`. Empty for the root value. """
        return format_path(self.path)

    def __eq__(self, other):
        if not isinstance(other, Issue):
            return NotImplemented
        return (self.code, self.message, self.path) == (other.code, other.message, other.path) \
            and _same(self.received, other.received)

    def __ne__(self, other):
        eq = self.__eq__(other)
        return eq if eq is NotImplemented else not eq

    def __hash__(self):
        return hash((self.code, self.message, self.path))

    def __str__(self):
        return '[{code}]{at}: {message}'.format(
            code=self.code,
            at=' at {}'.format(self.path_string) if self.path else '',
            message=self.message)


def _same(a, b):
    # Values of different types never match: `True == 1`, but not for us
    return type(a) is type(b) and a == b


def format_issues(issues):
    """ Format issues into a nested structure that mirrors the input:

    ```python
    {
        'user': {
            'email': {'_errors': ['Invalid email format']},
            'age': {'_errors': ['Must be >= 18']},
        },
        '_errors': [...]  # root-level issues, if any
    }
    ```

    Path segments are converted to strings.

    :type issues: list[Issue]
    :rtype: dict
    """
    formatted = {}
    for issue in issues:
        node = formatted
        for segment in issue.path:
            node = node.setdefault(str(segment), {})
        node.setdefault('_errors', []).append(issue.message)
    return formatted


def group_by_path(issues):
    """ Group issue messages by their path string

    :type issues: list[Issue]
    :rtype: dict[str, list[str]]
    """
    grouped = {}
    for issue in issues:
        grouped.setdefault(issue.path_string, []).append(issue.message)
    return grouped


def flatten_messages(issues):
    """ Get the plain list of issue messages

    :type issues: list[Issue]
    :rtype: list[str]
    """
    return [issue.message for issue in issues]


class BaseError(Exception):
    """ Base validation exception """


class SchemaError(BaseError):
    """ Schema error (e.g. malformed, or used the wrong way) """


class Invalid(BaseError):
    """ Validation error: the input value has failed validation.

    It's raised by `Schema.validate_or_throw()` (and calling a schema), and always carries *all* the issues
    collected by the schema, never just the first one.

    `Invalid` is iterable over its issues:

    ```python
    try:
        schema(input_value)
    except Invalid as ee:
        reported_problems = {}
        for e in ee:  # Iterate over issues
            reported_problems[e.path_string] = e.message
        #.. send reported_problems to the user
    ```

    :param issues: The reported issues. Must not be empty.
    :type issues: list[Issue]
    """

    def __init__(self, issues):
        issues = tuple(issues)
        assert issues, 'Issues list is empty'
        super().__init__(issues)

        #: The collected issues
        self.issues = issues

    def __iter__(self):
        return iter(self.issues)

    def __len__(self):
        return len(self.issues)

    @property
    def issue(self):
        """ The first issue """
        return self.issues[0]

    def format(self):
        """ Issues as a nested structure. See `format_issues()` """
        return format_issues(self.issues)

    def group_by_path(self):
        """ Issue messages grouped by path. See `group_by_path()` """
        return group_by_path(self.issues)

    def messages(self):
        """ The plain list of messages """
        return flatten_messages(self.issues)

    def __repr__(self):
        return '{cls}({0!r})'.format(list(self.issues), cls=type(self).__name__)

    def __str__(self):
        if len(self.issues) == 1:
            return str(self.issues[0])
        return 'Multiple validation errors:\n' + '\n'.join('  - {}'.format(i) for i in self.issues)
