import copy

from .const import ISSUE, KIND
from .errors import Issue, SchemaError
from .result import Success, Failure
from .util import MISSING, get_value_type_name


class Schema:
    """ Validation schema.

    A schema is an immutable object which checks an untyped value (decoded JSON, form input,
    environment variables) against a declared shape, and produces either the validated value
    or the complete list of problems.

    Schemas are built by composition:

    ```python
    from vet import Object, String, Int

    schema = Object({
        'email': String().email(),
        'age': Int().min(18),
    })
    ```

    Once the Schema is defined, validation can be triggered in three ways:

    1. `schema.validate(value)` returns a [`Result`](#result) and never raises on bad input:

        ```python
        schema.validate({'email': 'bad', 'age': 10})
        #-> Failure([Issue(code='invalid_format', path=('email',)), Issue(code='too_small', path=('age',))])
        ```

    2. `schema.validate_or_throw(value)`, or just calling the schema, returns the validated value
        or raises [`Invalid`](#invalid) carrying *all* the issues:

        ```python
        schema({'email': 'user@example.com', 'age': 18})  #-> {'email': 'user@example.com', 'age': 18}
        ```

    3. `await schema.validate_async(value)` is the asynchronous counterpart.
        It's required when the schema contains [asynchronous refinements](#refineasync).

    Every chaining method returns a *new* schema and never modifies the one it's called on,
    so a base schema can be shared and extended in multiple directions:

    ```python
    name = String().trim()
    short_name = name.max(10)
    long_name = name.min(10)
    ```

    The following modifiers are available on every schema:

    * `optional()`: accept a missing object key
    * `nullable()`: accept `None`
    * `nullish()`: both
    * `default(value)`: use the value when the input is `None`, missing, or invalid
    * `catch(fallback)`: recover from any failure
    * `transform(fn)`: map the validated value
    * `preprocess(fn)`: map the raw input before validation
    * `pipe(schema)`: feed the output into another schema
    * `refine(predicate)`, `refine_async(predicate)`, `super_refine(fn)`: custom checks
    * `message(text)`: override the message of every reported issue
    """

    #: Schema kind: one of `KIND.*`
    kind = None

    @property
    def name(self):
        """ Human-friendly schema name, used in `repr()` """
        return type(self).__name__

    @property
    def children(self):
        """ Sub-schemas owned by this schema

        :rtype: tuple[Schema]
        """
        return ()

    @property
    def is_async(self):
        """ Whether the schema tree contains asynchronous refinements.

        Such schemas can only be validated with `validate_async()`.

        :rtype: bool
        """
        return any(s.is_async for s in self.children)

    def __repr__(self):
        return self.name

    def __str__(self):
        return self.name

    #region Validation

    def validate(self, value):
        """ Validate the input value

        :param value: Input value to validate. It's never modified.
        :return: `Success(validated-value)` or `Failure(issues)`
        :rtype: Result
        :raises SchemaError: The schema contains asynchronous refinements: use `validate_async()`
        """
        if self.is_async:
            raise SchemaError('{} contains asynchronous refinements: use validate_async()'.format(self.name))
        return self._validate(value)

    def validate_or_throw(self, value):
        """ Validate the input value and return the validated value

        :param value: Input value to validate
        :return: Validated value
        :raises vet.Invalid: Validation failed. Carries all issues.
        :raises SchemaError: The schema contains asynchronous refinements
        """
        return self.validate(value).value_or_throw()

    def __call__(self, value):
        """ Having a `Schema`, user input can be validated by calling the Schema on the input value.

        Same as `validate_or_throw()`.
        """
        return self.validate_or_throw(value)

    async def validate_async(self, value):
        """ Validate the input value asynchronously.

        If the schema has no asynchronous refinements, this simply runs the synchronous validation.

        :param value: Input value to validate
        :rtype: Result
        """
        if not self.is_async:
            return self._validate(value)
        return await self._validate_async(value)

    def _validate(self, value):
        """ Do validation. Implemented by every schema.

        Composite schemas call it on their children directly.

        :rtype: Result
        """
        raise NotImplementedError

    async def _validate_async(self, value):
        """ Do asynchronous validation.

        Defaults to the synchronous validation: only schemas that own children or run async
        predicates need to override it.

        :rtype: Result
        """
        return self._validate(value)

    #endregion

    #region Building

    def _replace(self, **attrs):
        """ Structural copy of this schema with some attributes replaced

        :rtype: Schema
        """
        clone = copy.copy(self)
        clone.__dict__.update(attrs)
        return clone

    def optional(self):
        from ..validators.predicates import Optional
        return Optional(self)

    def nullable(self):
        from ..validators.predicates import Nullable
        return Nullable(self)

    def nullish(self):
        from ..validators.predicates import Optional, Nullable
        return Optional(Nullable(self))

    def default(self, value):
        from ..validators.values import Default
        return Default(self, value)

    def catch(self, fallback):
        from ..validators.values import Catch
        return Catch(self, fallback)

    def transform(self, fn):
        from ..helpers import Transform
        return Transform(self, fn)

    def preprocess(self, fn):
        from ..helpers import Preprocess
        return Preprocess(fn, self)

    def pipe(self, schema):
        from ..validators.predicates import Pipe
        return Pipe(self, schema)

    def refine(self, predicate, message=None, code=ISSUE.CUSTOM_ERROR, path=()):
        from ..validators.predicates import Refine
        return Refine(self, predicate, message, code, path)

    def refine_async(self, predicate, message=None, code=ISSUE.CUSTOM_ERROR, path=()):
        from ..validators.predicates import RefineAsync
        return RefineAsync(self, predicate, message, code, path)

    def super_refine(self, fn):
        from ..validators.predicates import SuperRefine
        return SuperRefine(self, fn)

    def message(self, message):
        from ..helpers import Msg
        return Msg(self, message)

    #endregion


def invalid_type(expected, value):
    """ Make an `invalid_type` issue.

    For a missing object key, this becomes `missing_key`.

    :param expected: Expected type name
    :type expected: str
    :param value: The input value
    :rtype: Issue
    """
    if value is MISSING:
        return Issue(ISSUE.MISSING_KEY, metadata={'expected': expected})
    return Issue(ISSUE.INVALID_TYPE, None, (), value, {
        'expected': expected,
        'received': get_value_type_name(value),
    })


def prefixed(issues, segment):
    """ Prepend the segment to the path of every issue

    :type issues: tuple[Issue]
    :type segment: str|int
    :rtype: list[Issue]
    """
    return [issue.with_path(segment) for issue in issues]


__all__ = ('Schema', 'Success', 'Failure', 'KIND', 'invalid_type', 'prefixed')
