import inspect
import logging
from collections.abc import Mapping

from ..schema import Schema, Success, Failure
from ..schema.const import ISSUE, KIND
from ..schema.context import ValidationContext
from ..schema.errors import Issue, SchemaError
from ..schema.util import MISSING, get_callable_name, get_value_type_name

logger = logging.getLogger(__name__)


class Optional(Schema):
    """ Accept a missing object key.

    ```python
    from vet import Object, String

    schema = Object({
        'name': String(),
        'nickname': String().optional(),
    })

    schema({'name': 'Alex'})  #-> {'name': 'Alex', 'nickname': None}
    schema({'name': 'Alex', 'nickname': None})
    #-> Invalid: [invalid_type] at nickname: Expected string, got null
    ```

    Note that an explicit `None` is *not* a missing key: use `nullable()` for that, or `nullish()` for both.

    :param schema: Schema for a provided value
    :type schema: Schema
    """

    kind = KIND.OPTIONAL

    def __init__(self, schema):
        self.schema = schema

    @property
    def name(self):
        return '{}?'.format(self.schema.name)

    @property
    def children(self):
        return (self.schema,)

    def _validate(self, v):
        if v is MISSING:
            return Success(None)
        return self.schema._validate(v)

    async def _validate_async(self, v):
        if v is MISSING:
            return Success(None)
        return await self.schema._validate_async(v)


class Nullable(Schema):
    """ Accept `None`.

    ```python
    from vet import String

    schema = String().email().nullable()

    schema(None)  #-> None
    schema('user@example.com')  #-> 'user@example.com'
    ```

    :param schema: Schema for a non-null value
    :type schema: Schema
    """

    kind = KIND.NULLABLE

    def __init__(self, schema):
        self.schema = schema

    @property
    def name(self):
        return '{}|null'.format(self.schema.name)

    @property
    def children(self):
        return (self.schema,)

    def _validate(self, v):
        if v is None:
            return Success(None)
        return self.schema._validate(v)

    async def _validate_async(self, v):
        if v is None:
            return Success(None)
        return await self.schema._validate_async(v)


class Union(Schema):
    """ Try the alternatives in order and use the first one that succeeds.

    This is the *OR* condition: any of the schemas should match.

    ```python
    from vet import Union, Int, String

    schema = Union(Int(), String().coerce())

    schema(1)  #-> 1
    schema(1.5)  #-> '1.5'
    ```

    If neither has matched, a single `invalid_union` issue is reported.
    Its metadata has the issues of every alternative, in declaration order:

    * `metadata['union_issues']`: tuple of issue tuples, one per alternative
    * `metadata['count']`: number of alternatives

    With a `discriminator` key, a union of objects first tries only the alternatives whose
    [`Literal`](#literal) discriminator field accepts the value. This is an optimization: if they all fail,
    every alternative is still tried, so the outcome is the same as without the discriminator.

    ```python
    schema = Union(
        Object({'type': Literal('circle'), 'radius': Float()}),
        Object({'type': Literal('square'), 'side': Float()}),
        discriminator='type',
    )
    ```

    :param alternatives: Schemas to try
    :type alternatives: Schema
    :param discriminator: Name of the object key that tells the alternatives apart
    :type discriminator: str|None
    """

    kind = KIND.UNION

    def __init__(self, *alternatives, discriminator=None):
        # Flatten (for the sake of friendlier error messages)
        alternatives = sum(tuple(s.alternatives if type(s) == Union and s.discriminator is None else (s,)
                                 for s in alternatives), ())
        if not alternatives:
            raise SchemaError('Union() needs at least one alternative')

        self.alternatives = alternatives
        self.discriminator = discriminator

    @property
    def name(self):
        return 'Union({})'.format('|'.join(s.name for s in self.alternatives))

    @property
    def children(self):
        return self.alternatives

    def _candidates(self, v):
        """ Indexes of the alternatives to try first, or `None` when the discriminator can't help """
        if self.discriminator is None or not isinstance(v, Mapping) or self.discriminator not in v:
            return None
        tag = v[self.discriminator]
        return [i for i, s in enumerate(self.alternatives) if not self._rejects(s, tag)]

    def _rejects(self, schema, tag):
        if schema.kind != KIND.OBJECT:
            return False
        field = schema.shape.get(self.discriminator)
        return field is not None and field.kind == KIND.LITERAL and not field._validate(tag).ok

    def _failed(self, v, results):
        metadata = {
            'union_issues': tuple(results[i].issues for i in range(len(self.alternatives))),
            'count': len(self.alternatives),
            'received': get_value_type_name(v),
        }
        if self.discriminator is not None:
            metadata['discriminator'] = self.discriminator
        return Failure([Issue(ISSUE.INVALID_UNION, None, (), v, metadata)])

    def _validate(self, v):
        results = {}
        for i in (self._candidates(v) or ()):
            results[i] = self.alternatives[i]._validate(v)
            if results[i].ok:
                return results[i]

        for i, schema in enumerate(self.alternatives):
            if i not in results:
                results[i] = schema._validate(v)
                if results[i].ok:
                    return results[i]
        return self._failed(v, results)

    async def _validate_async(self, v):
        results = {}
        for i in (self._candidates(v) or ()):
            results[i] = await self.alternatives[i]._validate_async(v)
            if results[i].ok:
                return results[i]

        for i, schema in enumerate(self.alternatives):
            if i not in results:
                results[i] = await schema._validate_async(v)
                if results[i].ok:
                    return results[i]
        return self._failed(v, results)


class Pipe(Schema):
    """ Feed the output of a schema into the next one.

    This is a composition of schemas: `Pipe(f, g)(value) = g(f(value))`.

    ```python
    from vet import String, Int

    schema = String().trim().pipe(Int().coerce().min(1))

    schema(' 10 ')  #-> 10
    schema(' 0 ')
    #-> Invalid: [too_small]: Must be >= 1
    ```

    The first failing stage stops the pipe, and its issues are reported unchanged.

    :param schemas: Schemas to apply, in order
    :type schemas: Schema
    """

    kind = KIND.PIPE

    def __init__(self, *schemas):
        # Flatten
        schemas = sum(tuple(s.schemas if type(s) == Pipe else (s,) for s in schemas), ())
        if not schemas:
            raise SchemaError('Pipe() needs at least one schema')
        self.schemas = schemas

    @property
    def name(self):
        return ' -> '.join(s.name for s in self.schemas)

    @property
    def children(self):
        return self.schemas

    def _validate(self, v):
        for schema in self.schemas:
            result = schema._validate(v)
            if not result.ok:
                return result
            v = result.value
        return result

    async def _validate_async(self, v):
        for schema in self.schemas:
            result = await schema._validate_async(v)
            if not result.ok:
                return result
            v = result.value
        return result


class Refine(Schema):
    """ Custom check on a validated value.

    Use the provided boolean function as a validator and report an issue when it's falsy:

    ```python
    from vet import String

    schema = String().refine(lambda s: s.isidentifier(), 'Must be a valid identifier')

    schema('user_id')  #-> 'user_id'
    schema('user-id')
    #-> Invalid: [custom_error]: Must be a valid identifier
    ```

    The predicate runs only if the wrapped schema has succeeded.
    If the predicate raises an exception, it's reported as a `refinement_error`.

    :param schema: The wrapped schema
    :type schema: Schema
    :param predicate: Boolean function: `(value) -> bool`
    :type predicate: callable
    :param message: Error message, or `None` to resolve it from the code
    :type message: str|None
    :param code: Issue code to report
    :type code: str
    :param path: Path of the issue, relative to the value: e.g. `['confirm']` to blame a field of an object
    :type path: list|tuple
    """

    kind = KIND.REFINE

    def __init__(self, schema, predicate, message=None, code=ISSUE.CUSTOM_ERROR, path=()):
        assert callable(predicate), 'Refinement predicate must be callable'
        self.schema = schema
        self.predicate = predicate
        self.error_message = message
        self.code = code
        self.path = tuple(path)

    @property
    def name(self):
        return '{}.refine({})'.format(self.schema.name, get_callable_name(self.predicate))

    @property
    def children(self):
        return (self.schema,)

    def _failed(self, v):
        return Failure([Issue(self.code, self.error_message, self.path, v)])

    def _crashed(self, v, e):
        logger.debug('Refinement %s has failed', get_callable_name(self.predicate), exc_info=True)
        return Failure([Issue(ISSUE.REFINEMENT_ERROR, None, (), v, {'error': str(e)})])

    def _validate(self, v):
        result = self.schema._validate(v)
        if not result.ok:
            return result
        try:
            passed = self.predicate(result.value)
        except Exception as e:
            return self._crashed(result.value, e)
        return result if passed else self._failed(result.value)

    async def _validate_async(self, v):
        result = await self.schema._validate_async(v)
        if not result.ok:
            return result
        try:
            passed = self.predicate(result.value)
        except Exception as e:
            return self._crashed(result.value, e)
        return result if passed else self._failed(result.value)


class RefineAsync(Refine):
    """ Custom check with an asynchronous predicate.

    ```python
    async def is_available(username):
        return not await db.users.exists(username)

    schema = String().min(3).refine_async(is_available, 'Username is taken')

    await schema.validate_async('alex')
    ```

    A schema that contains an asynchronous refinement anywhere in its tree can only be validated
    with `validate_async()`: `validate()` raises [`SchemaError`](#schemaerror).

    There are no timeouts: wrap the predicate into `asyncio.wait_for()` and decide what a timeout means.
    """

    kind = KIND.REFINE_ASYNC

    @property
    def name(self):
        return '{}.refine_async({})'.format(self.schema.name, get_callable_name(self.predicate))

    @property
    def is_async(self):
        return True

    def _validate(self, v):
        raise SchemaError('{} is asynchronous: use validate_async()'.format(self.name))

    async def _validate_async(self, v):
        result = await self.schema._validate_async(v)
        if not result.ok:
            return result
        try:
            passed = self.predicate(result.value)
            if inspect.isawaitable(passed):
                passed = await passed
        except Exception as e:
            return self._crashed(result.value, e)
        return result if passed else self._failed(result.value)


class SuperRefine(Schema):
    """ Custom check that can report any number of issues.

    The function receives the validated value and a [`ValidationContext`](#validationcontext),
    and reports issues with `ctx.add_issue()`. Alternatively, it may return a list of [`Issue`](#issue)s,
    or a boolean like a `refine()` predicate: `False` reports a `custom_error`.

    ```python
    from vet import Object, String

    def passwords_match(value, ctx):
        if value['password'] != value['confirm']:
            ctx.add_issue(message='Passwords do not match', path=['confirm'])

    schema = Object({
        'password': String().min(8),
        'confirm': String(),
    }).super_refine(passwords_match)

    schema({'password': '12345678', 'confirm': '1234'})
    #-> Invalid: [custom_error] at confirm: Passwords do not match
    ```

    If the function raises an exception, it's reported as a `refinement_error`.

    :param schema: The wrapped schema
    :type schema: Schema
    :param fn: Function: `(value, ctx) -> None|bool|list[Issue]`
    :type fn: callable
    """

    kind = KIND.SUPER_REFINE

    def __init__(self, schema, fn):
        assert callable(fn), 'Refinement function must be callable'
        self.schema = schema
        self.fn = fn

    @property
    def name(self):
        return '{}.super_refine({})'.format(self.schema.name, get_callable_name(self.fn))

    @property
    def children(self):
        return (self.schema,)

    def _refine(self, result):
        if not result.ok:
            return result

        ctx = ValidationContext()
        try:
            returned = self.fn(result.value, ctx)
        except Exception as e:
            logger.debug('Refinement %s has failed', get_callable_name(self.fn), exc_info=True)
            return Failure([Issue(ISSUE.REFINEMENT_ERROR, None, (), result.value, {'error': str(e)})])

        issues = ctx.issues + self._returned_issues(result.value, returned)
        return Failure(issues) if issues else result

    def _returned_issues(self, v, returned):
        """ Interpret the return value of the function: `None`, a boolean, or a list of issues """
        if returned is None or returned is True:
            return []
        if returned is False:
            return [Issue(ISSUE.CUSTOM_ERROR, None, (), v)]
        if isinstance(returned, Issue):
            return [returned]
        if isinstance(returned, (list, tuple)) and all(isinstance(i, Issue) for i in returned):
            return list(returned)
        logger.debug('Refinement %s has returned %r', get_callable_name(self.fn), returned)
        return [Issue(ISSUE.REFINEMENT_ERROR, None, (), v, {
            'error': 'expected None, a bool, or a list of issues; got {}'.format(get_value_type_name(returned)),
        })]

    def _validate(self, v):
        return self._refine(self.schema._validate(v))

    async def _validate_async(self, v):
        return self._refine(await self.schema._validate_async(v))


__all__ = ('Optional', 'Nullable', 'Union', 'Pipe', 'Refine', 'RefineAsync', 'SuperRefine')
