import logging

from .schema import Schema, Success, Failure
from .schema.const import ISSUE, KIND
from .schema.errors import Issue
from .schema.util import get_callable_name

logger = logging.getLogger(__name__)


class Transform(Schema):
    """ Map the validated value with a function.

    ```python
    from vet import String

    schema = String().trim().transform(len)

    schema('  abc ')  #-> 3
    ```

    The function only runs when the wrapped schema has succeeded.
    If it raises an exception, it's reported as a `transform_error`.

    :param schema: The wrapped schema
    :type schema: Schema
    :param fn: Transformation: `(value) -> value`
    :type fn: callable
    """

    kind = KIND.TRANSFORM

    def __init__(self, schema, fn):
        assert callable(fn), 'Transformation must be callable'
        self.schema = schema
        self.fn = fn

    @property
    def name(self):
        return '{}.transform({})'.format(self.schema.name, get_callable_name(self.fn))

    @property
    def children(self):
        return (self.schema,)

    def _apply(self, result):
        if not result.ok:
            return result
        try:
            return Success(self.fn(result.value))
        except Exception as e:
            logger.debug('Transformation %s has failed', get_callable_name(self.fn), exc_info=True)
            return Failure([Issue(ISSUE.TRANSFORM_ERROR, None, (), result.value, {'error': str(e)})])

    def _validate(self, v):
        return self._apply(self.schema._validate(v))

    async def _validate_async(self, v):
        return self._apply(await self.schema._validate_async(v))


class Preprocess(Schema):
    """ Map the raw input with a function before the wrapped schema validates it.

    ```python
    from vet import String

    schema = String().preprocess(lambda v: ','.join(v) if isinstance(v, list) else v)

    schema(['a', 'b'])  #-> 'a,b'
    ```

    If the function raises an exception, it's reported as a `preprocess_error`.

    :param fn: Preprocessing: `(input) -> input`
    :type fn: callable
    :param schema: The wrapped schema
    :type schema: Schema
    """

    kind = KIND.PREPROCESS

    def __init__(self, fn, schema):
        assert callable(fn), 'Preprocessing must be callable'
        self.fn = fn
        self.schema = schema

    @property
    def name(self):
        return '{}.preprocess({})'.format(self.schema.name, get_callable_name(self.fn))

    @property
    def children(self):
        return (self.schema,)

    def _prepare(self, v):
        try:
            return Success(self.fn(v))
        except Exception as e:
            logger.debug('Preprocessing %s has failed', get_callable_name(self.fn), exc_info=True)
            return Failure([Issue(ISSUE.PREPROCESS_ERROR, None, (), v, {'error': str(e)})])

    def _validate(self, v):
        prepared = self._prepare(v)
        return self.schema._validate(prepared.value) if prepared.ok else prepared

    async def _validate_async(self, v):
        prepared = self._prepare(v)
        return await self.schema._validate_async(prepared.value) if prepared.ok else prepared


class Msg(Schema):
    """ Override the message of every issue reported by the wrapped schema.

    ```python
    from vet import Int

    schema = Int().coerce().message('Need a number')
    schema(1)  #-> 1
    schema('a')
    #-> Invalid: [invalid_coercion]: Need a number
    ```

    Codes, paths and metadata are kept: only the message changes.

    :param schema: The wrapped schema to modify the messages for
    :type schema: Schema
    :param message: Message to use instead of the ones reported by the wrapped schema
    :type message: str
    """

    kind = KIND.MESSAGE

    def __init__(self, schema, message):
        assert isinstance(message, str), 'Msg() message must be a string'
        self.schema = schema
        self.text = message

    @property
    def name(self):
        return self.schema.name

    @property
    def children(self):
        return (self.schema,)

    def _override(self, result):
        if result.ok:
            return result
        return Failure([issue.with_message(self.text) for issue in result.issues])

    def _validate(self, v):
        return self._override(self.schema._validate(v))

    async def _validate_async(self, v):
        return self._override(await self.schema._validate_async(v))


class Lazy(Schema):
    """ Defer the schema construction: this is how recursive shapes are defined.

    ```python
    from vet import Object, Array, String, Lazy

    category = Object({
        'name': String(),
        'children': Array(Lazy(lambda: category)),
    })

    category({'name': 'root', 'children': [{'name': 'leaf', 'children': []}]})
    ```

    The factory is called on the first validation, and the schema is remembered.

    Since a recursive schema can't be walked to find out whether it's asynchronous,
    tell it explicitly: `Lazy(factory, is_async=True)` when it contains asynchronous refinements.

    :param factory: Function that returns the schema
    :type factory: callable
    :param is_async: Whether the produced schema is asynchronous
    :type is_async: bool
    """

    kind = KIND.LAZY

    def __init__(self, factory, is_async=False):
        assert callable(factory), 'Lazy() factory must be callable'
        self.factory = factory
        self.declared_async = is_async
        self._schema = None

    @property
    def schema(self):
        """ The produced schema """
        if self._schema is None:
            self._schema = self.factory()
        return self._schema

    @property
    def name(self):
        return 'Lazy({})'.format(get_callable_name(self.factory))

    @property
    def is_async(self):
        return self.declared_async

    def _validate(self, v):
        return self.schema._validate(v)

    async def _validate_async(self, v):
        return await self.schema._validate_async(v)


def name(name, fn=None):
    """ Set a name on a callable.

    Useful for readable schema names when using lambdas in refinements and transformations:

    ```python
    from vet import String, name

    String().refine(lambda v: v.isupper())
    #-> String.refine(<lambda>())
    String().refine(name('uppercase', lambda v: v.isupper()))
    #-> String.refine(uppercase)
    ```

    :param name: Name to assign on the callable
    :type name: str
    :param fn: The callable. If not provided -- a decorator is returned instead:

        ```python
        from vet import name

        @name('uppercase')
        def is_upper(v):
            return v.isupper()
        ```

    :type fn: callable
    :return: The same callable
    :rtype: callable
    """
    # Decorator mode
    if fn is None:
        def decorator(f):
            f.name = name
            return f
        return decorator

    # Direct mode
    fn.name = name
    return fn


__all__ = ('Transform', 'Preprocess', 'Msg', 'Lazy', 'name')
