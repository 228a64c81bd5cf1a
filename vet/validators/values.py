import copy
import logging
from enum import Enum

from ..schema import Schema, Success, Failure, invalid_type
from ..schema.const import ISSUE, KIND
from ..schema.errors import Issue
from ..schema.util import MISSING, get_literal_name

logger = logging.getLogger(__name__)


class Literal(Schema):
    """ Validate that the value equals the constant, and has the same type.

    ```python
    from vet import Literal

    schema = Literal('admin')

    schema('admin')  #-> 'admin'
    schema('user')
    #-> Invalid: [invalid_literal]: Expected literal 'admin', got 'user'
    ```

    The type is compared strictly: `Literal(1)` does not accept `True` or `1.0`.

    :param value: The constant
    """

    kind = KIND.LITERAL

    def __init__(self, value):
        self.value = value

    @property
    def name(self):
        return 'Literal({})'.format(get_literal_name(self.value))

    def _validate(self, v):
        if v is MISSING:
            return Failure([invalid_type(get_literal_name(self.value), v)])
        if type(v) is type(self.value) and v == self.value:
            return Success(v)
        return Failure([Issue(ISSUE.INVALID_LITERAL, None, (), v, {
            'expected': get_literal_name(self.value),
            'received': get_literal_name(v),
        })])


class OneOf(Schema):
    """ Validate that the value is one of the allowed constants.

    Accepts either a collection of literals:

    ```python
    from vet import OneOf

    schema = OneOf(['draft', 'published'])

    schema('draft')  #-> 'draft'
    schema('deleted')
    #-> Invalid: [invalid_enum]: Must be one of: draft, published
    ```

    or a Python [Enum](https://docs.python.org/3/library/enum.html).
    An Enum member passes through, and a plain value is converted to the member:

    ```python
    from enum import Enum

    class Color(Enum):
        RED = 'red'
        GREEN = 'green'

    schema = OneOf(Color)

    schema('red')  #-> <Color.RED: 'red'>
    schema(Color.GREEN)  #-> <Color.GREEN: 'green'>
    ```

    Just like [`Literal`](#literal), types are compared strictly.

    :param values: Allowed values, or an Enum class
    :type values: Iterable|enum.EnumMeta
    """

    kind = KIND.ENUM

    def __init__(self, values):
        if isinstance(values, type) and issubclass(values, Enum):
            self.enum = values
            self.values = tuple(values)
        else:
            self.enum = None
            self.values = tuple(values)
        assert self.values, 'OneOf() needs at least one value'

        # (type, value) pairs: `True` and `1` are different values
        self._allowed = frozenset((type(v), v) for v in self.values)

    @property
    def name(self):
        if self.enum is not None:
            return 'OneOf({})'.format(self.enum.__name__)
        return 'OneOf({})'.format(', '.join(get_literal_name(v) for v in self.values))

    def _lookup(self, v):
        if self.enum is not None:
            if isinstance(v, self.enum):
                return v
            member = self.enum(v)
            if type(member.value) is not type(v):
                raise ValueError(v)
            return member
        if (type(v), v) in self._allowed:
            return v
        raise ValueError(v)

    def _validate(self, v):
        if v is MISSING:
            return Failure([invalid_type('enum', v)])
        try:
            return Success(self._lookup(v))
        except (ValueError, TypeError):  # TypeError: unhashable value
            allowed = [m.value for m in self.values] if self.enum is not None else list(self.values)
            return Failure([Issue(ISSUE.INVALID_ENUM, None, (), v, {
                'allowed': allowed,
                'received': get_literal_name(v),
            })])


class Default(Schema):
    """ Initialize a value to a default if it's not provided, or is not valid.

    "Not provided" means `None` or a missing object key:

    ```python
    from vet import Object, Int

    schema = Object({
        'name': String(),
        'age': Int().default(0),
    })

    schema({'name': 'Alex'})  #-> {'name': 'Alex', 'age': 0}
    schema({'name': 'Alex', 'age': None})  #-> {'name': 'Alex', 'age': 0}
    schema({'name': 'Alex', 'age': 'abc'})  #-> {'name': 'Alex', 'age': 0}
    ```

    A `Default` schema never fails.
    Every time the default is used, you get a fresh deep copy: mutable defaults are safe.

    :param schema: The wrapped schema
    :type schema: Schema
    :param value: The default value to use
    """

    kind = KIND.DEFAULT

    def __init__(self, schema, value):
        self.schema = schema
        self.default_value = value

    @property
    def name(self):
        return '{}.default({})'.format(self.schema.name, get_literal_name(self.default_value))

    @property
    def children(self):
        return (self.schema,)

    def _fallback(self):
        return Success(copy.deepcopy(self.default_value))

    def _validate(self, v):
        if v is None or v is MISSING:
            return self._fallback()
        result = self.schema._validate(v)
        return result if result.ok else self._fallback()

    async def _validate_async(self, v):
        if v is None or v is MISSING:
            return self._fallback()
        result = await self.schema._validate_async(v)
        return result if result.ok else self._fallback()


class Catch(Schema):
    """ Recover from a validation failure.

    The fallback is either a plain value, or a callable which receives the issues and returns the value:

    ```python
    from vet import Int

    schema = Int().catch(lambda issues: -1)

    schema(10)  #-> 10
    schema('abc')  #-> -1
    ```

    If the callable raises an exception, it's reported as a `transform_error` issue.

    :param schema: The wrapped schema
    :type schema: Schema
    :param fallback: The fallback value, or a callable `(issues) -> value`
    """

    kind = KIND.CATCH

    def __init__(self, schema, fallback):
        self.schema = schema
        self.fallback = fallback

    @property
    def name(self):
        return '{}.catch()'.format(self.schema.name)

    @property
    def children(self):
        return (self.schema,)

    def _recover(self, v, result):
        if result.ok:
            return result
        if not callable(self.fallback):
            return Success(copy.deepcopy(self.fallback))
        try:
            return Success(self.fallback(result.issues))
        except Exception as e:
            logger.debug('Catch handler of %s has failed', self.schema.name, exc_info=True)
            return Failure([Issue(ISSUE.TRANSFORM_ERROR, None, (), v, {'error': str(e)})])

    def _validate(self, v):
        return self._recover(v, self.schema._validate(v))

    async def _validate_async(self, v):
        return self._recover(v, await self.schema._validate_async(v))


__all__ = ('Literal', 'OneOf', 'Default', 'Catch')
