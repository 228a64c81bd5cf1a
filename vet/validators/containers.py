import asyncio
import logging
from collections.abc import Mapping

from ..schema import Schema, Success, Failure, invalid_type, prefixed
from ..schema.const import EXTRA, ISSUE, KIND
from ..schema.errors import Issue, SchemaError
from ..schema.util import MISSING, get_callable_name
from .predicates import Optional

logger = logging.getLogger(__name__)


def _length_issues(size, min, max, min_message, max_message, type):
    """ Check the size of a collection against the bounds: root-pathed `too_small` / `too_big` """
    issues = []
    if min is not None and size < min:
        issues.append(Issue(ISSUE.TOO_SMALL, min_message, (), size, {'min': min, 'actual': size, 'type': type}))
    if max is not None and size > max:
        issues.append(Issue(ISSUE.TOO_BIG, max_message, (), size, {'max': max, 'actual': size, 'type': type}))
    return issues


class Sized(Schema):
    """ Base for collections with size bounds """

    #: Expected type name
    expected = '???'

    def __init__(self):
        self.min_size = None
        self.max_size = None
        self.min_message = None
        self.max_message = None

    def min(self, n, message=None):
        """ At least `n` items: `too_small` """
        return self._replace(min_size=n, min_message=message)

    def max(self, n, message=None):
        """ At most `n` items: `too_big` """
        return self._replace(max_size=n, max_message=message)

    def length(self, n, message=None):
        """ Exactly `n` items """
        return self.min(n, message).max(n, message)

    def nonempty(self, message=None):
        """ At least one item """
        return self.min(1, message)

    def _size_issues(self, size):
        return _length_issues(size, self.min_size, self.max_size, self.min_message, self.max_message, self.expected)


class Object(Schema):
    """ Validate a mapping against a shape: an ordered mapping of field names to schemas.

    ```python
    from vet import Object, String, Int

    schema = Object({
        'email': String().email(),
        'age': Int().min(18),
    })

    schema({'email': 'user@example.com', 'age': 20})  #-> {'email': 'user@example.com', 'age': 20}
    schema({'email': 'bad', 'age': 10})
    #-> Invalid: Multiple validation errors:
    #     - [invalid_format] at email: Invalid email format
    #     - [too_small] at age: Must be >= 18
    ```

    Every field is validated, in declaration order, and every problem is reported:
    an object never stops at the first invalid field.
    Issues reported by a field schema get the field name prepended to their path.

    All fields are required: when a key is missing from the input, the field schema gets the `MISSING` value,
    and most schemas report it as `missing_key`. To make a field optional, use `.optional()` on it.

    The output is always a new `dict`: the input is never modified.

    Extra keys (not declared in the shape) are handled according to the `extra_keys` policy:

    * `EXTRA.STRIP`: drop them from the output (default)
    * `EXTRA.PASSTHROUGH`: copy them into the output as is
    * `EXTRA.STRICT`: report an `unknown_key` issue for each of them

    The validated `dict` can be converted into anything with the `constructor`:

    ```python
    class User:
        def __init__(self, email, age):
            self.email = email
            self.age = age

    schema = Object({...}, constructor=lambda d: User(**d))
    ```

    If the constructor raises an exception, it's reported as a `transform_error`.

    :param shape: Field schemas
    :type shape: Mapping[str, Schema]
    :param extra_keys: Policy for extra keys: one of `EXTRA.*`
    :type extra_keys: str
    :param constructor: Function to build the output from the validated `dict`
    :type constructor: callable|None
    :raises SchemaError: A field is not a schema
    """

    kind = KIND.OBJECT

    def __init__(self, shape, extra_keys=EXTRA.STRIP, constructor=None):
        assert extra_keys in (EXTRA.STRIP, EXTRA.PASSTHROUGH, EXTRA.STRICT), 'Unsupported extra_keys: {!r}'.format(extra_keys)
        self.shape = self._check_shape(shape)
        self.extra_keys = extra_keys
        self.constructor = constructor

    @staticmethod
    def _check_shape(shape):
        if not isinstance(shape, Mapping):
            raise SchemaError('Object shape must be a mapping, got {}'.format(type(shape).__name__))
        for key, schema in shape.items():
            if not isinstance(schema, Schema):
                raise SchemaError('Field {!r} is not a schema: {!r}'.format(key, schema))
        return dict(shape)

    @property
    def name(self):
        return 'Object({})'.format(', '.join(str(k) for k in self.shape))

    @property
    def children(self):
        return tuple(self.shape.values())

    #region Building

    def strict(self):
        """ Report extra keys as `unknown_key` """
        return self._replace(extra_keys=EXTRA.STRICT)

    def passthrough(self):
        """ Copy extra keys into the output """
        return self._replace(extra_keys=EXTRA.PASSTHROUGH)

    def strip(self):
        """ Drop extra keys """
        return self._replace(extra_keys=EXTRA.STRIP)

    def extend(self, shape):
        """ Add or replace fields """
        return self._replace(shape=self._check_shape({**self.shape, **shape}))

    def pick(self, *keys):
        """ Keep the listed fields only """
        return self._replace(shape={k: s for k, s in self.shape.items() if k in keys})

    def omit(self, *keys):
        """ Drop the listed fields """
        return self._replace(shape={k: s for k, s in self.shape.items() if k not in keys})

    def partial(self):
        """ Make every field optional """
        return self._replace(shape={k: s if s.kind == KIND.OPTIONAL else Optional(s)
                                    for k, s in self.shape.items()})

    #endregion

    def _collect(self, d, results):
        """ Assemble the output from the field results """
        issues = []
        output = {}

        # Fields
        for key, result in results:
            if result.ok:
                output[key] = result.value
            else:
                issues.extend(prefixed(result.issues, key))

        # Extra keys
        if self.extra_keys != EXTRA.STRIP:
            for key in d:
                if key in self.shape:
                    continue
                if self.extra_keys == EXTRA.STRICT:
                    issues.append(Issue(ISSUE.UNKNOWN_KEY, None, (key,), d[key], {'key': key}))
                else:
                    output[key] = d[key]

        # Errors?
        if issues:
            return Failure(issues)

        # Construct
        if self.constructor is None:
            return Success(output)
        try:
            return Success(self.constructor(output))
        except Exception as e:
            logger.debug('Constructor %s has failed', get_callable_name(self.constructor), exc_info=True)
            return Failure([Issue(ISSUE.TRANSFORM_ERROR, None, (), output, {'error': str(e)})])

    def _validate(self, d):
        if not isinstance(d, Mapping):
            return Failure([invalid_type('object', d)])
        return self._collect(d, [(key, schema._validate(d.get(key, MISSING)))
                                 for key, schema in self.shape.items()])

    async def _validate_async(self, d):
        if not isinstance(d, Mapping):
            return Failure([invalid_type('object', d)])
        results = await asyncio.gather(*(schema._validate_async(d.get(key, MISSING))
                                         for key, schema in self.shape.items()))
        return self._collect(d, zip(self.shape, results))


class Array(Sized):
    """ Validate a list: every element against the same schema.

    ```python
    from vet import Array, Int

    schema = Array(Int().positive()).min(1)

    schema([1, 2, 3])  #-> [1, 2, 3]
    schema([1, -2, 0])
    #-> Invalid: Multiple validation errors:
    #     - [not_positive] at [1]: Must be a positive number
    #     - [not_positive] at [2]: Must be a positive number
    ```

    Both lists and tuples are accepted; the output is always a new `list`.

    Every element is validated, and its issues get the index prepended to their path.
    The size bounds are checked independently from the elements, and are reported on the array itself.

    :param element: Schema for every element
    :type element: Schema
    """

    kind = KIND.ARRAY
    expected = 'array'

    def __init__(self, element):
        super().__init__()
        if not isinstance(element, Schema):
            raise SchemaError('Array element is not a schema: {!r}'.format(element))
        self.element = element

    @property
    def name(self):
        return 'Array({})'.format(self.element.name)

    @property
    def children(self):
        return (self.element,)

    def _collect(self, l, results):
        issues = self._size_issues(len(l))
        output = []
        for i, result in enumerate(results):
            if result.ok:
                output.append(result.value)
            else:
                issues.extend(prefixed(result.issues, i))
        return Failure(issues) if issues else Success(output)

    def _validate(self, l):
        if not isinstance(l, (list, tuple)):
            return Failure([invalid_type('array', l)])
        return self._collect(l, [self.element._validate(v) for v in l])

    async def _validate_async(self, l):
        if not isinstance(l, (list, tuple)):
            return Failure([invalid_type('array', l)])
        return self._collect(l, await asyncio.gather(*(self.element._validate_async(v) for v in l)))


class Map(Sized):
    """ Validate a mapping with arbitrary keys: every key against one schema, every value against another.

    ```python
    from vet import Map, String, Int

    schema = Map(String().min(2), Int().nonnegative())

    schema({'en': 10, 'fr': 5})  #-> {'en': 10, 'fr': 5}
    schema({'e': -1})
    #-> Invalid: Multiple validation errors:
    #     - [too_short] at e: Must be at least 2 characters
    #     - [too_small] at e: Must be >= 0
    ```

    Issues of both the key and the value are reported at the key.
    The output is a new `dict` made of the validated keys and values.
    A validated key which is unhashable, or equal to another validated key, is reported as a `transform_error`.

    :param key_schema: Schema for every key
    :type key_schema: Schema
    :param value_schema: Schema for every value
    :type value_schema: Schema
    """

    kind = KIND.MAP
    expected = 'object'

    def __init__(self, key_schema, value_schema):
        super().__init__()
        if not isinstance(key_schema, Schema) or not isinstance(value_schema, Schema):
            raise SchemaError('Map() expects schemas for both keys and values')
        self.key_schema = key_schema
        self.value_schema = value_schema

    @property
    def name(self):
        return 'Map({}, {})'.format(self.key_schema.name, self.value_schema.name)

    @property
    def children(self):
        return (self.key_schema, self.value_schema)

    def _collect(self, d, results):
        issues = self._size_issues(len(d))
        output = {}
        for key, (key_result, value_result) in zip(d, results):
            segment = str(key)
            issues.extend(prefixed(key_result.issues, segment))
            issues.extend(prefixed(value_result.issues, segment))
            if key_result.ok and value_result.ok:
                issue = self._key_issue(key_result.value, output)
                if issue is not None:
                    issues.append(issue.with_path(segment))
                else:
                    output[key_result.value] = value_result.value
        return Failure(issues) if issues else Success(output)

    @staticmethod
    def _key_issue(key, output):
        """ Check that a validated key can be stored in the output: hashable, and unique """
        try:
            duplicate = key in output
        except TypeError as e:  # unhashable
            return Issue(ISSUE.TRANSFORM_ERROR, None, (), key, {'error': str(e)})
        if duplicate:
            return Issue(ISSUE.TRANSFORM_ERROR, None, (), key, {'error': 'duplicate key {!r}'.format(key)})
        return None

    def _validate(self, d):
        if not isinstance(d, Mapping):
            return Failure([invalid_type('object', d)])
        return self._collect(d, [(self.key_schema._validate(k), self.value_schema._validate(v))
                                 for k, v in d.items()])

    async def _validate_async(self, d):
        if not isinstance(d, Mapping):
            return Failure([invalid_type('object', d)])
        results = await asyncio.gather(*(asyncio.gather(self.key_schema._validate_async(k),
                                                        self.value_schema._validate_async(v))
                                         for k, v in d.items()))
        return self._collect(d, results)


__all__ = ('Object', 'Array', 'Map')
