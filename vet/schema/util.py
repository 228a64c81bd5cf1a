""" Misc utilities """

from datetime import date, time, datetime
from decimal import Decimal


class Missing:
    """ Special singleton object to represent the case when no value was provided.

    An `Object` passes it to a field schema when the input mapping has no such key,
    so `Optional` can tell an absent key from a key explicitly set to `None`.

    This value is never equal to anything and is falsy: this makes sure it will never match any condition.
    """

    _instance = None

    def __new__(cls):
        # Singleton
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __eq__(self, other):
        return other is self

    def __hash__(self):
        return id(self)

    def __bool__(self):
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __repr__(self):
        return '<Missing>'


#: The `Missing` singleton
MISSING = Missing()


_type_names = {
    type(None): 'null',
    Missing:    'missing',
    bool:       'bool',
    int:        'int',
    float:      'float',
    complex:    'complex',
    Decimal:    'decimal',
    str:        'string',
    bytes:      'bytes',
    tuple:      'tuple',
    list:       'array',
    set:        'set',
    frozenset:  'frozenset',
    dict:       'object',
    date:       'date',
    time:       'time',
    datetime:   'datetime',
}


def register_type_name(t, name):
    """ Register a human-friendly name for the given type. This will be used in `invalid_type` issues

    :param t: The type to register
    :type t: type
    :param name: Name for the type
    :type name: str
    """
    assert isinstance(t, type)
    assert isinstance(name, str)
    _type_names[t] = name


def get_type_name(t):
    """ Get a human-friendly name for the given type.

    :type t: type
    :rtype: str
    """
    try:
        return _type_names[t]
    except KeyError:
        return t.__name__


def get_value_type_name(v):
    """ Get a human-friendly name for the type of the given value.

    :rtype: str
    """
    return get_type_name(type(v))


def get_literal_name(v):
    """ Get a human-friendly name for the given literal.

    Strings are quoted so that `'1'` and `1` read differently in messages.

    :param v: Value
    :rtype: str
    """
    if isinstance(v, str):
        return repr(v)
    return str(v)


def get_callable_name(c):
    """ Get a human-friendly name for the given callable.

    :param c: The callable to get the name for
    :type c: callable
    :rtype: str
    """
    if hasattr(c, 'name'):
        return str(c.name)
    elif hasattr(c, '__name__'):
        return str(c.__name__) + '()'
    else:
        return str(c)
