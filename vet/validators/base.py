from collections import namedtuple

from ..schema import Schema, Success, Failure, invalid_type
from ..schema.const import ISSUE
from ..schema.errors import Issue
from ..schema.util import MISSING, get_value_type_name


#: A constraint registered on a primitive schema
#: * key: constraint identity. Re-applying a constraint with the same key replaces it.
#: * code: issue code reported on failure
#: * test: `(value) -> bool`
#: * params: issue metadata, also used to render the message
#: * message: custom message, or `None`
#: * measure: `(value) -> actual`, reported as `metadata['actual']`; or `None`
Constraint = namedtuple('Constraint', ('key', 'code', 'test', 'params', 'message', 'measure'))


class Primitive(Schema):
    """ Base for primitive schemas: strings, numbers, booleans, dates.

    Validation goes in steps:

    1. Coercion, if enabled with `coerce()`. A value that can't be converted fails with `invalid_coercion`.
    2. Type check. A value of a wrong type fails with `invalid_type`.
    3. Normalization: e.g. strings are trimmed if asked to.
    4. Constraints. *Every* constraint is checked, and all failures are reported together.

    Steps 1-2 are terminal: constraints are never checked on a value of a wrong type.
    """

    #: Expected type name, used in messages
    expected = '???'

    #: Conversion function used by `coerce()`
    default_coercer = None

    def __init__(self):
        #: Conversion function, or `None` when coercion is disabled
        self.coercer = None

        #: Registered constraints
        self.constraints = ()

    def __repr__(self):
        return '{}({})'.format(self.name, ', '.join(c.key for c in self.constraints)) if self.constraints else self.name

    def coerce(self, coercer=None):
        """ Enable coercion: convert the input before validating it

        :param coercer: Custom conversion function which raises `TypeError` or `ValueError` on failure.
            Defaults to the built-in conversion for the type.
        :type coercer: callable|None
        :rtype: Primitive
        """
        coercer = coercer or self.default_coercer
        assert callable(coercer), '{} does not support coercion'.format(self.name)
        return self._replace(coercer=coercer)

    def _constrain(self, key, code, test, params, message=None, measure=None):
        """ Get a copy of this schema with a constraint added, or replaced if the key is already there

        :rtype: Primitive
        """
        constraint = Constraint(key, code, test, params, message, measure)
        constraints = list(self.constraints)
        for i, c in enumerate(constraints):
            if c.key == key:
                constraints[i] = constraint
                break
        else:
            constraints.append(constraint)
        return self._replace(constraints=tuple(constraints))

    def _check_type(self, v):
        """ Test whether the value has the right type

        :rtype: bool
        """
        raise NotImplementedError

    def _normalize(self, v):
        """ Normalize a value of the right type """
        return v

    def _coercion_failed(self, v):
        return Issue(ISSUE.INVALID_COERCION, None, (), v, {
            'type': self.expected,
            'received': get_value_type_name(v),
        })

    def _check(self, c, v):
        """ Check a single constraint

        :type c: Constraint
        :return: The issue, or `None` if the constraint is satisfied
        :rtype: Issue|None
        """
        if c.test(v):
            return None
        params = dict(c.params)
        if c.measure is not None:
            params['actual'] = c.measure(v)
        return Issue(c.code, c.message, (), v, params)

    def _check_constraints(self, v):
        issues = [issue for issue in (self._check(c, v) for c in self.constraints) if issue is not None]
        return Failure(issues) if issues else Success(v)

    def _validate(self, v):
        if v is MISSING:
            return Failure([invalid_type(self.expected, v)])

        if self.coercer is not None:
            try:
                v = self.coercer(v)
            except (TypeError, ValueError, OverflowError):
                return Failure([self._coercion_failed(v)])

        if not self._check_type(v):
            return Failure([invalid_type(self.expected, v)])

        return self._check_constraints(self._normalize(v))


__all__ = ('Primitive', 'Constraint')
