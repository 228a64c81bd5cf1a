from .base import Primitive
from .types import to_bool
from ..schema.const import KIND


class Bool(Primitive):
    """ Validate a boolean.

    Only `True` and `False` are accepted. With `coerce()`, human-readable values are converted as well:

    ```python
    from vet import Bool

    schema = Bool().coerce()

    schema('yes')  #-> True
    schema('off')  #-> False
    schema(1)  #-> True
    schema('maybe')
    #-> Invalid: [invalid_coercion]: Cannot convert to bool
    ```
    """

    kind = KIND.BOOL
    expected = 'bool'
    default_coercer = staticmethod(to_bool)

    def _check_type(self, v):
        return isinstance(v, bool)


__all__ = ('Bool',)
