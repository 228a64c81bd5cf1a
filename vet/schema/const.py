
class EXTRA:
    """ Behavior constants for extra keys in an object (e.g. keys that are not defined in the shape) """

    #: Silently drop extra keys from the output
    STRIP = 'strip'

    #: Copy extra keys into the output, unvalidated
    PASSTHROUGH = 'passthrough'

    #: Report an `unknown_key` issue for every extra key
    STRICT = 'strict'


class ISSUE:
    """ Issue codes reported by the built-in schemas """

    INVALID_TYPE = 'invalid_type'
    MISSING_KEY = 'missing_key'

    TOO_SHORT = 'too_short'
    TOO_LONG = 'too_long'
    TOO_SMALL = 'too_small'
    TOO_BIG = 'too_big'

    NOT_POSITIVE = 'not_positive'
    NOT_NEGATIVE = 'not_negative'
    NOT_MULTIPLE_OF = 'not_multiple_of'
    NOT_FINITE = 'not_finite'

    INVALID_FORMAT = 'invalid_format'
    INVALID_ENUM = 'invalid_enum'
    INVALID_LITERAL = 'invalid_literal'
    INVALID_UNION = 'invalid_union'
    INVALID_COERCION = 'invalid_coercion'

    INVALID_DATE = 'invalid_date'
    DATE_TOO_EARLY = 'date_too_early'
    DATE_TOO_LATE = 'date_too_late'

    UNKNOWN_KEY = 'unknown_key'

    CUSTOM_ERROR = 'custom_error'
    REFINEMENT_ERROR = 'refinement_error'
    TRANSFORM_ERROR = 'transform_error'
    PREPROCESS_ERROR = 'preprocess_error'


class KIND:
    """ Schema kinds: the closed set of variants every `Schema` belongs to """

    # Primitives
    STRING = 'string'
    INT = 'int'
    FLOAT = 'float'
    BOOL = 'bool'
    DATETIME = 'datetime'
    LITERAL = 'literal'
    ENUM = 'enum'

    # Composites
    OBJECT = 'object'
    ARRAY = 'array'
    MAP = 'map'
    UNION = 'union'

    # Modifiers
    OPTIONAL = 'optional'
    NULLABLE = 'nullable'
    DEFAULT = 'default'
    CATCH = 'catch'
    TRANSFORM = 'transform'
    PREPROCESS = 'preprocess'
    PIPE = 'pipe'
    REFINE = 'refine'
    REFINE_ASYNC = 'refine_async'
    SUPER_REFINE = 'super_refine'
    MESSAGE = 'message'
    LAZY = 'lazy'

    PRIMITIVES = frozenset((STRING, INT, FLOAT, BOOL, DATETIME, LITERAL, ENUM))
    COMPOSITES = frozenset((OBJECT, ARRAY, MAP, UNION))
    MODIFIERS = frozenset((OPTIONAL, NULLABLE, DEFAULT, CATCH, TRANSFORM, PREPROCESS, PIPE,
                           REFINE, REFINE_ASYNC, SUPER_REFINE, MESSAGE, LAZY))
