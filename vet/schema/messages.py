""" Message resolution.

Every [`Issue`](#issue) carries a human-readable message which is resolved from the issue code
and a bag of parameters at the moment the issue is created:

```python
from vet.schema import messages

messages.resolve('too_short', {'min': 3})  #-> 'Must be at least 3 characters'
```

The resolver is any callable `(code, params) -> str`. A [`Catalog`](#catalog) is the usual one:
a plain lookup table of `str.format()` templates, with an optional fallback catalog.

The process-wide default is the English catalog. It can be replaced at startup:

```python
messages.configure(messages.FR)  # French everywhere
messages.configure(None)         # No catalog: messages are the issue codes
```

or overridden for a block of code only (this uses `contextvars`, so concurrent tasks don't interfere):

```python
with messages.using(messages.FR):
    schema.validate(value)
```
"""

import contextvars
from contextlib import contextmanager


class _Params(dict):
    """ Parameters for `str.format_map()` which renders unknown placeholders as-is """

    def __missing__(self, key):
        return '{' + key + '}'


def _render(v):
    # Collections read better as "a, b, c"
    if isinstance(v, (list, tuple, set, frozenset)):
        return ', '.join(str(x) for x in v)
    return v


class Catalog:
    """ A message catalog: issue code -> `str.format()` template.

    :param templates: Mapping of issue codes to templates
    :type templates: dict
    :param fallback: Catalog to consult for codes this one does not know
    :type fallback: Catalog|None
    :param locale: Locale name, informational
    :type locale: str|None
    """

    def __init__(self, templates, fallback=None, locale=None):
        self.templates = dict(templates)
        self.fallback = fallback
        self.locale = locale

    def __contains__(self, code):
        return code in self.templates or (self.fallback is not None and code in self.fallback)

    def __call__(self, code, params=None):
        """ Resolve a message

        :param code: Issue code
        :type code: str
        :param params: Template parameters
        :type params: dict|None
        :rtype: str
        """
        template = self.templates.get(code)
        if template is None:
            if self.fallback is not None:
                return self.fallback(code, params)
            return code
        return template.format_map(_Params({k: _render(v) for k, v in (params or {}).items()}))

    def extend(self, templates, locale=None):
        """ Create a new catalog that overrides some templates and falls back to this one

        :type templates: dict
        :rtype: Catalog
        """
        return type(self)(templates, fallback=self, locale=locale or self.locale)

    def __repr__(self):
        return '{cls}({locale})'.format(cls=type(self).__name__, locale=self.locale or '-')


EN = Catalog({
    'invalid_type': 'Expected {expected}, got {received}',
    'missing_key': 'Required',
    'too_short': 'Must be at least {min} characters',
    'too_long': 'Must be at most {max} characters',
    'too_small': 'Must be >= {min}',
    'too_big': 'Must be <= {max}',
    'not_positive': 'Must be a positive number',
    'not_negative': 'Must be a negative number',
    'not_multiple_of': 'Must be a multiple of {step}',
    'not_finite': 'Must be a finite number',
    'invalid_format': 'Invalid {format} format',
    'invalid_enum': 'Must be one of: {allowed}',
    'invalid_literal': 'Expected literal {expected}, got {received}',
    'invalid_union': 'Value does not match any of the allowed alternatives',
    'invalid_coercion': 'Cannot convert to {type}',
    'invalid_date': 'Expected a datetime, an ISO 8601 string or a timestamp',
    'date_too_early': 'Date must be after {min}',
    'date_too_late': 'Date must be before {max}',
    'unknown_key': 'Unknown key: {key}',
    'custom_error': 'Validation failed',
    'refinement_error': 'Validation check failed: {error}',
    'transform_error': 'Transformation failed: {error}',
    'preprocess_error': 'Preprocessing failed: {error}',
}, locale='en')


FR = EN.extend({
    'invalid_type': 'Attendu {expected}, reçu {received}',
    'missing_key': 'Ce champ est requis',
    'too_short': 'Doit contenir au moins {min} caractères',
    'too_long': 'Doit contenir au maximum {max} caractères',
    'too_small': 'Doit être >= {min}',
    'too_big': 'Doit être <= {max}',
    'not_positive': 'Doit être un nombre positif',
    'not_negative': 'Doit être un nombre négatif',
    'not_multiple_of': 'Doit être un multiple de {step}',
    'not_finite': 'Doit être un nombre fini',
    'invalid_format': 'Format {format} invalide',
    'invalid_enum': "Doit être l'un de: {allowed}",
    'invalid_literal': 'Valeur littérale attendue: {expected}, reçu: {received}',
    'invalid_union': "La valeur ne correspond à aucune des alternatives",
    'invalid_coercion': 'Impossible de convertir en {type}',
    'invalid_date': 'Date/heure attendue, chaîne ISO 8601 ou horodatage',
    'date_too_early': 'La date doit être postérieure à {min}',
    'date_too_late': 'La date doit être antérieure à {max}',
    'unknown_key': 'Clé inconnue: {key}',
    'custom_error': 'La validation a échoué',
    'transform_error': 'Échec de la transformation: {error}',
}, locale='fr')


#: Process-wide default resolver
_default = [EN]

#: Context-local override
_override = contextvars.ContextVar('vet_messages_override', default=None)


def configure(resolver):
    """ Set the process-wide default message resolver.

    Meant to be called once, at startup.

    :param resolver: A `Catalog`, any `(code, params) -> str` callable, or `None` to use issue codes as messages
    :type resolver: callable|None
    """
    assert resolver is None or callable(resolver), 'Message resolver must be callable'
    _default[0] = resolver


def get_resolver():
    """ Get the resolver in effect for the current context

    :rtype: callable|None
    """
    override = _override.get()
    if override is not None:
        return override
    return _default[0]


@contextmanager
def using(resolver):
    """ Override the message resolver within a block (current context only)

    :param resolver: A `Catalog` or any `(code, params) -> str` callable
    :type resolver: callable
    """
    assert callable(resolver), 'Message resolver must be callable'
    token = _override.set(resolver)
    try:
        yield resolver
    finally:
        _override.reset(token)


def resolve(code, params=None):
    """ Resolve a message for the issue code using the active resolver.

    Falls back to the code itself when no resolver is configured.

    :type code: str
    :type params: dict|None
    :rtype: str
    """
    resolver = get_resolver()
    if resolver is None:
        return code
    return resolver(code, params or {})
