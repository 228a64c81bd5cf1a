""" Composable schema validation for untyped data.

Core features:

* Schemas are built by composition, and are immutable: share and extend them freely
* Reports *all* problems at once, never just the first one
* Error paths (which field contains the error): `users[1].email`
* Structured issues: a stable code, a message, the offending value and the details
* User-friendly error messages, with message catalogs for internationalization
* Coercion for the stringly-typed inputs: forms, query strings, environment variables
* Custom checks, synchronous and asynchronous
* 100% documented and unit-tested

Inspired by [Zod](https://zod.dev/) and [good](https://github.com/kolypto/py-good).

```python
from vet import Object, String, Int

schema = Object({
    'email': String().email(),
    'age': Int().min(18),
})

result = schema.validate({'email': 'bad', 'age': 10})
result.ok  #-> False
[i.path_string for i in result.issues]  #-> ['email', 'age']
```
"""

import logging

# Core

from .schema.errors import BaseError, SchemaError, Invalid, Issue, format_issues, group_by_path, flatten_messages
from .schema.result import Result, Success, Failure
from .schema.context import ValidationContext
from .schema.const import EXTRA, ISSUE, KIND
from .schema.util import MISSING, register_type_name
from .schema import messages

from .schema import Schema

# Helpers
from .helpers import *

# Validators
from .validators import *

logging.getLogger(__name__).addHandler(logging.NullHandler())


def validate(schema, value):
    """ Validate the value against the schema.

    Same as `schema.validate(value)`.

    :type schema: Schema
    :rtype: Result
    :raises SchemaError: The schema contains asynchronous refinements
    """
    return schema.validate(value)


async def validate_async(schema, value):
    """ Validate the value against the schema asynchronously.

    Same as `await schema.validate_async(value)`.

    :type schema: Schema
    :rtype: Result
    """
    return await schema.validate_async(value)
