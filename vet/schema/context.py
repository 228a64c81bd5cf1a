from .errors import Issue
from .const import ISSUE


class ValidationContext:
    """ Context given to [`super_refine()`](#superrefine) callbacks.

    Lets a single callback report any number of precisely-pathed issues,
    which is what cross-field and cross-element checks need:

    ```python
    def passwords_match(value, ctx):
        if value['password'] != value['confirm']:
            ctx.add_issue(message='Passwords do not match', path=['confirm'])

    schema = Object({'password': String(), 'confirm': String()}).super_refine(passwords_match)
    ```

    Paths given to `add_issue()` are relative to the refined value: enclosing composites
    prepend their own segments on the way out, as they do for any other issue.

    :param path: Path of the refined value, relative to the schema being refined (normally empty)
    :type path: tuple
    :param metadata: Arbitrary bag of values. Merged into the metadata of every issue added through the context.
    :type metadata: dict|None
    """

    def __init__(self, path=(), metadata=None):
        self.path = tuple(path)
        self.metadata = dict(metadata or {})
        self.issues = []

    def add_issue(self, code=ISSUE.CUSTOM_ERROR, message=None, path=(), received=None, **metadata):
        """ Report an issue

        :param code: Issue code
        :type code: str
        :param message: Message; resolved from the code if not provided
        :type message: str|None
        :param path: Path relative to the refined value
        :type path: list|tuple
        :param received: The offending value
        :param metadata: Issue metadata
        :rtype: Issue
        """
        issue = Issue(code, message, self.path + tuple(path), received, dict(self.metadata, **metadata))
        self.issues.append(issue)
        return issue

    def __len__(self):
        return len(self.issues)

    def __repr__(self):
        return '{cls}(path={0.path!r}, issues={1})'.format(self, len(self.issues), cls=type(self).__name__)
