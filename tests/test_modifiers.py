from vet import Object, Array, String, Int, Float, Lazy, Optional, Nullable, Default, Catch, Transform, Preprocess, \
    Pipe, Refine, SuperRefine, Msg, ValidationContext, Issue, MISSING, ISSUE, KIND, name
from vettest import VetTestBase, s


class OptionalNullableTest(VetTestBase):
    """ Test: optional(), nullable(), nullish() """

    def test_optional(self):
        schema = String().optional()
        self.assertIsInstance(schema, Optional)
        self.assertEqual(KIND.OPTIONAL, schema.kind)

        self.assertValid(schema, MISSING, None)
        self.assertValid(schema, u'a')
        self.assertIssues(schema, None, (ISSUE.INVALID_TYPE, ''))

        schema = Object({'nickname': String().optional()})
        self.assertValid(schema, {}, {'nickname': None})
        self.assertValid(schema, {'nickname': u'Al'})
        self.assertIssues(schema, {'nickname': None}, (ISSUE.INVALID_TYPE, 'nickname'))

    def test_nullable(self):
        schema = String().nullable()
        self.assertIsInstance(schema, Nullable)
        self.assertEqual(KIND.NULLABLE, schema.kind)

        self.assertValid(schema, None)
        self.assertValid(schema, u'a')
        self.assertIssues(schema, MISSING, (ISSUE.MISSING_KEY, ''))

        schema = Object({'nickname': String().nullable()})
        self.assertValid(schema, {'nickname': None})
        self.assertIssues(schema, {}, (ISSUE.MISSING_KEY, 'nickname'))

    def test_nullish(self):
        schema = Object({'nickname': String().min(2).nullish()})
        self.assertValid(schema, {}, {'nickname': None})
        self.assertValid(schema, {'nickname': None})
        self.assertValid(schema, {'nickname': u'Al'})
        self.assertIssues(schema, {'nickname': u'A'}, (ISSUE.TOO_SHORT, 'nickname'))


class DefaultTest(VetTestBase):
    """ Test: default() """

    def test_default(self):
        schema = Int().min(0).default(10)
        self.assertIsInstance(schema, Default)
        self.assertEqual(KIND.DEFAULT, schema.kind)

        self.assertValid(schema, 5)
        self.assertValid(schema, None, 10)
        self.assertValid(schema, MISSING, 10)
        # Invalid values are replaced as well
        self.assertValid(schema, -1, 10)
        self.assertValid(schema, u'abc', 10)

    def test_in_object(self):
        schema = Object({'name': String(), 'age': Int().default(0)})
        self.assertValid(schema, {'name': u'Alex'}, {'name': u'Alex', 'age': 0})
        self.assertValid(schema, {'name': u'Alex', 'age': None}, {'name': u'Alex', 'age': 0})

    def test_fresh_copy(self):
        """ Mutable defaults are never shared """
        schema = Array(Int()).default([])
        a = schema(None)
        a.append(1)
        self.assertEqual([], schema(None))
        self.assertIsNot(schema(None), schema(None))

    def test_idempotent(self):
        schema = Int().default(10)
        self.assertEqual(schema(None), schema(schema(None)))


class CatchTest(VetTestBase):
    """ Test: catch() """

    def test_value(self):
        schema = Int().catch(-1)
        self.assertIsInstance(schema, Catch)
        self.assertEqual(KIND.CATCH, schema.kind)

        self.assertValid(schema, 10)
        self.assertValid(schema, u'abc', -1)
        # Unlike default(), `None` is only replaced if it's invalid
        self.assertValid(Int().nullable().catch(-1), None)

    def test_callable(self):
        schema = Int().min(10).catch(lambda issues: len(issues) * 100)
        self.assertValid(schema, 5, 100)

        codes = []
        Int().catch(lambda issues: codes.extend(i.code for i in issues))(u'x')
        self.assertEqual([ISSUE.INVALID_TYPE], codes)

    def test_failing_handler(self):
        def explode(issues):
            raise RuntimeError('Boom')

        issue, = self.assertIssues(Int().catch(explode), u'x', (ISSUE.TRANSFORM_ERROR, ''))
        self.assertEqual(u'Transformation failed: Boom', issue.message)


class TransformTest(VetTestBase):
    """ Test: transform(), preprocess(), pipe() """

    def test_transform(self):
        schema = String().trim().transform(len)
        self.assertIsInstance(schema, Transform)
        self.assertEqual(KIND.TRANSFORM, schema.kind)

        self.assertValid(schema, u'  abc ', 3)
        # Not called on invalid input
        self.assertIssues(schema, 1, (ISSUE.INVALID_TYPE, ''))

        issue, = self.assertIssues(String().transform(int), u'abc', (ISSUE.TRANSFORM_ERROR, ''))
        self.assertEqual(u'abc', issue.received)
        self.assertIn('invalid literal', issue.metadata['error'])

    def test_transform_chain(self):
        schema = Int().transform(lambda v: v * 2).transform(str)
        self.assertValid(schema, 21, u'42')

    def test_preprocess(self):
        schema = String().preprocess(lambda v: u','.join(v) if isinstance(v, list) else v)
        self.assertIsInstance(schema, Preprocess)
        self.assertEqual(KIND.PREPROCESS, schema.kind)

        self.assertValid(schema, [u'a', u'b'], u'a,b')
        self.assertValid(schema, u'a')
        self.assertIssues(schema, 1, (ISSUE.INVALID_TYPE, ''))

        issue, = self.assertIssues(Int().preprocess(lambda v: v.strip()), 1, (ISSUE.PREPROCESS_ERROR, ''))
        self.assertEqual(1, issue.received)
        self.assertTrue(issue.message.startswith(u'Preprocessing failed: '))

    def test_pipe(self):
        schema = String().trim().pipe(Int().coerce().min(1))
        self.assertIsInstance(schema, Pipe)
        self.assertEqual(KIND.PIPE, schema.kind)

        self.assertValid(schema, u' 10 ', 10)
        self.assertIssues(schema, u' 0 ', (ISSUE.TOO_SMALL, ''))
        self.assertIssues(schema, 10, (ISSUE.INVALID_TYPE, ''))

        # Flattened
        self.assertEqual(3, len(schema.pipe(Int().max(5)).schemas))

    def test_pipe_paths(self):
        schema = Object({'count': String().pipe(Int().coerce())})
        self.assertIssues(schema, {'count': u'x'}, (ISSUE.INVALID_COERCION, 'count'))


class RefineTest(VetTestBase):
    """ Test: refine(), super_refine() """

    def test_refine(self):
        schema = String().refine(lambda v: v.isidentifier(), u'Must be a valid identifier')
        self.assertIsInstance(schema, Refine)
        self.assertEqual(KIND.REFINE, schema.kind)

        self.assertValid(schema, u'user_id')
        self.assertInvalid(schema, u'user-id', Issue(ISSUE.CUSTOM_ERROR, u'Must be a valid identifier', (), u'user-id'))
        # Not called on invalid input
        self.assertIssues(schema, 1, (ISSUE.INVALID_TYPE, ''))

    def test_refine_defaults(self):
        issue, = self.assertIssues(Int().refine(lambda v: v % 2 == 0), 1, (ISSUE.CUSTOM_ERROR, ''))
        self.assertEqual(s.m_custom, issue.message)

    def test_refine_code_and_path(self):
        schema = Object({'password': String(), 'confirm': String()}).refine(
            lambda v: v['password'] == v['confirm'],
            message=u'Passwords do not match', code='password_mismatch', path=['confirm'])

        self.assertValid(schema, {'password': u'a', 'confirm': u'a'})
        issue, = self.assertIssues(schema, {'password': u'a', 'confirm': u'b'}, ('password_mismatch', 'confirm'))
        self.assertEqual(u'Passwords do not match', issue.message)

        # Paths grow when nested
        nested = Object({'user': schema})
        self.assertIssues(nested, {'user': {'password': u'a', 'confirm': u'b'}}, ('password_mismatch', 'user.confirm'))

    def test_refine_crash(self):
        issue, = self.assertIssues(Int().refine(lambda v: 1 / v), 0, (ISSUE.REFINEMENT_ERROR, ''))
        self.assertEqual(u'Validation check failed: division by zero', issue.message)

    def test_refine_chain(self):
        """ Refinements run in order; the first failure stops the chain """
        schema = Int().refine(lambda v: v > 0, u'Positive').refine(lambda v: v < 10, u'Small')
        self.assertValid(schema, 5)
        self.assertEqual([u'Positive'], [i.message for i in schema.validate(-1).issues])
        self.assertEqual([u'Small'], [i.message for i in schema.validate(11).issues])

    def test_super_refine(self):
        def check(value, ctx):
            self.assertIsInstance(ctx, ValidationContext)
            if value['start'] > value['end']:
                ctx.add_issue(message=u'Must be after start', path=['end'])
            if value['end'] - value['start'] > 10:
                ctx.add_issue(ISSUE.TOO_BIG, path=['end'], received=value['end'], max=10)

        schema = Object({'start': Int(), 'end': Int()}).super_refine(check)
        self.assertIsInstance(schema, SuperRefine)
        self.assertEqual(KIND.SUPER_REFINE, schema.kind)

        self.assertValid(schema, {'start': 1, 'end': 2})
        issue, = self.assertIssues(schema, {'start': 2, 'end': 1}, (ISSUE.CUSTOM_ERROR, 'end'))
        self.assertEqual(u'Must be after start', issue.message)
        issue, = self.assertIssues(schema, {'start': 0, 'end': 20}, (ISSUE.TOO_BIG, 'end'))
        self.assertEqual(u'Must be <= 10', issue.message)
        self.assertEqual(20, issue.received)

        # Not called on invalid input
        self.assertIssues(schema, {'start': 1}, (ISSUE.MISSING_KEY, 'end'))

    def test_super_refine_returns_issues(self):
        schema = Array(Int()).super_refine(
            lambda value, ctx: [Issue(ISSUE.CUSTOM_ERROR, u'Duplicate', (i,)) for i, v in enumerate(value)
                                if v in value[:i]])
        self.assertValid(schema, [1, 2, 3])
        self.assertIssues(schema, [1, 2, 1, 2], (ISSUE.CUSTOM_ERROR, '[2]'), (ISSUE.CUSTOM_ERROR, '[3]'))

    def test_super_refine_return_values(self):
        """ The function may return None, a boolean, an issue, or a list of issues """
        same = Object({'a': Int(), 'b': Int()}).super_refine(lambda v, ctx: v['a'] == v['b'])
        self.assertValid(same, {'a': 1, 'b': 1})
        issue, = self.assertIssues(same, {'a': 1, 'b': 2}, (ISSUE.CUSTOM_ERROR, ''))
        self.assertEqual(s.m_custom, issue.message)
        self.assertEqual({'a': 1, 'b': 2}, issue.received)

        # A single issue
        self.assertIssues(Int().super_refine(lambda v, ctx: Issue(ISSUE.TOO_BIG, path=['x'], metadata={'max': 0})),
                          1, (ISSUE.TOO_BIG, 'x'))
        # Issues from the context come first
        def both(v, ctx):
            ctx.add_issue(path=['a'])
            return [Issue(ISSUE.CUSTOM_ERROR, path=['b'])]
        self.assertIssues(Int().super_refine(both), 1, (ISSUE.CUSTOM_ERROR, 'a'), (ISSUE.CUSTOM_ERROR, 'b'))

        # Anything else is a broken refinement
        for returned in (1, u'error', {'a': 1}, [u'not an issue'], (Issue(ISSUE.CUSTOM_ERROR), 1)):
            issue, = self.assertIssues(Int().super_refine(lambda v, ctx: returned), 1, (ISSUE.REFINEMENT_ERROR, ''))
            self.assertTrue(issue.message.startswith(u'Validation check failed: expected None, a bool'), returned)

    def test_super_refine_crash(self):
        def explode(value, ctx):
            raise KeyError('x')

        self.assertIssues(Int().super_refine(explode), 1, (ISSUE.REFINEMENT_ERROR, ''))

    def test_context(self):
        ctx = ValidationContext(path=('a',), metadata={'source': 'test'})
        issue = ctx.add_issue(path=[0], min=1)
        self.assertEqual(('a', 0), issue.path)
        self.assertEqual({'source': 'test', 'min': 1}, issue.metadata)
        self.assertEqual(1, len(ctx))
        self.assertEqual([issue], ctx.issues)


class MessageTest(VetTestBase):
    """ Test: message() """

    def test_message(self):
        schema = Int().coerce().message(u'Need a number')
        self.assertIsInstance(schema, Msg)
        self.assertEqual(KIND.MESSAGE, schema.kind)

        self.assertValid(schema, u'1', 1)
        issue, = self.assertIssues(schema, u'a', (ISSUE.INVALID_COERCION, ''))
        self.assertEqual(u'Need a number', issue.message)

    def test_every_issue(self):
        schema = Object({'a': Int(), 'b': Int()}).message(u'Bad')
        issues = self.assertIssues(schema, {}, (ISSUE.MISSING_KEY, 'a'), (ISSUE.MISSING_KEY, 'b'))
        self.assertEqual([u'Bad', u'Bad'], [i.message for i in issues])


class LazyTest(VetTestBase):
    """ Test: Lazy """

    def test_recursive(self):
        category = Object({
            'name': String(),
            'children': Array(Lazy(lambda: category)),
        })

        self.assertValid(category, {'name': u'root', 'children': [
            {'name': u'a', 'children': []},
            {'name': u'b', 'children': [{'name': u'c', 'children': []}]},
        ]})
        self.assertIssues(category, {'name': u'root', 'children': [
            {'name': u'b', 'children': [{'name': 1, 'children': []}]},
        ]}, (ISSUE.INVALID_TYPE, 'children[0].children[0].name'))

        self.assertFalse(category.is_async)
        self.assertEqual(KIND.LAZY, category.shape['children'].element.kind)

    def test_factory_called_once(self):
        calls = []

        def factory():
            calls.append(1)
            return Int()

        schema = Array(Lazy(factory))
        self.assertEqual([], calls)
        schema([1, 2, 3])
        self.assertEqual([1], calls)


class NamesTest(VetTestBase):
    """ Test schema names """

    def test_names(self):
        self.assertEqual(u'String', String().name)
        self.assertEqual(u'String?', String().optional().name)
        self.assertEqual(u'Int|null', Int().nullable().name)
        self.assertEqual(u'Object(a, b)', Object({'a': Int(), 'b': Int()}).name)
        self.assertEqual(u'Array(Float)', Array(Float()).name)
        self.assertEqual(u'String.refine(uppercase)', String().refine(name(u'uppercase', lambda v: v.isupper())).name)

        @name(u'even')
        def is_even(v):
            return v % 2 == 0
        self.assertEqual(u'Int.refine(even)', Int().refine(is_even).name)
        self.assertEqual(u'Int.refine(str())', Int().refine(str).name)

        self.assertEqual(u'Int(min, max)', repr(Int().min(1).max(2)))

    def test_kinds(self):
        """ Every schema belongs to exactly one group of kinds """
        schemas = [String(), Int(), Float(), Object({}), Array(Int()), Int().optional(), Int().nullable(),
                   Int().default(0), Int().catch(0), Int().transform(str), Int().preprocess(int),
                   Int().pipe(Int()), Int().refine(bool), Int().refine_async(bool), Int().super_refine(len),
                   Int().message(u'x'), Lazy(Int)]
        for schema in schemas:
            groups = [g for g in (KIND.PRIMITIVES, KIND.COMPOSITES, KIND.MODIFIERS) if schema.kind in g]
            self.assertEqual(1, len(groups), schema)
