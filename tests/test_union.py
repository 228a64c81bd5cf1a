from vet import Union, Object, Literal, String, Int, Float, Bool, SchemaError, ISSUE, KIND
from vettest import VetTestBase, s


class UnionTest(VetTestBase):
    """ Test: Union """

    def test_first_match(self):
        """ The first successful alternative wins """
        schema = Union(Int(), String().coerce())
        self.assertEqual(KIND.UNION, schema.kind)

        self.assertValid(schema, 1)
        self.assertValid(schema, u'a')
        self.assertValid(schema, 1.5, u'1.5')

        # Declaration order matters
        self.assertValid(Union(String().coerce(), Int()), 1, u'1')

    def test_failure(self):
        schema = Union(Int(), Bool())

        issue, = self.assertIssues(schema, u'abc', (ISSUE.INVALID_UNION, ''))
        self.assertEqual(s.m_union, issue.message)
        self.assertEqual(2, issue.metadata['count'])
        self.assertEqual('string', issue.metadata['received'])
        self.assertNotIn('discriminator', issue.metadata)

        # Issues of every alternative, in declaration order
        int_issues, bool_issues = issue.metadata['union_issues']
        self.assertEqual([ISSUE.INVALID_TYPE], [i.code for i in int_issues])
        self.assertEqual('int', int_issues[0].metadata['expected'])
        self.assertEqual('bool', bool_issues[0].metadata['expected'])

    def test_path(self):
        """ Union issue is reported where the union is """
        schema = Object({'id': Union(Int(), String().uuid())})
        issue, = self.assertIssues(schema, {'id': 1.5}, (ISSUE.INVALID_UNION, 'id'))
        # Nested issues are relative to the union
        self.assertEqual((), issue.metadata['union_issues'][0][0].path)

    def test_flatten(self):
        schema = Union(Union(Int(), Bool()), String())
        self.assertEqual(3, len(schema.alternatives))

        # Discriminated unions are kept as is
        inner = Union(Object({'type': Literal(u'a')}), discriminator='type')
        self.assertEqual(2, len(Union(inner, String()).alternatives))

    def test_schema_errors(self):
        self.assertRaises(SchemaError, Union)


class DiscriminatedUnionTest(VetTestBase):
    """ Test: Union with a discriminator """

    def setUp(self):
        self.calls = []

        def track(v):
            self.calls.append(v)
            return v

        self.schema = Union(
            Object({'type': Literal(u'circle'), 'radius': Float().preprocess(track)}),
            Object({'type': Literal(u'square'), 'side': Float()}),
            Object({'type': Literal(u'rect'), 'width': Float(), 'height': Float()}),
            discriminator='type',
        )

    def test_match(self):
        self.assertValid(self.schema, {'type': u'square', 'side': 1.0})
        self.assertValid(self.schema, {'type': u'rect', 'width': 1.0, 'height': 2.0})
        self.assertValid(self.schema, {'type': u'circle', 'radius': 1.0})

    def test_failure(self):
        issue, = self.assertIssues(self.schema, {'type': u'square', 'side': u'big'}, (ISSUE.INVALID_UNION, ''))
        self.assertEqual('type', issue.metadata['discriminator'])
        self.assertEqual(3, issue.metadata['count'])

        # Every alternative is reported: same as without the discriminator
        circle, square, rect = issue.metadata['union_issues']
        self.assertEqual([(ISSUE.INVALID_LITERAL, 'type'), (ISSUE.MISSING_KEY, 'radius')],
                         [(i.code, i.path_string) for i in circle])
        self.assertEqual([(ISSUE.INVALID_TYPE, 'side')],
                         [(i.code, i.path_string) for i in square])
        self.assertEqual(['type', 'width', 'height'], [i.path_string for i in rect])

    def test_unknown_tag(self):
        self.assertIssues(self.schema, {'type': u'hexagon'}, (ISSUE.INVALID_UNION, ''))
        self.assertIssues(self.schema, {'side': 1.0}, (ISSUE.INVALID_UNION, ''))
        self.assertIssues(self.schema, u'square', (ISSUE.INVALID_UNION, ''))

    def test_same_outcome_as_plain_union(self):
        plain = Union(*self.schema.alternatives)
        for value in (
            {'type': u'square', 'side': 1.0},
            {'type': u'square', 'side': u'x'},
            {'type': u'circle'},
            {'type': 1},
            {},
            None,
        ):
            self.assertEqual(plain.validate(value).ok, self.schema.validate(value).ok, value)

    def test_discriminator_narrows(self):
        """ Alternatives with a different tag are not tried first """
        self.schema.validate({'type': u'square', 'side': 1.0})
        self.assertEqual([], self.calls)

        self.schema.validate({'type': u'circle', 'radius': 1.0})
        self.assertEqual([1.0], self.calls)
