from copy import deepcopy

import vet
from vet import Object, Array, Map, Union, Literal, OneOf, String, Int, Float, Bool, DateTime, \
    Invalid, ISSUE, EXTRA, MISSING
from vettest import VetTestBase


class GuaranteesTest(VetTestBase):
    """ Test general guarantees of validation """

    def test_all_issues_reported(self):
        """ Validation never stops at the first problem """
        schema = Object({
            'name': String().min(2),
            'email': String().email(),
            'age': Int().min(18),
        })
        issues = self.assertIssues(schema, {'name': u'A', 'email': u'x', 'age': 1},
                                   (ISSUE.TOO_SHORT, 'name'),
                                   (ISSUE.INVALID_FORMAT, 'email'),
                                   (ISSUE.TOO_SMALL, 'age'))
        self.assertEqual(3, len(issues))

    def test_paths(self):
        """ Every issue points to the offending value """
        schema = Object({'orders': Array(Object({
            'items': Map(String(), Object({'qty': Int().positive()})),
        }))})
        value = {'orders': [
            {'items': {'apple': {'qty': 1}}},
            {'items': {'pear': {'qty': 0}, 'plum': {}}},
        ]}
        issues = self.assertIssues(schema, value,
                                   (ISSUE.NOT_POSITIVE, 'orders[1].items.pear.qty'),
                                   (ISSUE.MISSING_KEY, 'orders[1].items.plum.qty'))

        # The path leads to the received value
        issue = issues[0]
        node = value
        for segment in issue.path:
            node = node[segment]
        self.assertEqual(issue.received, node)

    def test_input_not_modified(self):
        schema = Object({
            'name': String().trim().lower(),
            'tags': Array(String().trim()).default([]),
            'meta': Map(String(), Int().coerce()),
        }, extra_keys=EXTRA.STRIP)
        value = {'name': u' ALEX ', 'tags': [u' a '], 'meta': {'x': u'1'}, 'extra': True}
        original = deepcopy(value)

        self.assertEqual({'name': u'alex', 'tags': [u'a'], 'meta': {'x': 1}}, schema(value))
        self.assertEqual(original, value)
        schema.validate({'name': 1, 'tags': [1], 'meta': {'x': u'a'}})

    def test_schemas_are_immutable(self):
        """ Chaining never modifies the schema it's called on """
        base = String().trim()
        short = base.max(3)
        long = base.min(5)
        self.assertValid(base, u'abcd')
        self.assertValid(short, u'abc')
        self.assertIssues(short, u'abcd', (ISSUE.TOO_LONG, ''))
        self.assertValid(long, u'abcde')
        self.assertIssues(long, u'abcd', (ISSUE.TOO_SHORT, ''))

        obj = Object({'a': Int()})
        obj.strict()
        obj.extend({'b': Int()})
        self.assertEqual(EXTRA.STRIP, obj.extra_keys)
        self.assertEqual(['a'], list(obj.shape))

    def test_reuse(self):
        """ Schemas hold no state between validations """
        schema = Object({'a': Int().min(1)})
        for i in range(3):
            self.assertIssues(schema, {'a': 0}, (ISSUE.TOO_SMALL, 'a'))
            self.assertValid(schema, {'a': 1})

    def test_coercion_then_constraints(self):
        self.assertIssues(Int().coerce().min(10), u'5', (ISSUE.TOO_SMALL, ''))
        issue, = self.assertIssues(Array(Int()).min(2), [1], (ISSUE.TOO_SMALL, ''))
        self.assertEqual((), issue.path)

    def test_validate_function(self):
        result = vet.validate(Int(), 1)
        self.assertTrue(result.ok)
        self.assertEqual(1, result.value)

        result = vet.validate(Int(), u'1')
        self.assertFalse(result.ok)
        self.assertEqual(ISSUE.INVALID_TYPE, result.issues[0].code)


class EnvironmentConfigTest(VetTestBase):
    """ Example: application settings from environment variables """

    def setUp(self):
        self.schema = Object({
            'DATABASE_URL': String().url(),
            'PORT': Int().coerce().range(1, 65535).default(8080),
            'DEBUG': Bool().coerce().default(False),
            'LOG_LEVEL': OneOf([u'debug', u'info', u'warning', u'error']).default(u'info'),
            'WORKERS': Int().coerce().positive().optional(),
            'ALLOWED_HOSTS': String().transform(lambda v: [h.strip() for h in v.split(',') if h.strip()]),
        })

    def test_minimal(self):
        env = {
            'DATABASE_URL': u'postgres://localhost/app',
            'ALLOWED_HOSTS': u'example.com, api.example.com',
            'HOME': u'/root',
        }
        self.assertValid(self.schema, env, {
            'DATABASE_URL': u'postgres://localhost/app',
            'PORT': 8080,
            'DEBUG': False,
            'LOG_LEVEL': u'info',
            'WORKERS': None,
            'ALLOWED_HOSTS': [u'example.com', u'api.example.com'],
        })

    def test_full(self):
        config = self.schema({
            'DATABASE_URL': u'postgres://localhost/app',
            'PORT': u'5000',
            'DEBUG': u'yes',
            'LOG_LEVEL': u'debug',
            'WORKERS': u'4',
            'ALLOWED_HOSTS': u'*',
        })
        self.assertEqual(5000, config['PORT'])
        self.assertIs(True, config['DEBUG'])
        self.assertEqual(4, config['WORKERS'])
        self.assertEqual([u'*'], config['ALLOWED_HOSTS'])

    def test_invalid(self):
        with self.assertRaises(Invalid) as ecm:
            self.schema({
                'DATABASE_URL': u'localhost',
                'WORKERS': u'many',
            })
        e = ecm.exception
        self.assertEqual(
            [(ISSUE.INVALID_FORMAT, 'DATABASE_URL'),
             (ISSUE.INVALID_COERCION, 'WORKERS'),
             (ISSUE.MISSING_KEY, 'ALLOWED_HOSTS')],
            [(i.code, i.path_string) for i in e])
        self.assertEqual(['DATABASE_URL', 'WORKERS', 'ALLOWED_HOSTS'], list(e.group_by_path()))


class ApiPayloadTest(VetTestBase):
    """ Example: a typical API request payload """

    def setUp(self):
        address = Object({
            'street': String().trim().nonempty(),
            'city': String().trim().nonempty(),
            'zip': String().regex(r'^\d{5}$', name='zip code'),
        })
        payment = Union(
            Object({'method': Literal(u'card'), 'number': String().regex(r'^\d{16}$', name='card number')}),
            Object({'method': Literal(u'invoice'), 'email': String().email()}),
            discriminator='method',
        )
        self.schema = Object({
            'customer': Object({
                'name': String().trim().min(2),
                'email': String().email().lower(),
                'birthday': DateTime().nullable(),
            }),
            'shipping': address,
            'billing': address.optional(),
            'items': Array(Object({
                'sku': String().upper(),
                'qty': Int().positive(),
                'price': Float().nonnegative(),
            })).nonempty(),
            'payment': payment,
            'note': String().max(200).nullish(),
        }).strict()

        self.valid = {
            'customer': {'name': u' Alex ', 'email': u'Alex@Example.com', 'birthday': None},
            'shipping': {'street': u'1 Main St', 'city': u'Springfield', 'zip': u'12345'},
            'items': [{'sku': u'ab-1', 'qty': 2, 'price': 9.99}],
            'payment': {'method': u'invoice', 'email': u'billing@example.com'},
        }

    def test_valid(self):
        self.assertValid(self.schema, self.valid, {
            'customer': {'name': u'Alex', 'email': u'alex@example.com', 'birthday': None},
            'shipping': {'street': u'1 Main St', 'city': u'Springfield', 'zip': u'12345'},
            'billing': None,
            'items': [{'sku': u'AB-1', 'qty': 2, 'price': 9.99}],
            'payment': {'method': u'invoice', 'email': u'billing@example.com'},
            'note': None,
        })

    def test_invalid(self):
        payload = deepcopy(self.valid)
        payload['customer']['email'] = u'nope'
        payload['shipping']['zip'] = u'1234'
        payload['items'].append({'sku': u'x', 'qty': 0, 'price': 1.0})
        payload['payment'] = {'method': u'card', 'number': u'1234'}
        payload['coupon'] = u'FREE'

        issues = self.assertIssues(self.schema, payload,
                                   (ISSUE.INVALID_FORMAT, 'customer.email'),
                                   (ISSUE.INVALID_FORMAT, 'shipping.zip'),
                                   (ISSUE.NOT_POSITIVE, 'items[1].qty'),
                                   (ISSUE.INVALID_UNION, 'payment'),
                                   (ISSUE.UNKNOWN_KEY, 'coupon'))
        self.assertEqual(u'Invalid zip code format', issues[1].message)

        # Nested structure
        formatted = vet.format_issues(issues)
        self.assertIn('customer', formatted)
        self.assertIn('shipping', formatted)

    def test_empty(self):
        self.assertIssues(self.schema, {},
                          (ISSUE.MISSING_KEY, 'customer'),
                          (ISSUE.MISSING_KEY, 'shipping'),
                          (ISSUE.MISSING_KEY, 'items'),
                          (ISSUE.MISSING_KEY, 'payment'))
        self.assertIssues(self.schema, MISSING, (ISSUE.MISSING_KEY, ''))
