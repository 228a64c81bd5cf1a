#! /usr/bin/env python
""" Throughput benchmark: validations per second of generated object schemas, valid and invalid samples """

import itertools
import time
from random import choice, randrange

import vet


def generate_random_field(valid):
    """ Generate a random field schema and samples for it.

    :param valid: Generate valid samples?
    :type valid: bool
    :return: schema, sample-generator
    :rtype: vet.Schema, generator
    """
    field_type = choice(['int', 'str', 'literal', 'coerce'])

    r = lambda: randrange(-1000000000, 1000000000)

    if field_type == 'int':
        return vet.Int(), (r() if valid else str(r()) for i in itertools.count())
    elif field_type == 'str':
        return vet.String().min(1), (str(r()) if valid else r() for i in itertools.count())
    elif field_type == 'literal':
        value = r()
        return vet.Literal(value), (value if valid else None for i in itertools.count())
    elif field_type == 'coerce':
        return vet.Int().coerce(), (str(r()) if valid else 'x' for i in itertools.count())
    else:
        raise AssertionError('!')


def generate_object_schema(size, valid):
    """ Generate an object schema with `size` fields, and a samples generator

    :param size: Number of fields
    :type size: int
    :param valid: Generate valid samples?
    :type valid: bool
    :returns: schema, sample-generator
    :rtype: dict, generator
    """
    shape = {}
    generators = []

    for i in range(0, size):
        key = 'field_{}'.format(i)
        shape[key], gen = generate_random_field(valid)
        generators.append((key, gen))

    # Samples
    samples = ({key: next(gen) for key, gen in generators} for i in itertools.count())

    # Finish
    return shape, samples


if __name__ == '__main__':
    import sys
    import argparse
    from collections import defaultdict

    parser = argparse.ArgumentParser(prog='Performance')
    parser.add_argument('samples', type=int, help='The number of samples to test with')
    parser.add_argument('size_min', type=int, help='Min object size')
    parser.add_argument('size_max', type=int, help='Max object size')
    args = parser.parse_args()

    # Extra keys policies to compare
    policies = (vet.EXTRA.STRIP, vet.EXTRA.PASSTHROUGH, vet.EXTRA.STRICT)

    # Test on both valid and invalid samples
    results = defaultdict(list)
    for valid in (True, False):

        # Generate schemas of different size
        objects = []
        for size in range(args.size_min, args.size_max + 1):
            shape, gen = generate_object_schema(size, valid)
            samples = list(sample for i, sample in zip(range(0, args.samples), gen))
            objects.append((size, shape, samples))

        for policy in policies:
            for size, shape, samples in objects:
                schema = vet.Object(shape, extra_keys=policy)

                # Now do validation
                start = time.perf_counter()
                for sample in samples:
                    schema.validate(sample)
                spent_time = time.perf_counter() - start

                results[valid, policy].append(dict(
                    size=size,
                    sec=spent_time,
                    vps=len(samples) / spent_time if spent_time else float('inf'),
                ))

    # Print dataset
    for (valid, policy), stats_list in sorted(results.items()):
        print('"{policy} ({valid})"'.format(
            policy=policy,
            valid='Valid' if valid else 'Invalid',
        ))

        print("#size  time  vps")
        for stat in stats_list:
            print('{size: 5d} {sec: 4.2f} {vps: 10.2f}'.format(**stat))
        print('\n')  # split datasets

    # Averages
    for (valid, policy), stats_list in sorted(results.items()):
        vps = sum(x['vps'] for x in stats_list) / len(stats_list)
        print('AVG:{policy:<12} {valid:<8} {vps: 10.2f}'.format(
            policy=policy,
            valid='Valid' if valid else 'Invalid',
            vps=vps
        ), file=sys.stderr)
