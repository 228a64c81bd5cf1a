#!/usr/bin/env python
""" Composable schema validation for untyped data """

from setuptools import setup, find_packages

setup(
    # https://setuptools.pypa.io/en/latest/references/keywords.html
    name='vet',
    version='0.1.0',
    author='Mark Vartanyan',
    author_email='kolypto@gmail.com',

    license='BSD',
    description=__doc__,
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    keywords=['validation', 'schema', 'parsing'],

    packages=find_packages(exclude=('tests', 'tests.*', 'misc', 'misc.*')),
    scripts=[],
    entry_points={},

    python_requires='>= 3.8',
    install_requires=[
    ],
    extras_require={
        'test': ['pytest'],
    },
    include_package_data=True,

    platforms='any',
    classifiers=[
        # https://pypi.org/classifiers/
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Natural Language :: English',
        'Natural Language :: French',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Topic :: Software Development :: Libraries :: Python Modules',
    ],
)
