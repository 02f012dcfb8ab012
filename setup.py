# -*- coding: utf-8; -*-

import io
import os

from setuptools import setup


metadata = {}
with io.open(os.path.join('pegrow', '__metadata__.py'), 'rb') as f:
    exec(f.read(), metadata)            # pylint: disable=exec-used

with io.open('README.rst') as f:
    long_description = f.read()

setup(
    name='pegrow',
    version=metadata['version'],
    description='PEG parser combinators with left recursion',
    long_description=long_description,
    url=metadata['homepage'],
    license='MIT',

    python_requires='>=3.6',
    install_requires=[
        'bitstring >= 3.1.4, < 5',
        'dominate >= 2.2.0',
    ],
    extras_require={
        'test': [
            'pytest >= 3.0',
        ],
    },

    packages=[
        'pegrow',
        'pegrow.reports',
        'pegrow.util',
    ],
    package_data={
        'pegrow.reports': ['html.css'],
    },
    classifiers=[
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: Implementation :: CPython',
        'Programming Language :: Python :: Implementation :: PyPy',
        'Topic :: Software Development :: Compilers',
        'Topic :: Text Processing :: General',
    ],
    keywords='PEG parser combinators left recursion grammar',
)
