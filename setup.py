#!/usr/bin/env python

from setuptools import setup

setup(name='conference-programme',
    version='0.1',
    description='django conference programme: events, speakers and their schedule',
    python_requires='>=3.10',
    packages=[
        'programme',
        'programme.migrations',
        'confsite',
    ],
    install_requires=[
        'Django>=5.1',
        'django-model-utils>=4.3',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-django',
            'factory_boy',
            'Faker',
        ],
    },
)
