#!/usr/bin/env python3
# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.

from setuptools import setup, find_packages
import io
import os
import re


def read(fname):
    return io.open(
        os.path.join(os.path.dirname(__file__), fname),
        'r', encoding='utf-8').read()


def get_version():
    init = read(os.path.join('modulerp', '__init__.py'))
    return re.search('__version__ = "([0-9.]*)"', init).group(1)


version = get_version()
major_version, minor_version, _ = version.split('.', 2)
major_version = int(major_version)
minor_version = int(minor_version)
name = 'modulerp'

if minor_version % 2:
    version = '%s.%s.dev0' % (major_version, minor_version)
local_version = []
if os.environ.get('CI_JOB_ID'):
    local_version.append(os.environ['CI_JOB_ID'])
if local_version:
    version += '+' + '.'.join(local_version)

setup(name=name,
    version=version,
    description='Modular ERP model composition engine',
    long_description=read('README.rst'),
    author='Modulerp',
    keywords='business application platform ERP ORM asyncio',
    packages=find_packages(),
    package_data={
        'modulerp.modules.ir': ['module.cfg'],
        'modulerp.modules.party': ['module.cfg'],
        'modulerp.modules.project': ['module.cfg'],
        'modulerp.modules.sale': ['module.cfg'],
        'modulerp.modules.timesheet': ['module.cfg'],
        },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Framework :: AsyncIO',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: '
        'GNU General Public License v3 or later (GPLv3+)',
        'Natural Language :: English',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3 :: Only',
        'Programming Language :: Python :: Implementation :: CPython',
        'Topic :: Software Development :: Libraries :: Application Frameworks',
        ],
    platforms='any',
    license='GPL-3',
    python_requires='>=3.8',
    install_requires=[
        'python-dateutil',
        'python-sql >= 1.3',
        'aiosqlite >= 0.17',
        ],
    extras_require={
        'PostgreSQL': ['asyncpg >= 0.27'],
        },
    zip_safe=False,
    test_suite='modulerp.tests',
    )
