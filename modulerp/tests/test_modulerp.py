# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
import os
import time
import unittest
from functools import wraps

from modulerp import backend
from modulerp.model import fields
from modulerp.modules import get_module_info, load_modules
from modulerp.pool import Pool
from modulerp.transaction import Transaction

__all__ = ['DB_NAME', 'CONTEXT',
    'activate_module', 'create_tables', 'with_transaction',
    'ModuleTestCase']

CONTEXT = {}
if 'DB_NAME' in os.environ:
    DB_NAME = os.environ['DB_NAME']
elif backend.name == 'sqlite':
    DB_NAME = ':memory:'
else:
    DB_NAME = 'test_' + str(int(time.time()))


def activate_module(modules):
    '''
    Return a new pool with the modules, their dependencies and the test
    models when 'tests' is in modules.
    '''
    if isinstance(modules, str):
        modules = [modules]
    pool = Pool('test')
    load_modules(pool, [m for m in modules if m != 'tests'])
    if 'tests' in modules:
        from modulerp import tests
        tests.register(pool)
    return pool


async def create_tables(pool):
    for name in pool.names():
        await backend.TableHandler.create(pool.get(name))


def with_transaction(context=None):
    '''
    Run the coroutine test in a transaction on a database with the tables of
    self.pool, the transaction is rolled back at the end.
    '''
    def decorator(func):
        @wraps(func)
        async def wrapper(self, *args, **kwargs):
            transaction = Transaction(new=True)
            database = backend.Database(DB_NAME)
            async with transaction.start(
                    database, context=context or CONTEXT, close=True):
                try:
                    await create_tables(self.pool)
                    return await func(self, *args, **kwargs)
                finally:
                    await transaction.rollback()
        return wrapper
    return decorator


class ModuleTestCase(unittest.IsolatedAsyncioTestCase):
    'Modulerp Test Case'
    module = None
    extras = None

    @classmethod
    def setUpClass(cls):
        super(ModuleTestCase, cls).setUpClass()
        if cls.module is None:
            raise unittest.SkipTest('%s tests no module' % cls.__name__)
        modules = [cls.module]
        if cls.extras:
            modules.extend(cls.extras)
        cls.pool = activate_module(modules)

    def test_depends(self):
        'Test depends are loaded before the module'
        info = get_module_info(self.module)
        for depend in info['depends']:
            with self.subTest(depend=depend):
                self.assertIn(depend, self.pool._modules.values())

    def test_field_relation_target(self):
        'Test field relation targets are registered'
        for mname in self.pool.names():
            model = self.pool.get(mname)
            for fname, field in model._fields.items():
                if not isinstance(field, (fields.Many2One, fields.One2Many)):
                    continue
                with self.subTest(model=mname, field=fname):
                    self.assertTrue(self.pool.has(field.model_name),
                        msg='Unknown relation target %s in "%s"."%s"' % (
                            field.model_name, mname, fname))
                    if isinstance(field, fields.One2Many):
                        target = field.get_target(model)
                        self.assertIsInstance(
                            target._fields.get(field.field), fields.Many2One,
                            msg='Missing inverse "%s" of "%s"."%s"' % (
                                field.field, mname, fname))

    def test_selection_fields(self):
        'Test the default values of selection fields'
        for mname in self.pool.names():
            model = self.pool.get(mname)
            for fname, field in model._fields.items():
                if not isinstance(field, fields.Selection):
                    continue
                if fname not in model._defaults:
                    continue
                with self.subTest(model=mname, field=fname):
                    self.assertIn(model._defaults[fname](), field.values())

    @with_transaction()
    async def test_tables(self):
        'Test the tables of the models can be queried'
        for mname in self.pool.names():
            model = self.pool.get(mname)
            with self.subTest(model=mname):
                self.assertEqual(await model.search_count([]), 0)
