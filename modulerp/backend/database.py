# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
from collections import namedtuple

DatabaseIntegrityError = None
DatabaseOperationalError = None

SQLType = namedtuple('SQLType', 'base type')


class DatabaseInterface(object):
    '''
    Define generic interface for database connection

    A database holds one connection. execute() takes the SQL text and the
    parameters produced by python-sql and returns the rows as dictionaries.
    '''
    flavor = None
    IN_MAX = 1000
    TYPES_MAPPING = {}

    def __init__(self, name=''):
        self.name = name

    def __repr__(self):
        return '<%s %r>' % (self.__class__.__name__, self.name)

    async def connect(self):
        raise NotImplementedError

    async def close(self):
        raise NotImplementedError

    async def execute(self, sql, params=()):
        raise NotImplementedError

    async def commit(self):
        raise NotImplementedError

    async def rollback(self):
        raise NotImplementedError

    def sql_type(self, type_):
        if type_ in self.TYPES_MAPPING:
            return self.TYPES_MAPPING[type_]
        if type_.startswith('VARCHAR'):
            return SQLType('VARCHAR', type_)
        return SQLType(type_, type_)
