# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
import datetime
import logging
import os
import sqlite3 as sqlite
from decimal import Decimal
from sqlite3 import IntegrityError as DatabaseIntegrityError
from sqlite3 import OperationalError as DatabaseOperationalError

import aiosqlite
from sql import Flavor

from modulerp.backend.database import DatabaseInterface, SQLType
from modulerp.config import config

__all__ = ['Database', 'DatabaseIntegrityError', 'DatabaseOperationalError']
logger = logging.getLogger(__name__)


class Database(DatabaseInterface):

    flavor = Flavor(paramstyle='qmark', max_limit=-1, null_ordering=False)
    IN_MAX = 200

    TYPES_MAPPING = {
        'DATETIME': SQLType('TIMESTAMP', 'TIMESTAMP'),
        'BOOL': SQLType('BOOLEAN', 'BOOLEAN'),
        'FLOAT': SQLType('FLOAT', 'FLOAT'),
        }

    def __init__(self, name=':memory:'):
        super(Database, self).__init__(name=name)
        self._conn = None

    @property
    def path(self):
        if self.name == ':memory:':
            return ':memory:'
        return os.path.join(
            config.get('database', 'path'), self.name + '.sqlite')

    async def connect(self):
        if self._conn is not None:
            return self
        self._conn = await aiosqlite.connect(self.path,
            timeout=config.getint('database', 'timeout', default=30),
            detect_types=sqlite.PARSE_DECLTYPES,
            isolation_level='IMMEDIATE')
        self._conn.row_factory = aiosqlite.Row
        await self._conn.execute('PRAGMA foreign_keys = ON')
        logger.debug('connect to %s', self.path)
        return self

    async def close(self):
        if self._conn is None:
            return
        await self._conn.close()
        self._conn = None

    async def execute(self, sql, params=()):
        logger.debug('%s %s', sql, params)
        async with self._conn.execute(sql, params) as cursor:
            rows = await cursor.fetchall()
        return [dict(row) for row in rows]

    async def commit(self):
        await self._conn.commit()

    async def rollback(self):
        await self._conn.rollback()


def _decode(value):
    return value.decode('utf-8')


# Values are converted by the fields so they never fail on malformed data
sqlite.register_converter('NUMERIC', _decode)
sqlite.register_converter('DATE', _decode)
sqlite.register_converter('TIMESTAMP', _decode)
sqlite.register_converter('BOOLEAN', lambda val: val not in (b'0', b''))
sqlite.register_adapter(Decimal, str)
sqlite.register_adapter(datetime.date, lambda val: val.isoformat())


def adapt_datetime(val):
    return val.replace(tzinfo=None).isoformat(" ")
sqlite.register_adapter(datetime.datetime, adapt_datetime)
