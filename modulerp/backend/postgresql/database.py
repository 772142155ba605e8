# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
import asyncio
import logging
import re
import weakref
from itertools import count

import asyncpg
from asyncpg.exceptions import (
    IntegrityConstraintViolationError as DatabaseIntegrityError)
from asyncpg.exceptions import (
    PostgresConnectionError as DatabaseOperationalError)
from sql import Flavor

from modulerp.backend.database import DatabaseInterface, SQLType
from modulerp.config import config, parse_uri

__all__ = ['Database', 'DatabaseIntegrityError', 'DatabaseOperationalError']

logger = logging.getLogger(__name__)

_timeout = config.getint('database', 'timeout', default=30)
_minconn = config.getint('database', 'minconn', default=1)
_maxconn = config.getint('database', 'maxconn', default=64)
_default_name = config.get('database', 'default_name', default='template1')

_PARAMETER = re.compile(r'%(s|%)')


def numbered_parameters(sql):
    "Convert the format paramstyle of python-sql into $n placeholders"
    counter = count(1)

    def repl(match):
        if match.group(1) == '%':
            return '%'
        return '$%d' % next(counter)
    return _PARAMETER.sub(repl, sql)


class Database(DatabaseInterface):

    _pools = weakref.WeakKeyDictionary()
    _locks = weakref.WeakKeyDictionary()
    flavor = Flavor(ilike=True)

    TYPES_MAPPING = {
        'INTEGER': SQLType('INT4', 'INT4'),
        'FLOAT': SQLType('FLOAT8', 'FLOAT8'),
        'DATETIME': SQLType('TIMESTAMP', 'TIMESTAMP(6)'),
        }

    def __init__(self, name=_default_name):
        super(Database, self).__init__(name=name)
        self._conn = None
        self._transaction = None

    @classmethod
    def _get_lock(cls):
        "Return the lock of the pools of the running event loop"
        loop = asyncio.get_running_loop()
        lock = cls._locks.get(loop)
        if lock is None:
            lock = cls._locks[loop] = asyncio.Lock()
        return lock

    @classmethod
    def _loop_pools(cls):
        return cls._pools.setdefault(asyncio.get_running_loop(), {})

    async def _get_pool(self):
        async with self._get_lock():
            pools = self._loop_pools()
            pool = pools.get(self.name)
            if pool is None:
                uri = parse_uri(config.get('database', 'uri'))
                pool = await asyncpg.create_pool(
                    host=uri.hostname,
                    port=uri.port,
                    user=uri.username,
                    password=uri.password,
                    database=self.name,
                    min_size=_minconn,
                    max_size=_maxconn,
                    timeout=_timeout,
                    )
                pools[self.name] = pool
                logger.info('connection pool to "%s" created', self.name)
            return pool

    async def connect(self):
        if self._conn is not None:
            return self
        pool = await self._get_pool()
        self._conn = await pool.acquire()
        await self._begin()
        return self

    async def _begin(self):
        self._transaction = self._conn.transaction(isolation='repeatable_read')
        await self._transaction.start()

    async def close(self):
        if self._conn is None:
            return
        try:
            await self._transaction.rollback()
        finally:
            await self._loop_pools()[self.name].release(self._conn)
            self._conn = None
            self._transaction = None

    async def execute(self, sql, params=()):
        sql = numbered_parameters(sql)
        logger.debug('%s %s', sql, params)
        rows = await self._conn.fetch(sql, *params)
        return [dict(row) for row in rows]

    async def commit(self):
        await self._transaction.commit()
        await self._begin()

    async def rollback(self):
        await self._transaction.rollback()
        await self._begin()

    @classmethod
    async def close_pools(cls):
        "Close the pools of the running event loop"
        async with cls._get_lock():
            pools = cls._loop_pools()
            for name, pool in list(pools.items()):
                await pool.close()
                del pools[name]
