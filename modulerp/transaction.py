# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
import logging
import time
from contextvars import ContextVar

from sql import Flavor

__all__ = ['Transaction']

logger = logging.getLogger(__name__)

_transactions = ContextVar('transactions', default=())


class _AttributeManager(object):
    '''
    Manage Attribute of transaction
    '''

    def __init__(self, **kwargs):
        self.kwargs = kwargs

    def __enter__(self):
        return Transaction()

    def __exit__(self, type, value, traceback):
        for name, value in self.kwargs.items():
            setattr(Transaction(), name, value)


class Transaction(object):
    '''
    Control the transaction

    The current transaction is kept in a context variable, so each asyncio
    task sees the transaction of the context it was created in.
    '''

    database = None
    readonly = False
    close = False
    context = None
    started_at = None
    _token = None

    def __new__(cls, new=False):
        transactions = _transactions.get()
        if new or not transactions:
            return super(Transaction, cls).__new__(cls)
        return transactions[-1]

    def start(self, database, readonly=False, context=None, close=False):
        '''
        Start transaction on database
        '''
        assert self.database is None, 'transaction already started'
        self.started_at = time.monotonic()
        Flavor.set(database.flavor)
        self.database = database
        self.readonly = readonly
        self.close = close
        self.context = context or {}
        self._token = _transactions.set(_transactions.get() + (self,))
        return self

    async def __aenter__(self):
        await self.database.connect()
        return self

    async def __aexit__(self, type, value, traceback):
        await self.stop(type is None)

    async def stop(self, commit=False):
        try:
            try:
                if commit and not self.readonly:
                    await self.commit()
                else:
                    await self.rollback()
            finally:
                if self.close:
                    await self.database.close()
        finally:
            self.database = None
            self.readonly = False
            self.close = False
            self.context = None
            _transactions.reset(self._token)
            self._token = None

    def set_context(self, context=None, **kwargs):
        if context is None:
            context = {}
        manager = _AttributeManager(context=self.context)
        self.context = self.context.copy()
        self.context.update(context)
        if kwargs:
            self.context.update(kwargs)
        return manager

    async def commit(self):
        logger.debug('commit %s', self.database)
        await self.database.commit()

    async def rollback(self):
        logger.debug('rollback %s', self.database)
        await self.database.rollback()
