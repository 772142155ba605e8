# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
from modulerp.backend.table import TableHandlerInterface
from modulerp.transaction import Transaction

__all__ = ['TableHandler']


class TableHandler(TableHandlerInterface):
    primary_key_definition = '%s INTEGER PRIMARY KEY AUTOINCREMENT'

    @classmethod
    async def table_exist(cls, table_name):
        rows = await Transaction().database.execute(
            "SELECT name FROM sqlite_master "
            "WHERE type = 'table' AND name = ?",
            (table_name,))
        return bool(rows)
