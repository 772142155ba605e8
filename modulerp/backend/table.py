# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
import logging

from modulerp.model import fields
from modulerp.transaction import Transaction

__all__ = ['TableHandlerInterface']

logger = logging.getLogger(__name__)


def escape_identifier(name):
    return '"%s"' % name.replace('"', '""')


class TableHandlerInterface(object):
    '''
    Define generic interface to create the table of a model

    Only the creation of missing tables is supported, the migration of an
    existing schema is done outside.
    '''
    primary_key_definition = None

    @classmethod
    async def table_exist(cls, table_name):
        raise NotImplementedError

    @classmethod
    def column_definition(cls, database, name, field):
        if field.primary_key:
            return cls.primary_key_definition % escape_identifier(name)
        definition = '%s %s' % (
            escape_identifier(name), field.sql_type(database).type)
        if field.required:
            definition += ' NOT NULL'
        return definition

    @classmethod
    def foreign_key_definition(cls, model, name, field):
        target = field.get_target(model)
        on_delete = field.ondelete
        if field.required and on_delete == 'SET NULL':
            on_delete = 'RESTRICT'
        return 'FOREIGN KEY (%s) REFERENCES %s (%s) ON DELETE %s' % (
            escape_identifier(name), escape_identifier(target._table),
            escape_identifier(target._primary_key), on_delete)

    @classmethod
    async def create(cls, model):
        '''
        Create the table of the compiled model if it does not exist
        '''
        database = Transaction().database
        if await cls.table_exist(model._table):
            return False
        definitions, constraints = [], []
        for name, field in model._fields.items():
            if field.virtual:
                continue
            definitions.append(cls.column_definition(database, name, field))
            if isinstance(field, fields.Many2One):
                constraints.append(
                    cls.foreign_key_definition(model, name, field))
        await database.execute('CREATE TABLE %s (%s)' % (
                escape_identifier(model._table),
                ', '.join(definitions + constraints)))
        for name, field in model._fields.items():
            if field.select and not field.virtual and not field.primary_key:
                await database.execute('CREATE INDEX %s ON %s (%s)' % (
                        escape_identifier(
                            '%s_%s_index' % (model._table, name)),
                        escape_identifier(model._table),
                        escape_identifier(name)))
        logger.info('create table "%s"', model._table)
        return True
