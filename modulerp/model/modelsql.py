# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
import logging

from sql import Column, Literal, Table
from sql.aggregate import Count
from sql.operators import And, Or

from modulerp.model.exceptions import DomainValidationError, ValidationError
from modulerp.model.fields.field import SQL_OPERATORS
from modulerp.model.modelstorage import ModelStorage, RecordSet
from modulerp.tools import grouped_slice, unique
from modulerp.transaction import Transaction

__all__ = ['ModelSQL']

logger = logging.getLogger(__name__)


def is_leaf(expression):
    return (isinstance(expression, (list, tuple))
        and len(expression) == 3
        and isinstance(expression[0], str)
        and isinstance(expression[1], str)
        and expression[1] in SQL_OPERATORS)


class ModelSQL(ModelStorage):
    """
    Define a model with storage in database.
    """

    @classmethod
    def __table__(cls):
        return Table(cls._table)

    @classmethod
    def _database(cls):
        database = Transaction().database
        if database is None:
            raise RuntimeError(
                'No transaction started to access "%s"' % cls.__name__)
        return database

    @classmethod
    def _columns(cls, table):
        return [f.sql_column(table).as_(n)
            for n, f in cls._fields.items() if not f.virtual]

    @classmethod
    def _parse_row(cls, row):
        return {n: f.sql_parse(row.get(n))
            for n, f in cls._fields.items() if not f.virtual}

    @classmethod
    def _instantiate(cls, rows):
        return RecordSet(cls, [cls(**cls._parse_row(r)) for r in rows])

    @classmethod
    def _sql_values(cls, table, values):
        columns, sql_values = [], []
        for name, value in values.items():
            field = cls._fields[name]
            columns.append(Column(table, name))
            try:
                sql_values.append(field.sql_format(value))
            except (TypeError, ValueError, ArithmeticError) as exception:
                raise ValidationError(
                    'The value "%s" of field "%s" in "%s" is not valid.'
                    % (value, field.string or name, cls.__name__),
                    str(exception)) from exception
        return columns, sql_values

    @classmethod
    async def create(cls, values):
        database = cls._database()
        table = cls.__table__()

        values = cls._clean_values(values)
        missing = [n for n in cls._fields if n not in values]
        values.update(cls._clean_values(cls.default_get(missing)))
        cls._validate(values)

        columns, sql_values = cls._sql_values(table, values)
        if columns:
            query = table.insert(columns, [sql_values],
                returning=cls._columns(table))
        else:
            query = table.insert(returning=cls._columns(table))
        rows = await database.execute(*query)
        records = cls._instantiate(rows)
        await cls._store_computed(records)
        logger.debug('create %s', records)
        return records

    @classmethod
    async def write(cls, records, values):
        ids = [r.id for r in records if r.id is not None]
        if not ids:
            return False
        database = cls._database()
        table = cls.__table__()
        primary_key = Column(table, cls._primary_key)

        values = cls._clean_values(values)
        cls._validate(values, creation=False)
        if not values:
            return False
        columns, sql_values = cls._sql_values(table, values)

        rows = {}
        for sub_ids in grouped_slice(ids, database.IN_MAX):
            sub_ids = list(sub_ids)
            await database.execute(*table.update(columns, sql_values,
                    where=primary_key.in_(sub_ids)))
            for row in await cls._select(
                    where=lambda t: Column(t, cls._primary_key).in_(sub_ids)):
                rows[row[cls._primary_key]] = row

        for record in records:
            row = rows.get(record.id)
            if row is not None:
                record._values.update(cls._parse_row(row))
        await cls._store_computed([r for r in records if r.id in rows])
        return bool(rows)

    @classmethod
    async def _store_computed(cls, records):
        "Compute and save the values of the stored computed fields"
        names = [n for n, f in cls._fields.items()
            if f.compute is not None and f.store]
        if not names or not records:
            return
        database = cls._database()
        table = cls.__table__()
        primary_key = Column(table, cls._primary_key)
        values = {n: await cls.compute(records, n) for n in names}
        for record in records:
            record_values = {n: values[n].get(record.id) for n in names}
            columns, sql_values = cls._sql_values(table, record_values)
            await database.execute(*table.update(columns, sql_values,
                    where=primary_key == record.id))
            record._values.update(record_values)

    @classmethod
    async def unlink(cls, records):
        ids = list(unique(r.id for r in records if r.id is not None))
        if not ids:
            return
        database = cls._database()
        table = cls.__table__()
        primary_key = Column(table, cls._primary_key)
        for sub_ids in grouped_slice(ids, database.IN_MAX):
            await database.execute(*table.delete(
                    where=primary_key.in_(list(sub_ids))))
        logger.debug('unlink %s %s', cls.__name__, ids)

    @classmethod
    def _order_by(cls, order, table):
        if order is None:
            order = cls._order
        order_by = []
        for oexpr, otype in order:
            field = cls._fields.get(oexpr)
            if field is None or field.virtual:
                raise DomainValidationError(
                    'Invalid order "%s" on model "%s"' % (oexpr, cls.__name__))
            otype = otype.upper()
            if otype not in ('ASC', 'DESC'):
                raise DomainValidationError(
                    'Invalid order direction "%s"' % otype)
            column = field.sql_column(table)
            order_by.append(column.asc if otype == 'ASC' else column.desc)
        return order_by

    @classmethod
    def search_domain(cls, domain, table):
        '''
        Return the SQL expression of domain on table.

        A domain is a list of clauses (field, operator, value) combined with
        AND. A list can start with 'OR' or 'AND' and can contain sub-lists.
        '''
        if is_leaf(domain):
            name = domain[0]
            field = cls._fields.get(name)
            if field is None:
                raise DomainValidationError(
                    'Unknown field "%s" in domain of "%s"'
                    % (name, cls.__name__), domain=domain)
            return field.convert_domain(tuple(domain), table)
        if not isinstance(domain, (list, tuple)):
            raise DomainValidationError(
                'Invalid domain "%s" on "%s"' % (domain, cls.__name__))
        operator = And
        if domain and domain[0] in ('OR', 'AND'):
            if domain[0] == 'OR':
                operator = Or
            domain = domain[1:]
        if not domain:
            return Literal(True)
        return operator(cls.search_domain(d, table) for d in domain)

    @classmethod
    async def _select(cls, where=None, order_by=None, limit=None, offset=None):
        database = cls._database()
        table = cls.__table__()
        if callable(where):
            where = where(table)
        query = table.select(*cls._columns(table),
            where=where, order_by=order_by(table) if order_by else None,
            limit=limit, offset=offset or None)
        return await database.execute(*query)

    @classmethod
    async def search(cls, domain=None, offset=0, limit=None, order=None):
        rows = await cls._select(
            where=lambda t: cls.search_domain(domain, t) if domain else None,
            order_by=lambda t: cls._order_by(order, t),
            limit=limit, offset=offset)
        return cls._instantiate(rows)

    @classmethod
    async def search_count(cls, domain=None):
        database = cls._database()
        table = cls.__table__()
        where = cls.search_domain(domain, table) if domain else None
        query = table.select(
            Count(Column(table, cls._primary_key)).as_('count'), where=where)
        rows = await database.execute(*query)
        return int(rows[0]['count'])

    @classmethod
    async def browse(cls, ids):
        if isinstance(ids, int):
            ids = [ids]
        ids = list(unique(int(i) for i in ids))
        if not ids:
            return RecordSet(cls)
        database = cls._database()
        records = {}
        for sub_ids in grouped_slice(ids, database.IN_MAX):
            sub_ids = list(sub_ids)
            rows = await cls._select(
                where=lambda t: Column(t, cls._primary_key).in_(sub_ids))
            for record in cls._instantiate(rows):
                records[record.id] = record
        return RecordSet(cls, [records[i] for i in ids if i in records])
