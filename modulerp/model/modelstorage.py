# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
import inspect
from collections.abc import Sequence

from modulerp.model import fields
from modulerp.model.exceptions import (
    RequiredValidationError, SelectionValidationError, ValidationError)
from modulerp.model.model import Model

__all__ = ['ModelStorage', 'RecordSet']


def is_empty(value):
    return value is None or (isinstance(value, str) and not value)


class RecordSet(Sequence):
    '''
    An ordered sequence of records of a single model.

    It is the result of create, search and browse. write and unlink go
    through the model so the overrides of the compiled model apply.
    '''
    __slots__ = ('_model', '_records')

    def __init__(self, model, records=()):
        self._model = model
        self._records = tuple(records)

    @property
    def model(self):
        return self._model

    @property
    def ids(self):
        return tuple(r.id for r in self._records)

    @property
    def first(self):
        "The first record or None"
        return self._records[0] if self._records else None

    def __len__(self):
        return len(self._records)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return self.__class__(self._model, self._records[index])
        return self._records[index]

    def __iter__(self):
        return iter(self._records)

    def __eq__(self, other):
        if not isinstance(other, RecordSet):
            return NotImplemented
        return (self._model.__name__ == other._model.__name__
            and self.ids == other.ids)

    def __hash__(self):
        return hash((self._model.__name__, self.ids))

    def __repr__(self):
        return '%s(%s, %r)' % (
            self.__class__.__name__, self._model.__name__, self.ids)

    async def write(self, values):
        return await self._model.write(self, values)

    async def unlink(self):
        return await self._model.unlink(self)

    async def read(self, fields_names=None):
        return await self._model.read(self.ids, fields_names)


class ModelStorage(Model):
    """
    Define a model with storage capability in modulerp.
    """

    @classmethod
    async def create(cls, values):
        '''
        Create a record from values and return it in a record set.
        '''
        raise NotImplementedError

    @classmethod
    async def write(cls, records, values):
        '''
        Write values on records.
        Return True if at least one row was updated.
        '''
        raise NotImplementedError

    @classmethod
    async def unlink(cls, records):
        '''
        Delete records.
        '''
        raise NotImplementedError

    @classmethod
    async def search(cls, domain=None, offset=0, limit=None, order=None):
        '''
        Return a record set matching the domain.
        '''
        raise NotImplementedError

    @classmethod
    async def search_count(cls, domain=None):
        '''
        Return the number of records that match the domain.
        '''
        raise NotImplementedError

    @classmethod
    async def browse(cls, ids):
        '''
        Return a record set for the ids, in the same order
        '''
        raise NotImplementedError

    @classmethod
    async def read(cls, ids, fields_names=None):
        '''
        Return a list of dictionaries with the values of fields_names for
        each id. The primary key is always included, many2one fields give a
        dictionary with the id and the name of the target, one2many fields
        give the list of the related ids and computed fields are evaluated.
        '''
        if fields_names is None:
            fields_names = list(cls._fields.keys())
        for name in fields_names:
            if name not in cls._fields:
                raise ValidationError(
                    'Unknown field "%s" on model "%s"' % (name, cls.__name__))
        records = await cls.browse(ids)

        related = {}
        for name in fields_names:
            field = cls._fields[name]
            if field.compute is not None and field.virtual:
                related[name] = await cls.compute(records, name)
            elif isinstance(field, fields.One2Many):
                Target = field.get_target(cls)
                targets = await Target.search(
                    [(field.field, 'in', list(records.ids))],
                    order=field.order)
                related[name] = values = {id_: [] for id_ in records.ids}
                for target in targets:
                    values[target._values.get(field.field)].append(target.id)
            elif isinstance(field, fields.Many2One):
                related[name] = await cls._read_many2one(records, field)

        result = []
        for record in records:
            data = {cls._primary_key: record.id}
            for name in fields_names:
                if name in related:
                    data[name] = related[name].get(record.id)
                elif not cls._fields[name].virtual:
                    data[name] = record._values.get(name)
            result.append(data)
        return result

    @classmethod
    async def _read_many2one(cls, records, field):
        "Return the id and name of the target of each record"
        Target = field.get_target(cls)
        target_ids = {r._values.get(field.name) for r in records}
        target_ids.discard(None)
        names = {}
        rec_name = Target._fields.get(Target._rec_name)
        for target in await Target.browse(sorted(target_ids)):
            if rec_name is not None and not rec_name.virtual:
                names[target.id] = target._values.get(rec_name.name)
        values = {}
        for record in records:
            target_id = record._values.get(field.name)
            if target_id is None:
                values[record.id] = None
            else:
                values[record.id] = {
                    'id': target_id,
                    'name': names.get(target_id) or '#%s' % target_id,
                    }
        return values

    @classmethod
    async def compute(cls, records, name):
        '''
        Return the values of the computed field name for records as a
        dictionary of value per id.
        '''
        field = cls._fields[name]
        values = getattr(cls, field.compute)(records, name)
        if inspect.isawaitable(values):
            values = await values
        return {r.id: values.get(r.id) for r in records}

    async def resolve(self, name):
        '''
        Load the related records of the relation field name.
        '''
        field = self._fields.get(name)
        if field is None:
            raise AttributeError(
                '"%s" has no field "%s"' % (self.__name__, name))
        if not isinstance(field, (fields.Many2One, fields.One2Many)):
            raise TypeError('Field "%s" of "%s" is not a relation'
                % (name, self.__name__))
        return await field.resolve(self)

    @classmethod
    def _clean_values(cls, values):
        "Return a copy of values restricted to stored fields"
        result = {}
        for name, value in values.items():
            field = cls._fields.get(name)
            if field is None:
                raise ValidationError(
                    'Unknown field "%s" on model "%s"' % (name, cls.__name__))
            if field.primary_key or field.virtual or field.compute:
                continue
            result[name] = value
        return result

    @classmethod
    def _validate(cls, values, creation=True):
        '''
        Check required and selection fields in values.
        On creation, every required field must be present.
        '''
        for name, field in cls._fields.items():
            if field.primary_key or field.virtual or field.compute:
                continue
            if not creation and name not in values:
                continue
            value = values.get(name)
            if field.required and is_empty(value):
                raise RequiredValidationError(
                    'A value is required for field "%s" in "%s".'
                    % (field.string or name, cls.__name__))
            if (isinstance(field, fields.Selection)
                    and value is not None
                    and value not in field.values()):
                raise SelectionValidationError(
                    'The value "%s" of field "%s" in "%s" is not one of '
                    'the allowed options.'
                    % (value, field.string or name, cls.__name__),
                    ', '.join(map(str, field.values())))
