# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.

import copy
from functools import total_ordering
from types import MappingProxyType

from modulerp.exceptions import RegistrationError
from modulerp.model import fields
from modulerp.pool import PoolBase

__all__ = ['Model']


@total_ordering
class Model(PoolBase):
    """
    Define a model in modulerp.
    """
    _table = None
    _order = [('id', 'ASC')]
    _rec_name = 'name'
    _pool = None
    _fields = MappingProxyType({})
    _defaults = MappingProxyType({})
    _primary_key = None

    id = fields.Integer('ID', primary_key=True, readonly=True)

    @classmethod
    def _field_names(cls):
        names = []
        for klass in reversed(cls.__mro__):
            for name, value in vars(klass).items():
                if (not name.startswith('_')
                        and isinstance(value, fields.Field)
                        and name not in names):
                    names.append(name)
        return [n for n in names if isinstance(getattr(cls, n), fields.Field)]

    @classmethod
    def __setup__(cls):
        super(Model, cls).__setup__()
        if not cls._table:
            cls._table = cls.__name__.replace('.', '_')

        # Copy the field definitions to not share them between compilations
        for field_name in cls._field_names():
            field = copy.deepcopy(getattr(cls, field_name))
            setattr(cls, field_name, field)

    @classmethod
    def __post_setup__(cls):
        super(Model, cls).__post_setup__()

        fields_ = {}
        for field_name in cls._field_names():
            field = getattr(cls, field_name)
            field.name = field_name
            fields_[field_name] = field

        primary_keys = [n for n, f in fields_.items() if f.primary_key]
        if len(primary_keys) != 1:
            raise RegistrationError(
                'Model "%s" must have exactly one primary key, found: %s'
                % (cls.__name__, ', '.join(primary_keys) or 'none'))
        cls._primary_key, = primary_keys

        defaults = {}
        for field_name, field in fields_.items():
            default_method = getattr(cls, 'default_%s' % field_name, None)
            if callable(default_method):
                defaults[field_name] = default_method
            elif field.default is not None:
                defaults[field_name] = field.default_value
        for attr in dir(cls):
            if (attr.startswith('default_') and attr != 'default_get'
                    and callable(getattr(cls, attr))
                    and attr[len('default_'):] not in fields_):
                raise RegistrationError(
                    'Default function defined in %s but field %s '
                    'does not exist!' % (cls.__name__, attr[len('default_'):]))

        for field_name, field in fields_.items():
            if (field.compute is not None
                    and not callable(getattr(cls, field.compute, None))):
                raise RegistrationError(
                    'Missing compute method "%s" of field "%s" on model '
                    '"%s"' % (field.compute, field_name, cls.__name__))

        for oexpr, otype in cls._order:
            if oexpr not in fields_ or fields_[oexpr].virtual:
                raise RegistrationError(
                    'Invalid order "%s" on model "%s"' % (oexpr, cls.__name__))
            if otype.upper() not in ('ASC', 'DESC'):
                raise RegistrationError(
                    'Invalid order direction "%s" on model "%s"'
                    % (otype, cls.__name__))

        cls._fields = MappingProxyType(fields_)
        cls._defaults = MappingProxyType(defaults)

    def __init__(self, **values):
        super(Model, self).__init__()
        object.__setattr__(self, '_values', {})
        for name, value in values.items():
            setattr(self, name, value)

    def __setattr__(self, name, value):
        if name != '_values' and name not in self._fields:
            raise AttributeError(
                '"%s" has no field "%s"' % (self.__name__, name))
        super(Model, self).__setattr__(name, value)

    def __int__(self):
        return int(self.id)

    def __str__(self):
        return '%s,%s' % (self.__name__, self.id)

    def __repr__(self):
        return '%s(%s)' % (self.__name__, ', '.join(
                '%s=%r' % (k, v) for k, v in self._values.items()))

    def __eq__(self, other):
        if not isinstance(other, Model):
            return NotImplemented
        elif self.id is None or other.id is None:
            return id(self) == id(other)
        return (self.__name__, self.id) == (other.__name__, other.id)

    def __lt__(self, other):
        if not isinstance(other, Model) or self.__name__ != other.__name__:
            return NotImplemented
        return (self.id or 0) < (other.id or 0)

    def __hash__(self):
        return hash((self.__name__, self.id))

    @classmethod
    def default_get(cls, fields_names):
        '''
        Return a dict with the default values for each field in fields_names.
        '''
        return {name: cls._defaults[name]()
            for name in fields_names if name in cls._defaults}

    def to_dict(self, fields_names=None):
        "Return the loaded values as a dictionary"
        if fields_names is None:
            return dict(self._values)
        return {name: self._values.get(name) for name in fields_names}
