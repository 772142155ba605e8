# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
from .field import Field, null_empty


class Integer(Field):
    '''
    Define an integer field (``int``).
    '''
    _type = 'integer'
    _sql_type = 'INTEGER'
    _py_type = int

    def sql_format(self, value):
        return super().sql_format(null_empty(value))

    def sql_parse(self, value):
        if value is None:
            return 0
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                return int(value)
            except ValueError:
                pass
        try:
            value = float(value)
        except (TypeError, ValueError):
            return float('nan')
        if value.is_integer():
            return int(value)
        return value
