# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
import datetime

from dateutil.parser import isoparse

from .field import Field, null_empty


class Date(Field):
    '''
    Define a date field (``date``).
    '''
    _type = 'date'
    _sql_type = 'DATE'
    _py_type = datetime.date

    def sql_format(self, value):
        value = null_empty(value)
        if isinstance(value, str):
            value = isoparse(value)
        if isinstance(value, datetime.datetime):
            if value.time() != datetime.time():
                raise ValueError("Date field can not have time")
            value = value.date()
        return super().sql_format(value)

    def sql_parse(self, value):
        if value is None or value == '':
            return None
        if isinstance(value, datetime.datetime):
            return value.date()
        if isinstance(value, datetime.date):
            return value
        try:
            return isoparse(str(value)).date()
        except (TypeError, ValueError, OverflowError):
            return None


class DateTime(Field):
    '''
    Define a datetime field (``datetime``).
    '''
    _type = 'datetime'
    _sql_type = 'DATETIME'
    _py_type = datetime.datetime

    def sql_format(self, value):
        value = null_empty(value)
        if isinstance(value, str):
            value = isoparse(value)
        elif (isinstance(value, datetime.date)
                and not isinstance(value, datetime.datetime)):
            value = datetime.datetime.combine(value, datetime.time())
        return super().sql_format(value)

    def sql_parse(self, value):
        if value is None or value == '':
            return None
        if isinstance(value, datetime.datetime):
            return value
        if isinstance(value, datetime.date):
            return datetime.datetime.combine(value, datetime.time())
        try:
            return isoparse(str(value))
        except (TypeError, ValueError, OverflowError):
            return None
