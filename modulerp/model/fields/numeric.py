# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
from decimal import Decimal, InvalidOperation

from .float import Float


class Monetary(Float):
    '''
    Define a monetary field (``decimal``).
    '''
    _type = 'monetary'
    _sql_type = 'NUMERIC'
    _py_type = Decimal

    def __init__(self, string='', digits=(16, 2), **kwargs):
        super().__init__(string=string, digits=digits, **kwargs)

    def sql_format(self, value):
        if isinstance(value, float):
            value = Decimal(repr(value))
        return super().sql_format(value)

    def sql_parse(self, value):
        if value is None:
            return Decimal(0)
        if isinstance(value, Decimal):
            return value
        if isinstance(value, float):
            # Some drivers return the stored number as float
            value = repr(value)
        try:
            return Decimal(value)
        except (TypeError, ValueError, InvalidOperation):
            return Decimal('NaN')
