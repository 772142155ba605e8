# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
from .field import Field, null_empty


class Float(Field):
    '''
    Define a float field (``float``).

    Values read from the database are always numbers: a missing value reads
    as ``0`` and a value which can not be converted reads as ``nan``.
    '''
    _type = 'float'
    _sql_type = 'FLOAT'
    _py_type = float

    def __init__(self, string='', digits=None, **kwargs):
        '''
        :param digits: a tuple of two integers defining the total
            of digits and the number of decimals of the float.
        '''
        super().__init__(string=string, **kwargs)
        if digits is not None:
            assert isinstance(digits, tuple) and len(digits) == 2, \
                'digits must be a tuple of two integers'
        self.digits = digits

    __init__.__doc__ += Field.__init__.__doc__

    def sql_format(self, value):
        return super().sql_format(null_empty(value))

    def sql_parse(self, value):
        if value is None:
            return 0
        if isinstance(value, float):
            return value
        try:
            return float(value)
        except (TypeError, ValueError):
            return float('nan')
