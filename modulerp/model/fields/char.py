# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
from .field import Field


class Char(Field):
    '''
    Define a char field (``unicode``).
    '''
    _type = 'char'

    def __init__(self, string='', size=None, **kwargs):
        '''
        :param size: A integer. If set defines the maximum size of the values.
        '''
        super().__init__(string=string, **kwargs)
        self.size = size

    __init__.__doc__ += Field.__init__.__doc__

    @property
    def _sql_type(self):
        return 'VARCHAR(%s)' % self.size if self.size else 'VARCHAR'


class Text(Char):
    '''
    Define a text field (``unicode``).
    '''
    _type = 'text'

    @property
    def _sql_type(self):
        return 'TEXT'
