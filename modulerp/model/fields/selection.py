# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
from .field import Field


class Selection(Field):
    '''
    Define a selection field (``str``).
    '''
    _type = 'selection'
    _sql_type = 'VARCHAR'

    def __init__(self, selection, string='', **kwargs):
        '''
        :param selection: A list of tuple (value, string) of the allowed
            values.
        '''
        super().__init__(string=string, **kwargs)
        assert isinstance(selection, (list, tuple)), \
            'selection must be a list'
        self.selection = list(selection)

    __init__.__doc__ += Field.__init__.__doc__

    def values(self):
        return [value for value, _ in self.selection]

    def string_of(self, value):
        return dict(self.selection).get(value, '')
