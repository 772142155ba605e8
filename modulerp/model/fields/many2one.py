# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
import logging

from .field import Field, null_empty

logger = logging.getLogger(__name__)


class Many2One(Field):
    '''
    Define many2one field (``int``).
    '''
    _type = 'many2one'
    _sql_type = 'INTEGER'
    _py_type = int

    def __init__(self, model_name, string='', ondelete='SET NULL', **kwargs):
        '''
        :param model_name: The name of the target model.
        :param ondelete: Define the behavior of the record when the target
            record is deleted. (``CASCADE``, ``RESTRICT``, ``SET NULL``)
            It is enforced by the foreign key of the table.
        '''
        if ondelete not in ('CASCADE', 'RESTRICT', 'SET NULL'):
            raise ValueError('Bad ondelete value: %s' % ondelete)
        super().__init__(string=string, **kwargs)
        self.model_name = model_name
        self.ondelete = ondelete

    __init__.__doc__ += Field.__init__.__doc__

    def sql_format(self, value):
        value = null_empty(value)
        if hasattr(value, '_values'):
            value = value.id
        return super().sql_format(value)

    def get_target(self, Model):
        return Model._pool.get(self.model_name)

    async def resolve(self, record):
        '''
        Return the record set of the target of record. A dangling reference
        reads as an empty record set.
        '''
        Target = self.get_target(record.__class__)
        value = record._values.get(self.name)
        if value is None:
            return await Target.browse([])
        targets = await Target.browse([value])
        if not targets:
            logger.debug('%s.%s of %s refers to missing %s %s',
                record.__name__, self.name, record.id, self.model_name, value)
        return targets
