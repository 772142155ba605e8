# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
from .field import Field


class One2Many(Field):
    '''
    Define one2many field (``list``).

    It has no column, the records are those of the target whose many2one
    field points to the record.
    '''
    _type = 'one2many'

    def __init__(self, model_name, field, string='', order=None, **kwargs):
        '''
        :param model_name: The name of the target model.
        :param field: The name of the field that handle the reverse many2one
        :param order: a list of tuples that are constructed like this:
            ``('field name', 'DESC|ASC')``
            allowing to specify the order of result
        '''
        super().__init__(string=string, **kwargs)
        self.model_name = model_name
        self.field = field
        self.order = order

    __init__.__doc__ += Field.__init__.__doc__

    def sql_format(self, value):
        raise NotImplementedError('%s has no column' % self)

    def get_target(self, Model):
        return Model._pool.get(self.model_name)

    async def resolve(self, record):
        Target = self.get_target(record.__class__)
        if record.id is None:
            return await Target.browse([])
        return await Target.search(
            [(self.field, '=', record.id)], order=self.order)
