# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
from modulerp import clock
from modulerp.model import ModelSQL, fields

__all__ = ['Party']


class Party(ModelSQL):
    "Party"
    __name__ = 'party.party'
    _order = [('name', 'ASC'), ('id', 'ASC')]

    name = fields.Char('Name', required=True, select=True)
    email = fields.Char('E-Mail')
    phone = fields.Char('Phone')
    vat = fields.Char('VAT Number', size=32)
    is_company = fields.Boolean('Company')
    company_type = fields.Selection([
            ('person', 'Person'),
            ('company', 'Company'),
            ], 'Type', required=True)
    parent = fields.Many2One('party.party', 'Parent', select=True)
    children = fields.One2Many('party.party', 'parent', 'Contacts')
    active = fields.Boolean('Active', select=True)
    comment = fields.Text('Notes')
    create_date = fields.DateTime('Created at', readonly=True)

    @staticmethod
    def default_is_company():
        return False

    @staticmethod
    def default_company_type():
        return 'person'

    @staticmethod
    def default_active():
        return True

    @staticmethod
    def default_create_date():
        return clock.now()

    async def get_rec_name(self):
        if self.is_company or self.parent is None:
            return self.name
        parent = await self.resolve('parent')
        if not parent:
            return self.name
        return '%s (%s)' % (self.name, parent.first.name)

    @classmethod
    async def archive(cls, parties):
        return await cls.write(parties, {'active': False})

    @classmethod
    async def unarchive(cls, parties):
        return await cls.write(parties, {'active': True})
