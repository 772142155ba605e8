# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
from modulerp.model import fields
from modulerp.pool import PoolMeta

__all__ = ['Party']


class Party(metaclass=PoolMeta):
    __name__ = 'party.party'
    sale_orders = fields.One2Many('sale.order', 'party', 'Sales',
        order=[('sale_date', 'DESC'), ('id', 'DESC')])

    @classmethod
    async def archive(cls, parties):
        Sale = cls._pool.get('sale.order')
        sales = await Sale.search([
                ('party', 'in', [p.id for p in parties]),
                ('state', 'in', ['draft', 'quotation']),
                ])
        await Sale.cancel(sales)
        return await super().archive(parties)
