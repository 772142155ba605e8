# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
from decimal import Decimal

from modulerp import clock
from modulerp.exceptions import UserError
from modulerp.model import ModelSQL, fields

__all__ = ['Sale', 'SaleLine']

SUBTOTAL_FIELDS = {'quantity', 'unit_price', 'discount'}


class Sale(ModelSQL):
    "Sale"
    __name__ = 'sale.order'
    _order = [('sale_date', 'DESC'), ('id', 'DESC')]
    _tax_rate = Decimal('0.20')
    _sequence_code = 'sale.order'

    number = fields.Char('Number', required=True, select=True)
    reference = fields.Char('Reference')
    party = fields.Many2One('party.party', 'Party', required=True,
        ondelete='RESTRICT', select=True)
    sale_date = fields.Date('Sale Date')
    validity_date = fields.Date('Validity Date')
    state = fields.Selection([
            ('draft', 'Draft'),
            ('quotation', 'Quotation'),
            ('confirmed', 'Confirmed'),
            ('done', 'Done'),
            ('cancelled', 'Cancelled'),
            ], 'State', required=True, default='draft')
    payment_term = fields.Char('Payment Term')
    description = fields.Text('Description')
    lines = fields.One2Many('sale.order.line', 'order', 'Lines',
        order=[('sequence', 'ASC'), ('id', 'ASC')])
    untaxed_amount = fields.Monetary('Untaxed', readonly=True)
    tax_amount = fields.Monetary('Tax', readonly=True)
    total_amount = fields.Monetary('Total', readonly=True)
    create_date = fields.DateTime('Created at', readonly=True,
        default=clock.now)

    @staticmethod
    def default_sale_date():
        return clock.today()

    @staticmethod
    def default_untaxed_amount():
        return Decimal(0)

    @staticmethod
    def default_tax_amount():
        return Decimal(0)

    @staticmethod
    def default_total_amount():
        return Decimal(0)

    @classmethod
    async def get_number(cls):
        "Return the next number from the sale sequence"
        Sequence = cls._pool.get('ir.sequence')
        if await Sequence.preview(cls._sequence_code) is None:
            await Sequence.create({
                    'name': 'Sale',
                    'code': cls._sequence_code,
                    'prefix': 'SO${year}',
                    'padding': 5,
                    })
        return await Sequence.get_next(cls._sequence_code, clock.today())

    @classmethod
    async def create(cls, values):
        values = values.copy()
        if not values.get('number'):
            values['number'] = await cls.get_number()
        return await super().create(values)

    @classmethod
    async def quote(cls, sales):
        return await cls.write(sales, {'state': 'quotation'})

    @classmethod
    async def confirm(cls, sales):
        for sale in sales:
            if sale.state not in ('draft', 'quotation'):
                raise UserError(
                    'Sale "%s" can not be confirmed.' % sale.number,
                    'Only draft sales and quotations can be confirmed.')
        result = await cls.write(sales, {'state': 'confirmed'})
        await cls.update_amounts(sales)
        return result

    @classmethod
    async def cancel(cls, sales):
        return await cls.write(sales, {'state': 'cancelled'})

    @classmethod
    async def draft(cls, sales):
        return await cls.write(sales, {'state': 'draft'})

    @classmethod
    async def update_amounts(cls, sales):
        '''
        Recompute the amounts of the sales from their lines
        '''
        Line = cls._pool.get('sale.order.line')
        for sale in sales:
            lines = await Line.search([('order', '=', sale.id)])
            untaxed_amount = sum((l.subtotal for l in lines), Decimal(0))
            tax_amount = (untaxed_amount * cls._tax_rate).quantize(
                Decimal('0.01'))
            await cls.write([sale], {
                    'untaxed_amount': untaxed_amount,
                    'tax_amount': tax_amount,
                    'total_amount': untaxed_amount + tax_amount,
                    })


class SaleLine(ModelSQL):
    "Sale Line"
    __name__ = 'sale.order.line'
    _order = [('order', 'ASC'), ('sequence', 'ASC'), ('id', 'ASC')]

    order = fields.Many2One('sale.order', 'Sale', required=True,
        ondelete='CASCADE', select=True)
    sequence = fields.Integer('Sequence', default=10)
    description = fields.Text('Description', required=True)
    quantity = fields.Float('Quantity', digits=(16, 2), default=1)
    unit = fields.Char('Unit', default='Unit')
    unit_price = fields.Monetary('Unit Price', default=Decimal(0))
    discount = fields.Float('Discount (%)', digits=(16, 2), default=0)
    subtotal = fields.Monetary('Subtotal', readonly=True)
    create_date = fields.DateTime('Created at', readonly=True,
        default=clock.now)

    @staticmethod
    def compute_subtotal(quantity, unit_price, discount):
        '''
        Return quantity * unit_price * (1 - discount / 100) rounded to the
        cent.
        '''
        quantity = Decimal(str(quantity or 0))
        unit_price = Decimal(str(unit_price or 0))
        discount = Decimal(str(discount or 0))
        subtotal = quantity * unit_price * (1 - discount / 100)
        return subtotal.quantize(Decimal('0.01'))

    @classmethod
    async def _update_sales(cls, sale_ids):
        Sale = cls._pool.get('sale.order')
        sale_ids = [i for i in set(sale_ids) if i]
        if sale_ids:
            await Sale.update_amounts(await Sale.browse(sorted(sale_ids)))

    @classmethod
    async def create(cls, values):
        values = values.copy()
        missing = [f for f in SUBTOTAL_FIELDS if f not in values]
        subtotal_values = dict(cls.default_get(missing), **values)
        values['subtotal'] = cls.compute_subtotal(
            subtotal_values.get('quantity'),
            subtotal_values.get('unit_price'),
            subtotal_values.get('discount'))
        lines = await super().create(values)
        await cls._update_sales([l.order for l in lines])
        return lines

    @classmethod
    async def write(cls, lines, values):
        sale_ids = [l.order for l in lines]
        if not SUBTOTAL_FIELDS & set(values):
            result = await super().write(lines, values)
        else:
            result = False
            for line in lines:
                line_values = values.copy()
                line_values['subtotal'] = cls.compute_subtotal(
                    values.get('quantity', line.quantity),
                    values.get('unit_price', line.unit_price),
                    values.get('discount', line.discount))
                result |= await super().write([line], line_values)
        await cls._update_sales(sale_ids + [l.order for l in lines])
        return result

    @classmethod
    async def unlink(cls, lines):
        sale_ids = [l.order for l in lines]
        await super().unlink(lines)
        await cls._update_sales(sale_ids)
