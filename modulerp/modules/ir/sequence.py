# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
import logging
from string import Template

from modulerp import clock
from modulerp.exceptions import UserError
from modulerp.model import ModelSQL, fields

__all__ = ['Sequence']

logger = logging.getLogger(__name__)


class Sequence(ModelSQL):
    "Sequence"
    __name__ = 'ir.sequence'
    _order = [('code', 'ASC'), ('id', 'ASC')]

    name = fields.Char('Sequence Name', required=True)
    code = fields.Char('Sequence Code', required=True, select=True)
    active = fields.Boolean('Active', select=True)
    prefix = fields.Char('Prefix')
    suffix = fields.Char('Suffix')
    number_next = fields.Integer('Next Number', required=True)
    number_increment = fields.Integer('Increment Number', required=True)
    padding = fields.Integer('Number padding', required=True)

    @staticmethod
    def default_active():
        return True

    @staticmethod
    def default_number_next():
        return 1

    @staticmethod
    def default_number_increment():
        return 1

    @staticmethod
    def default_padding():
        return 0

    @classmethod
    def _process(cls, string, date=None):
        return Template(string or '').safe_substitute(
            **cls._get_substitutions(date))

    @classmethod
    def _get_substitutions(cls, date):
        '''
        Returns a dictionary with the keys and values of the substitutions
        available to format the sequence
        '''
        if not date:
            date = clock.today()
        return {
            'year': date.strftime('%Y'),
            'month': date.strftime('%m'),
            'day': date.strftime('%d'),
            }

    @classmethod
    async def _get_sequence(cls, code):
        sequences = await cls.search([
                ('code', '=', code),
                ('active', '=', True),
                ], limit=1)
        if not sequences:
            raise UserError('Missing sequence.',
                'No active sequence with code "%s".' % code)
        return sequences.first

    def _format(self, number, date=None):
        return '%s%s%s' % (
            self._process(self.prefix, date=date),
            '%%0%sd' % (self.padding or 0) % number,
            self._process(self.suffix, date=date),
            )

    @classmethod
    async def get_next(cls, code, date=None):
        '''
        Return the next value of the sequence with code and consume it.

        The counter is incremented by a single UPDATE so concurrent callers
        never get the same number.
        '''
        sequence = await cls._get_sequence(code)
        table = cls.__table__()
        await cls._database().execute(*table.update(
                [table.number_next],
                [table.number_next + table.number_increment],
                where=table.id == sequence.id))
        sequence, = await cls.browse([sequence.id])
        number = sequence.number_next - sequence.number_increment
        value = sequence._format(number, date=date)
        logger.debug('sequence %s: %s', code, value)
        return value

    @classmethod
    async def preview(cls, code, date=None):
        "Return the next value of the sequence without consuming it"
        sequences = await cls.search([
                ('code', '=', code),
                ('active', '=', True),
                ], limit=1)
        if not sequences:
            return None
        sequence = sequences.first
        return sequence._format(sequence.number_next, date=date)
