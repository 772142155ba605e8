# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.

from .boolean import Boolean
from .char import Char, Text
from .date import Date, DateTime
from .field import SQL_OPERATORS, Field
from .float import Float
from .integer import Integer
from .many2one import Many2One
from .numeric import Monetary
from .one2many import One2Many
from .selection import Selection

FIELD_TYPES = {
    'boolean': Boolean,
    'integer': Integer,
    'float': Float,
    'monetary': Monetary,
    'char': Char,
    'string': Char,
    'text': Text,
    'selection': Selection,
    'date': Date,
    'datetime': DateTime,
    'many2one': Many2One,
    'one2many': One2Many,
    }

__all__ = [
    SQL_OPERATORS, FIELD_TYPES, Field,
    Boolean, Integer, Char, Text, Float, Monetary, Date, DateTime,
    Selection, Many2One, One2Many]
