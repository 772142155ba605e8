# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
from sql import Column, Literal, Null, Query, Expression, operators

from modulerp.model.exceptions import DomainValidationError


def null_empty(value):
    "Return None instead of the empty string"
    if isinstance(value, str) and not value:
        return None
    return value


SQL_OPERATORS = {
    '=': operators.Equal,
    '!=': operators.NotEqual,
    'like': operators.Like,
    'not like': operators.NotLike,
    'ilike': operators.ILike,
    'not ilike': operators.NotILike,
    'in': operators.In,
    'not in': operators.NotIn,
    '<=': operators.LessEqual,
    '>=': operators.GreaterEqual,
    '<': operators.Less,
    '>': operators.Greater,
    }


class Field(object):
    _type = None
    _sql_type = None
    _py_type = None

    def __init__(self, string='', help='', required=False, readonly=False,
            default=None, primary_key=False, select=False,
            compute=None, store=False):
        '''
        :param string: A string for label of the field.
        :param help: A multi-line help string.
        :param required: A boolean if ``True`` the field is required.
        :param readonly: A boolean if ``True`` the field is not editable in
            the user interface.
        :param default: The value used on creation when none is given, or a
            callable without argument returning it.
        :param primary_key: A boolean if ``True`` the field identifies the
            records of the model.
        :param select: An boolean. When True search will be optimized.
        :param compute: The name of a class method computing the values of
            the field. It is called with the records and the field name and
            returns a dictionary of value per id.
        :param store: A boolean. If ``True`` the computed values are saved in
            a column after each creation and modification.
        '''
        self.string = string
        self.help = help
        self.required = required
        self.readonly = readonly
        self.default = default
        self.primary_key = primary_key
        self.select = bool(select)
        self.compute = compute
        self.store = bool(store)
        self.name = None

    def __repr__(self):
        return '<%s %s>' % (self.__class__.__name__, self.name)

    def __get__(self, inst, cls):
        if inst is None:
            return self
        assert self.name is not None
        return inst._values.get(self.name)

    def __set__(self, inst, value):
        assert self.name is not None
        inst._values[self.name] = value

    @property
    def virtual(self):
        "True if the field has no column in the table"
        return (self._sql_type is None
            or (self.compute is not None and not self.store))

    def default_value(self):
        if callable(self.default):
            return self.default()
        return self.default

    def sql_format(self, value):
        "Convert value into its SQL representation"
        if isinstance(value, (Query, Expression)):
            return value
        if (self._py_type and value is not None
                and not isinstance(value, self._py_type)):
            value = self._py_type(value)
        return value

    def sql_parse(self, value):
        "Convert the value read from the database, it never raises"
        return value

    def sql_type(self, database):
        return database.sql_type(self._sql_type)

    def sql_column(self, table):
        return Column(table, self.name)

    def _domain_value(self, operator, value):
        if isinstance(value, Query):
            return value
        if operator in ('in', 'not in'):
            return [self.sql_format(v) for v in value if v is not None]
        elif operator in ('like', 'ilike', 'not like', 'not ilike'):
            return value
        else:
            return self.sql_format(value)

    def _domain_add_null(self, column, operator, value, expression):
        if operator in ('in', 'not in'):
            if (not isinstance(value, Query)
                    and any(v is None for v in value)):
                if operator == 'in':
                    expression |= (column == Null)
                else:
                    expression &= (column != Null)
        return expression

    def convert_domain(self, domain, table):
        "Return a SQL expression for the domain clause on table"
        name, operator, value = domain
        assert name == self.name
        if self.virtual:
            raise DomainValidationError(
                'Can not search on field "%s"' % name,
                'The field has no column.')
        try:
            Operator = SQL_OPERATORS[operator]
        except KeyError:
            raise DomainValidationError(
                'Invalid operator "%s" on field "%s"' % (operator, name))
        column = self.sql_column(table)
        if operator in ('in', 'not in'):
            if isinstance(value, str) or not hasattr(value, '__iter__'):
                raise DomainValidationError(
                    'Operator "%s" on field "%s" requires a list'
                    % (operator, name))
            value = list(value)
            formatted = self._domain_value(operator, value)
            if formatted:
                expression = Operator(column, formatted)
            else:
                expression = Literal(operator == 'not in')
            return self._domain_add_null(column, operator, value, expression)
        if value is None and operator in ('=', '!='):
            if operator == '=':
                return column == Null
            return column != Null
        expression = Operator(column, self._domain_value(operator, value))
        if operator == '!=':
            expression |= (column == Null)
        return expression
