# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
from . import fields
from .model import Model
from .modelsql import ModelSQL
from .modelstorage import ModelStorage, RecordSet

__all__ = ['Model', 'ModelStorage', 'ModelSQL', 'RecordSet', 'fields']
