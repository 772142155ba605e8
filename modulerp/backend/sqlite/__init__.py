# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.

from .database import (
    Database, DatabaseIntegrityError, DatabaseOperationalError)
from .table import TableHandler

__all__ = [
    Database, DatabaseIntegrityError, DatabaseOperationalError,
    TableHandler]
