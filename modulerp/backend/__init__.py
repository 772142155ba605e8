# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
import importlib
import urllib.parse

from modulerp.config import config

__all__ = [
    'name', 'Database', 'DatabaseIntegrityError',
    'DatabaseOperationalError', 'TableHandler']


name = urllib.parse.urlparse(config.get('database', 'uri', default='')).scheme

_module = importlib.import_module('modulerp.backend.%s' % name)

Database = _module.Database
DatabaseIntegrityError = _module.DatabaseIntegrityError
DatabaseOperationalError = _module.DatabaseOperationalError
TableHandler = _module.TableHandler
