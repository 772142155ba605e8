# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.

__version__ = "1.2.0"
