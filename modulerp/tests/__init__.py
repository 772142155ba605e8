# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.


def register(pool):
    from . import models
    models.register(pool, 'tests')
