# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
from . import sequence

__all__ = ['register']


def register(pool):
    pool.register(
        sequence.Sequence,
        module='ir')
