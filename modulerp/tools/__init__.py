# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
from .misc import grouped_slice, unique

__all__ = [
    grouped_slice,
    unique,
    ]
