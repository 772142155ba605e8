# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
"""
Miscellaneous tools used by modulerp
"""
from itertools import islice


def grouped_slice(records, count):
    'Grouped slice'
    count = max(1, count)
    for i in range(0, len(records), count):
        yield islice(records, i, i + count)


def unique(iterable):
    "Return the items of iterable without duplicates, keeping the order"
    seen = set()
    for item in iterable:
        if item not in seen:
            seen.add(item)
            yield item
