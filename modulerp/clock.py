# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
"""
Process-wide source of the current instant.

Default value producers of timestamp and date fields read the time from here
so that tests can freeze it::

    clock.set_fixed(datetime.datetime(2026, 1, 15, 9, 30))
    ...
    clock.reset_clock()
"""
import datetime
import logging

from dateutil.parser import isoparse

__all__ = ['now', 'today', 'set_clock', 'set_fixed', 'reset_clock']
logger = logging.getLogger(__name__)


def _wall_clock():
    return datetime.datetime.now()


_clock = _wall_clock


def now():
    "Return the current instant as a naive datetime"
    return _clock()


def today():
    return now().date()


def set_clock(clock):
    "Replace the instant provider by a zero-argument callable"
    global _clock
    assert callable(clock), 'clock must be callable'
    _clock = clock


def set_fixed(instant):
    if isinstance(instant, str):
        instant = isoparse(instant)
    elif (isinstance(instant, datetime.date)
            and not isinstance(instant, datetime.datetime)):
        instant = datetime.datetime.combine(instant, datetime.time())
    logger.debug('clock fixed at %s', instant)
    set_clock(lambda: instant)


def reset_clock():
    global _clock
    _clock = _wall_clock
