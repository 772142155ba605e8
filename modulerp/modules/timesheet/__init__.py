# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
from . import project
from . import timesheet

__all__ = ['register']


def register(pool):
    pool.register(
        timesheet.Line,
        project.TaskExtension,
        project.ProjectExtension,
        module='timesheet')
