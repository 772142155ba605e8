# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
from modulerp.model import fields
from modulerp.pool import Extension, call_previous

__all__ = ['TaskExtension', 'ProjectExtension']


async def write(cls, tasks, values):
    result = await call_previous(tasks, values)
    if 'planned_hours' in values:
        await cls.update_hours(tasks)
    return result


async def update_hours(cls, tasks):
    "Recompute the effective and remaining hours of tasks from timesheets"
    Line = cls._pool.get('timesheet.line')
    for task in tasks:
        lines = await Line.search([('task', '=', task.id)])
        effective = sum(l.duration for l in lines)
        planned = task.planned_hours or 0
        if planned > 0:
            progress = min(100, effective / planned * 100)
        else:
            progress = 0
        await cls.write([task], {
                'effective_hours': effective,
                'remaining_hours': max(0, planned - effective),
                'progress': progress,
                })


TaskExtension = Extension('project.task',
    fields={
        'timesheet_lines': fields.One2Many(
            'timesheet.line', 'task', 'Timesheet Lines'),
        },
    methods={
        'write': classmethod(write),
        'update_hours': classmethod(update_hours),
        })


async def get_timesheet_hours(cls, projects, name):
    Line = cls._pool.get('timesheet.line')
    hours = {p.id: 0 for p in projects}
    for line in await Line.search([('project', 'in', list(hours))]):
        hours[line.project] += line.duration
    return hours


ProjectExtension = Extension('project.project',
    fields={
        'timesheet_lines': fields.One2Many(
            'timesheet.line', 'project', 'Timesheet Lines'),
        'timesheet_hours': fields.Float('Timesheet Hours', digits=(16, 2),
            compute='get_timesheet_hours'),
        },
    methods={
        'get_timesheet_hours': classmethod(get_timesheet_hours),
        })
