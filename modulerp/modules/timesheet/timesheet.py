# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
import datetime
from collections import OrderedDict, defaultdict

from modulerp import clock
from modulerp.model import ModelSQL, fields

__all__ = ['Line']


class Line(ModelSQL):
    "Timesheet Line"
    __name__ = 'timesheet.line'
    _order = [('date', 'DESC'), ('id', 'DESC')]

    description = fields.Char('Description', required=True)
    date = fields.Date('Date', required=True, select=True)
    employee = fields.Many2One('party.party', 'Employee', required=True,
        ondelete='RESTRICT', select=True)
    project = fields.Many2One('project.project', 'Project',
        ondelete='CASCADE')
    task = fields.Many2One('project.task', 'Task', ondelete='CASCADE',
        select=True)
    duration = fields.Float('Duration', digits=(16, 2), required=True,
        default=0)
    approved = fields.Boolean('Approved', default=False)
    approved_date = fields.DateTime('Approved at')
    create_date = fields.DateTime('Created at', readonly=True,
        default=clock.now)

    @staticmethod
    def default_date():
        return clock.today()

    @classmethod
    async def _update_tasks(cls, task_ids):
        Task = cls._pool.get('project.task')
        task_ids = sorted({i for i in task_ids if i})
        if task_ids:
            await Task.update_hours(await Task.browse(task_ids))

    @classmethod
    async def create(cls, values):
        values = values.copy()
        if values.get('task') and not values.get('project'):
            Task = cls._pool.get('project.task')
            tasks = await Task.browse([int(values['task'])])
            if tasks:
                values['project'] = tasks.first.project
        lines = await super().create(values)
        await cls._update_tasks([l.task for l in lines])
        return lines

    @classmethod
    async def write(cls, lines, values):
        task_ids = [l.task for l in lines]
        result = await super().write(lines, values)
        await cls._update_tasks(task_ids + [l.task for l in lines])
        return result

    @classmethod
    async def unlink(cls, lines):
        task_ids = [l.task for l in lines]
        await super().unlink(lines)
        await cls._update_tasks(task_ids)

    @classmethod
    async def approve(cls, lines):
        return await cls.write(lines, {
                'approved': True,
                'approved_date': clock.now(),
                })

    @classmethod
    async def refuse(cls, lines):
        return await cls.write(lines, {
                'approved': False,
                'approved_date': None,
                })

    @classmethod
    async def weekly_summary(cls, employee, week_start):
        '''
        Return the hours of employee for the 7 days starting at week_start
        as a dictionary with the total and the hours by day and by project.
        '''
        week_end = week_start + datetime.timedelta(days=7)
        lines = await cls.search([
                ('employee', '=', employee),
                ('date', '>=', week_start),
                ('date', '<', week_end),
                ], order=[('date', 'ASC'), ('id', 'ASC')])
        by_day = OrderedDict()
        by_project = defaultdict(float)
        for line in lines:
            by_day.setdefault(line.date, 0)
            by_day[line.date] += line.duration
            by_project[line.project] += line.duration
        return {
            'week_start': week_start,
            'total': sum(l.duration for l in lines),
            'by_day': dict(by_day),
            'by_project': dict(by_project),
            'lines': lines,
            }
