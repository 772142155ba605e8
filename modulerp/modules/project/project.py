# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
from modulerp import clock
from modulerp.exceptions import UserError
from modulerp.model import ModelSQL, fields

__all__ = ['Project', 'Task']

STATES = [
    ('draft', 'New'),
    ('open', 'In Progress'),
    ('pending', 'Pending'),
    ('done', 'Done'),
    ('cancelled', 'Cancelled'),
    ]


class Project(ModelSQL):
    "Project"
    __name__ = 'project.project'
    _order = [('sequence', 'ASC'), ('name', 'ASC'), ('id', 'ASC')]

    name = fields.Char('Name', required=True, select=True)
    description = fields.Text('Description')
    sequence = fields.Integer('Sequence', default=10)
    active = fields.Boolean('Active', default=True)
    start_date = fields.Date('Start Date')
    end_date = fields.Date('End Date')
    state = fields.Selection([
            ('draft', 'New'),
            ('open', 'In Progress'),
            ('pending', 'Pending'),
            ('close', 'Closed'),
            ('cancelled', 'Cancelled'),
            ], 'State', required=True, default='draft')
    allocated_hours = fields.Float('Allocated Hours', digits=(16, 2))
    tasks = fields.One2Many('project.task', 'project', 'Tasks',
        order=[('sequence', 'ASC'), ('id', 'ASC')])
    task_count = fields.Integer('Tasks', compute='get_task_count')
    create_date = fields.DateTime('Created at', readonly=True,
        default=clock.now)

    @classmethod
    async def open(cls, projects):
        return await cls.write(projects, {'state': 'open'})

    @classmethod
    async def close(cls, projects):
        return await cls.write(projects, {'state': 'close'})

    @classmethod
    async def get_task_count(cls, projects, name):
        Task = cls._pool.get('project.task')
        counts = {p.id: 0 for p in projects}
        for task in await Task.search([('project', 'in', list(counts))]):
            counts[task.project] += 1
        return counts


class Task(ModelSQL):
    "Task"
    __name__ = 'project.task'
    _order = [('priority', 'DESC'), ('sequence', 'ASC'), ('id', 'ASC')]

    name = fields.Char('Name', required=True, select=True)
    description = fields.Text('Description')
    project = fields.Many2One('project.project', 'Project', required=True,
        ondelete='CASCADE', select=True)
    sequence = fields.Integer('Sequence', default=10)
    priority = fields.Selection([
            ('0', 'Normal'),
            ('1', 'Important'),
            ], 'Priority', default='0')
    state = fields.Selection(STATES, 'State', required=True, default='draft')
    deadline = fields.Date('Deadline')
    assign_date = fields.DateTime('Assigned at')
    done_date = fields.DateTime('Done at')
    planned_hours = fields.Float('Planned Hours', digits=(16, 2), default=0)
    effective_hours = fields.Float('Effective Hours', digits=(16, 2),
        readonly=True, default=0)
    remaining_hours = fields.Float('Remaining Hours', digits=(16, 2),
        readonly=True, default=0)
    progress = fields.Float('Progress', digits=(16, 2), readonly=True,
        default=0)
    parent = fields.Many2One('project.task', 'Parent', ondelete='CASCADE')
    children = fields.One2Many('project.task', 'parent', 'Sub-tasks')
    create_date = fields.DateTime('Created at', readonly=True,
        default=clock.now)

    @classmethod
    async def start(cls, tasks):
        for task in tasks:
            if task.state not in ('draft', 'pending'):
                raise UserError(
                    'Task "%s" can not be started.' % task.name,
                    'Only new and pending tasks can be started.')
        return await cls.write(tasks, {
                'state': 'open',
                'assign_date': clock.now(),
                })

    @classmethod
    async def pend(cls, tasks):
        return await cls.write(tasks, {'state': 'pending'})

    @classmethod
    async def do(cls, tasks):
        return await cls.write(tasks, {
                'state': 'done',
                'done_date': clock.now(),
                'progress': 100,
                })

    @classmethod
    async def cancel(cls, tasks):
        return await cls.write(tasks, {'state': 'cancelled'})
