# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
import datetime
from decimal import Decimal

from modulerp import clock
from modulerp.exceptions import UserError
from modulerp.model.exceptions import RequiredValidationError
from modulerp.tests import test_modulerp
from modulerp.tests.test_modulerp import with_transaction


class IrTestCase(test_modulerp.ModuleTestCase):
    'Test Ir module'
    module = 'ir'

    def tearDown(self):
        clock.reset_clock()

    async def create_sequence(self, **values):
        Sequence = self.pool.get('ir.sequence')
        values.setdefault('name', 'Test')
        values.setdefault('code', 'test')
        return await Sequence.create(values)

    @with_transaction()
    async def test_get_next(self):
        'Test sequence values'
        Sequence = self.pool.get('ir.sequence')
        await self.create_sequence(padding=3, number_increment=2,
            prefix='A-', suffix='-Z')

        self.assertEqual(await Sequence.get_next('test'), 'A-001-Z')
        self.assertEqual(await Sequence.get_next('test'), 'A-003-Z')
        sequence, = await Sequence.search([('code', '=', 'test')])
        self.assertEqual(sequence.number_next, 5)

    @with_transaction()
    async def test_date_substitutions(self):
        'Test sequence prefix with date substitutions'
        clock.set_fixed(datetime.date(2024, 7, 9))
        Sequence = self.pool.get('ir.sequence')
        await self.create_sequence(prefix='${year}/${month}/',
            suffix='/${day}${unknown}')

        self.assertEqual(await Sequence.get_next('test'),
            '2024/07/1/09${unknown}')
        self.assertEqual(
            await Sequence.get_next('test', datetime.date(2025, 1, 2)),
            '2025/01/2/02${unknown}')

    @with_transaction()
    async def test_preview(self):
        'Test preview does not consume the sequence'
        Sequence = self.pool.get('ir.sequence')
        await self.create_sequence(padding=2)

        self.assertEqual(await Sequence.preview('test'), '01')
        self.assertEqual(await Sequence.preview('test'), '01')
        self.assertEqual(await Sequence.get_next('test'), '01')
        self.assertEqual(await Sequence.preview('test'), '02')
        self.assertIsNone(await Sequence.preview('unknown'))

    @with_transaction()
    async def test_missing_sequence(self):
        'Test missing and inactive sequences'
        Sequence = self.pool.get('ir.sequence')
        await self.create_sequence(active=False)

        with self.assertRaises(UserError):
            await Sequence.get_next('test')
        with self.assertRaises(UserError):
            await Sequence.get_next('unknown')


class PartyTestCase(test_modulerp.ModuleTestCase):
    'Test Party module'
    module = 'party'

    def tearDown(self):
        clock.reset_clock()

    @with_transaction()
    async def test_party(self):
        'Create party'
        clock.set_fixed(datetime.datetime(2024, 1, 15, 9, 30))
        Party = self.pool.get('party.party')

        party, = await Party.create({'name': 'Pam'})

        self.assertEqual(party.company_type, 'person')
        self.assertIs(bool(party.is_company), False)
        self.assertTrue(party.active)
        self.assertEqual(party.create_date,
            datetime.datetime(2024, 1, 15, 9, 30))

    @with_transaction()
    async def test_party_required_name(self):
        'Create party without name'
        Party = self.pool.get('party.party')

        with self.assertRaises(RequiredValidationError):
            await Party.create({})
        self.assertEqual(await Party.search_count([]), 0)

    @with_transaction()
    async def test_rec_name(self):
        'Test party name with its parent'
        Party = self.pool.get('party.party')
        company, = await Party.create({
                'name': 'ACME',
                'is_company': True,
                'company_type': 'company',
                })
        contact, = await Party.create({
                'name': 'Wile',
                'parent': company.id,
                })

        self.assertEqual(await company.get_rec_name(), 'ACME')
        self.assertEqual(await contact.get_rec_name(), 'Wile (ACME)')
        children = await company.resolve('children')
        self.assertEqual(children.ids, (contact.id,))

    @with_transaction()
    async def test_archive(self):
        'Test archive and unarchive'
        Party = self.pool.get('party.party')
        parties = await Party.create({'name': 'Pam'})

        await Party.archive(parties)
        self.assertEqual(
            await Party.search_count([('active', '=', False)]), 1)

        await Party.unarchive(parties)
        self.assertTrue(parties.first.active)


class ProjectTestCase(test_modulerp.ModuleTestCase):
    'Test Project module'
    module = 'project'

    def tearDown(self):
        clock.reset_clock()

    async def create_task(self, **values):
        Project = self.pool.get('project.project')
        Task = self.pool.get('project.task')
        project, = await Project.create({'name': 'Project'})
        values.setdefault('name', 'Task')
        values['project'] = project.id
        return await Task.create(values)

    @with_transaction()
    async def test_task_workflow(self):
        'Test task workflow'
        clock.set_fixed(datetime.datetime(2024, 3, 1, 8, 0))
        Task = self.pool.get('project.task')
        tasks = await self.create_task()
        task = tasks.first

        self.assertEqual(task.state, 'draft')
        await Task.start(tasks)
        self.assertEqual(task.state, 'open')
        self.assertEqual(task.assign_date, datetime.datetime(2024, 3, 1, 8))
        with self.assertRaises(UserError):
            await Task.start(tasks)

        await Task.pend(tasks)
        await Task.start(tasks)
        await Task.do(tasks)
        self.assertEqual(task.state, 'done')
        self.assertEqual(task.progress, 100)

    @with_transaction()
    async def test_task_count(self):
        'Test count tasks of projects'
        Project = self.pool.get('project.project')
        Task = self.pool.get('project.task')
        tasks = await self.create_task()
        await Task.create({'name': 'Other', 'project': tasks.first.project})
        empty = await Project.create({'name': 'Empty'})
        projects = await Project.browse([tasks.first.project, empty.first.id])

        self.assertEqual(await Project.read(projects.ids, ['task_count']), [
                {'id': tasks.first.project, 'task_count': 2},
                {'id': empty.first.id, 'task_count': 0},
                ])
        self.assertEqual(await Project.compute(projects, 'task_count'), {
                tasks.first.project: 2,
                empty.first.id: 0,
                })
        self.assertTrue(Project._fields['task_count'].virtual)

    @with_transaction()
    async def test_project_unlink_cascade(self):
        'Test deleting a project deletes its tasks'
        Project = self.pool.get('project.project')
        Task = self.pool.get('project.task')
        tasks = await self.create_task()

        await Project.unlink(await Project.browse([tasks.first.project]))

        self.assertEqual(await Task.search_count([]), 0)


class SaleTestCase(test_modulerp.ModuleTestCase):
    'Test Sale module'
    module = 'sale'

    def tearDown(self):
        clock.reset_clock()

    async def create_sale(self, name='Customer'):
        Party = self.pool.get('party.party')
        Sale = self.pool.get('sale.order')
        party, = await Party.create({'name': name})
        return party, await Sale.create({'party': party.id})

    def test_compute_subtotal(self):
        'Test compute subtotal'
        SaleLine = self.pool.get('sale.order.line')

        for quantity, unit_price, discount, result in [
                (3, Decimal('12.50'), 0, Decimal('37.50')),
                (3, Decimal('12.50'), 100, Decimal('0.00')),
                (2, Decimal('10'), 10, Decimal('18.00')),
                (1, Decimal('0.333'), 0, Decimal('0.33')),
                (None, None, None, Decimal('0.00')),
                ]:
            with self.subTest(quantity=quantity, unit_price=unit_price,
                    discount=discount):
                self.assertEqual(
                    SaleLine.compute_subtotal(quantity, unit_price, discount),
                    result)

    @with_transaction()
    async def test_sale_number(self):
        'Test sale number'
        clock.set_fixed(datetime.date(2024, 5, 2))
        _, sales = await self.create_sale()
        _, other_sales = await self.create_sale()

        self.assertEqual(sales.first.number, 'SO202400001')
        self.assertEqual(other_sales.first.number, 'SO202400002')
        self.assertEqual(sales.first.sale_date, datetime.date(2024, 5, 2))
        self.assertEqual(sales.first.state, 'draft')

    @with_transaction()
    async def test_sale_number_unique_after_unlink(self):
        'Test sale numbers are not reused after a deletion'
        Sale = self.pool.get('sale.order')
        clock.set_fixed(datetime.date(2024, 5, 2))
        _, sales = await self.create_sale()
        await self.create_sale()

        await Sale.unlink(sales)
        _, new_sales = await self.create_sale()

        self.assertEqual(new_sales.first.number, 'SO202400003')
        numbers = [s.number for s in await Sale.search([])]
        self.assertEqual(sorted(numbers), ['SO202400002', 'SO202400003'])

    @with_transaction()
    async def test_sale_amounts(self):
        'Test sale amounts follow the lines'
        Sale = self.pool.get('sale.order')
        SaleLine = self.pool.get('sale.order.line')
        _, sales = await self.create_sale()
        sale = sales.first

        lines = await SaleLine.create({
                'order': sale.id,
                'description': 'Product',
                'quantity': 3,
                'unit_price': Decimal('12.50'),
                })
        self.assertEqual(lines.first.subtotal, Decimal('37.50'))
        sale, = await Sale.browse([sale.id])
        self.assertEqual(sale.untaxed_amount, Decimal('37.50'))
        self.assertEqual(sale.tax_amount, Decimal('7.50'))
        self.assertEqual(sale.total_amount, Decimal('45.00'))

        await lines.write({'discount': 100})
        self.assertEqual(lines.first.subtotal, Decimal('0.00'))
        sale, = await Sale.browse([sale.id])
        self.assertEqual(sale.total_amount, Decimal(0))

        await lines.write({'discount': 0})
        await lines.unlink()
        sale, = await Sale.browse([sale.id])
        self.assertEqual(sale.untaxed_amount, Decimal(0))

    @with_transaction()
    async def test_sale_workflow(self):
        'Test sale workflow'
        Sale = self.pool.get('sale.order')
        _, sales = await self.create_sale()

        await Sale.quote(sales)
        self.assertEqual(sales.first.state, 'quotation')
        await Sale.confirm(sales)
        self.assertEqual(sales.first.state, 'confirmed')
        with self.assertRaises(UserError):
            await Sale.confirm(sales)

    @with_transaction()
    async def test_party_archive(self):
        'Test archive party cancels its draft sales'
        Party = self.pool.get('party.party')
        Sale = self.pool.get('sale.order')
        party, sales = await self.create_sale()
        _, confirmed = await self.create_sale()
        await Sale.write(confirmed, {'party': party.id})
        await Sale.confirm(confirmed)

        await Party.archive(await Party.browse([party.id]))

        sale, = await Sale.browse(sales.ids)
        self.assertEqual(sale.state, 'cancelled')
        sale, = await Sale.browse(confirmed.ids)
        self.assertEqual(sale.state, 'confirmed')
        party, = await Party.browse([party.id])
        self.assertFalse(party.active)
        self.assertEqual(len(await party.resolve('sale_orders')), 2)


class TimesheetTestCase(test_modulerp.ModuleTestCase):
    'Test Timesheet module'
    module = 'timesheet'

    def tearDown(self):
        clock.reset_clock()

    async def create_task(self, planned_hours=10):
        Party = self.pool.get('party.party')
        Project = self.pool.get('project.project')
        Task = self.pool.get('project.task')
        employee, = await Party.create({'name': 'Employee'})
        project, = await Project.create({'name': 'Project'})
        tasks = await Task.create({
                'name': 'Task',
                'project': project.id,
                'planned_hours': planned_hours,
                })
        return employee, tasks

    @with_transaction()
    async def test_line_project(self):
        'Test line project is filled from the task'
        Line = self.pool.get('timesheet.line')
        employee, tasks = await self.create_task()

        line, = await Line.create({
                'description': 'Work',
                'employee': employee.id,
                'task': tasks.first.id,
                'duration': 2,
                })

        self.assertEqual(line.project, tasks.first.project)
        self.assertFalse(line.approved)

    @with_transaction()
    async def test_task_hours(self):
        'Test task hours follow the timesheet lines'
        Task = self.pool.get('project.task')
        Line = self.pool.get('timesheet.line')
        employee, tasks = await self.create_task()

        lines = await Line.create({
                'description': 'Work',
                'employee': employee.id,
                'task': tasks.first.id,
                'duration': 4,
                })
        task, = await Task.browse(tasks.ids)
        self.assertEqual(task.effective_hours, 4)
        self.assertEqual(task.remaining_hours, 6)
        self.assertEqual(task.progress, 40)

        await Task.write([task], {'planned_hours': 8})
        self.assertEqual(task.remaining_hours, 4)
        self.assertEqual(task.progress, 50)

        await Line.unlink(lines)
        task, = await Task.browse(tasks.ids)
        self.assertEqual(task.effective_hours, 0)
        self.assertEqual(task.remaining_hours, 8)

    @with_transaction()
    async def test_project_timesheet_hours(self):
        'Test project hours are computed from the timesheet lines'
        Project = self.pool.get('project.project')
        Line = self.pool.get('timesheet.line')
        employee, tasks = await self.create_task()
        project_id = tasks.first.project
        other, = await Project.create({'name': 'Other'})
        for duration in [2, 1.5]:
            await Line.create({
                    'description': 'Work',
                    'employee': employee.id,
                    'task': tasks.first.id,
                    'duration': duration,
                    })

        self.assertEqual(
            await Project.read([project_id, other.id], ['timesheet_hours']), [
                {'id': project_id, 'timesheet_hours': 3.5},
                {'id': other.id, 'timesheet_hours': 0},
                ])

    @with_transaction()
    async def test_task_hours_overrun(self):
        'Test task hours when more time is spent than planned'
        Task = self.pool.get('project.task')
        Line = self.pool.get('timesheet.line')
        employee, tasks = await self.create_task(planned_hours=2)

        await Line.create({
                'description': 'Work',
                'employee': employee.id,
                'task': tasks.first.id,
                'duration': 3,
                })

        task, = await Task.browse(tasks.ids)
        self.assertEqual(task.remaining_hours, 0)
        self.assertEqual(task.progress, 100)

    @with_transaction()
    async def test_approve(self):
        'Test approve and refuse lines'
        clock.set_fixed(datetime.datetime(2024, 2, 5, 18, 0))
        Line = self.pool.get('timesheet.line')
        employee, _ = await self.create_task()
        lines = await Line.create({
                'description': 'Work',
                'employee': employee.id,
                })

        await Line.approve(lines)
        self.assertTrue(lines.first.approved)
        self.assertEqual(lines.first.approved_date,
            datetime.datetime(2024, 2, 5, 18, 0))

        await Line.refuse(lines)
        self.assertFalse(lines.first.approved)
        self.assertIsNone(lines.first.approved_date)

    @with_transaction()
    async def test_weekly_summary(self):
        'Test weekly summary'
        Line = self.pool.get('timesheet.line')
        employee, tasks = await self.create_task()
        week_start = datetime.date(2024, 2, 5)
        for date, duration in [
                (datetime.date(2024, 2, 4), 8),
                (datetime.date(2024, 2, 5), 2),
                (datetime.date(2024, 2, 5), 1.5),
                (datetime.date(2024, 2, 9), 4),
                (datetime.date(2024, 2, 12), 8),
                ]:
            await Line.create({
                    'description': 'Work',
                    'employee': employee.id,
                    'task': tasks.first.id,
                    'date': date,
                    'duration': duration,
                    })

        summary = await Line.weekly_summary(employee.id, week_start)

        self.assertEqual(summary['total'], 7.5)
        self.assertEqual(summary['by_day'], {
                datetime.date(2024, 2, 5): 3.5,
                datetime.date(2024, 2, 9): 4,
                })
        self.assertEqual(summary['by_project'],
            {tasks.first.project: 7.5})
        self.assertEqual(len(summary['lines']), 3)
