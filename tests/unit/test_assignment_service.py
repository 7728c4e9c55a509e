"""Unit tests for AssignmentService."""

import pytest
from unittest.mock import AsyncMock, patch
from uuid import uuid4
from sqlalchemy.ext.asyncio import AsyncSession

from app.services.assignment_service import AssignmentService, plan_toggle
from tests.factories import make_customer, make_staff


def test_plan_toggle_assigns_unassigned_and_foreign_customers():
    free = make_customer("Free")
    elsewhere = make_customer("Elsewhere", assigned_to="uid-other")
    mine = make_customer("Mine", assigned_to="uid-me")

    plan = plan_toggle("uid-me", [free, elsewhere, mine])

    assert plan.assigned == [free.id, elsewhere.id]
    assert plan.unassigned == [mine.id]


def test_plan_toggle_lists_each_customer_once():
    customer = make_customer(assigned_to="uid-me")

    plan = plan_toggle("uid-me", [customer, customer])

    assert plan.unassigned == [customer.id]
    assert plan.assigned == []


@pytest.mark.asyncio
async def test_toggle_assignment_mixed_selection():
    db = AsyncMock(spec=AsyncSession)
    staff = make_staff()
    free = make_customer(assigned_to=None)
    mine = make_customer(assigned_to=staff.uid)

    with patch("app.services.assignment_service.StaffService.get_staff_by_uid", new_callable=AsyncMock) as mock_staff:
        mock_staff.return_value = staff
        with patch("app.services.assignment_service.CustomerService.get_customers_by_ids", new_callable=AsyncMock) as mock_customers:
            mock_customers.return_value = [free, mine]

            plan = await AssignmentService.toggle_assignment(db, staff.uid, [free.id, mine.id])

    assert plan.assigned == [free.id]
    assert plan.unassigned == [mine.id]
    assert db.execute.await_count == 2
    db.commit.assert_awaited_once()
    db.rollback.assert_not_awaited()


@pytest.mark.asyncio
async def test_toggle_assignment_requires_selection():
    db = AsyncMock(spec=AsyncSession)

    with pytest.raises(ValueError, match="at least one customer"):
        await AssignmentService.toggle_assignment(db, "uid-me", [])

    db.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_toggle_assignment_unknown_staff():
    db = AsyncMock(spec=AsyncSession)

    with patch("app.services.assignment_service.StaffService.get_staff_by_uid", new_callable=AsyncMock) as mock_staff:
        mock_staff.return_value = None
        with pytest.raises(ValueError, match="No staff member"):
            await AssignmentService.toggle_assignment(db, "uid-missing", [uuid4()])

    db.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_toggle_assignment_unknown_customer():
    db = AsyncMock(spec=AsyncSession)
    staff = make_staff()
    known = make_customer()

    with patch("app.services.assignment_service.StaffService.get_staff_by_uid", new_callable=AsyncMock) as mock_staff:
        mock_staff.return_value = staff
        with patch("app.services.assignment_service.CustomerService.get_customers_by_ids", new_callable=AsyncMock) as mock_customers:
            mock_customers.return_value = [known]
            with pytest.raises(ValueError, match="Unknown customers"):
                await AssignmentService.toggle_assignment(db, staff.uid, [known.id, uuid4()])

    db.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_toggle_assignment_rolls_back_whole_batch():
    db = AsyncMock(spec=AsyncSession)
    db.commit.side_effect = RuntimeError("connection lost")
    staff = make_staff()
    customers = [make_customer(), make_customer(assigned_to=staff.uid)]

    with patch("app.services.assignment_service.StaffService.get_staff_by_uid", new_callable=AsyncMock) as mock_staff:
        mock_staff.return_value = staff
        with patch("app.services.assignment_service.CustomerService.get_customers_by_ids", new_callable=AsyncMock) as mock_customers:
            mock_customers.return_value = customers
            with pytest.raises(RuntimeError):
                await AssignmentService.toggle_assignment(db, staff.uid, [c.id for c in customers])

    db.rollback.assert_awaited_once()
