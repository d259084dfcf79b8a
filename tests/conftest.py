from __future__ import annotations

import pytest

from pysmarthelp.models import Actor, Category, SubDepartment, User, UserRole
from pysmarthelp.rules.context import LookupContext


def _make_users() -> list[User]:
    return [
        User(id="admin-1", username="alice", role=UserRole.ADMIN),
        User(
            id="sup-1",
            username="sam",
            role=UserRole.SUPERVISOR,
            assigned_category_ids=["billing"],
        ),
        User(
            id="sup-2",
            username="sara",
            role=UserRole.SUPERVISOR,
            admin_permissions=["view_all_dashboards", "approve_staff_requests"],
            assigned_category_ids=["shipping"],
        ),
        User(
            id="emp-1",
            username="eve",
            role=UserRole.EMPLOYEE,
            permissions=["handle_tickets"],
            assigned_sub_department_ids=["sd-1"],
            supervisor_id="sup-1",
        ),
        User(
            id="emp-2",
            username="ed",
            role=UserRole.EMPLOYEE,
            assigned_sub_department_ids=["sd-1"],
            supervisor_id="sup-2",
        ),
        User(id="drv-1", username="dan", role=UserRole.DRIVER, current_speed=0),
    ]


@pytest.fixture
def users() -> list[User]:
    return _make_users()


@pytest.fixture
def actors(users: list[User]) -> dict[str, Actor]:
    return {u.id: Actor.from_user(u) for u in users}


@pytest.fixture
def ctx(users: list[User]) -> LookupContext:
    return LookupContext.build(
        users=users,
        categories=[Category(id="billing", name="Billing"), Category(id="shipping", name="Shipping")],
        sub_departments=[SubDepartment(id="sd-1", name="Refunds", category_id="billing")],
    )
