"""Read-only lookups used by the eligibility rules to build display text."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from pysmarthelp.models import Category, SubDepartment, User


@dataclass(frozen=True)
class LookupContext:
    """Name resolution over users, categories and sub-departments.

    Unknown references degrade to the caller's fallback label.
    """

    users: dict[str, User] = field(default_factory=dict)
    categories: dict[str, Category] = field(default_factory=dict)
    sub_departments: dict[str, SubDepartment] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        *,
        users: Iterable[User] = (),
        categories: Iterable[Category] = (),
        sub_departments: Iterable[SubDepartment] = (),
    ) -> LookupContext:
        return cls(
            users={u.id: u for u in users},
            categories={c.id: c for c in categories},
            sub_departments={sd.id: sd for sd in sub_departments},
        )

    def user(self, user_id: str | None) -> User | None:
        if user_id is None:
            return None
        return self.users.get(user_id)

    def supervisor_of(self, user_id: str | None) -> User | None:
        employee = self.user(user_id)
        if employee is None:
            return None
        return self.user(employee.supervisor_id)

    def username(self, user_id: str | None, fallback: str) -> str:
        user = self.user(user_id)
        return user.username if user is not None and user.username else fallback

    def category_name(self, category_id: str | None, fallback: str) -> str:
        category = self.categories.get(category_id) if category_id is not None else None
        return category.name if category is not None and category.name else fallback

    def sub_department_name(self, sub_department_id: str | None, fallback: str) -> str:
        sub_department = self.sub_departments.get(sub_department_id) if sub_department_id is not None else None
        return sub_department.name if sub_department is not None and sub_department.name else fallback

    def reports_of(self, supervisor_id: str) -> set[str]:
        """Identities of users reporting directly to *supervisor_id*."""
        return {u.id for u in self.users.values() if u.supervisor_id == supervisor_id}
