"""Category and sub-department models."""

from __future__ import annotations

from pysmarthelp.models._base import EntityId, OptionalId, SmartHelpBaseModel


class Category(SmartHelpBaseModel):
    id: EntityId
    name: str = ""


class SubDepartment(SmartHelpBaseModel):
    id: EntityId
    name: str = ""
    category_id: OptionalId = None
