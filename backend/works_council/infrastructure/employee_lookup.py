"""Employee Lookup — read-only access to the employees table."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from works_council.models.employee import Employee


class SqlEmployeeLookup:
    """EmployeeLookup backed by the employees table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, employee_id: UUID) -> Employee | None:
        return await self.db.get(Employee, employee_id)

    async def get_all(self) -> list[Employee]:
        result = await self.db.execute(
            select(Employee).order_by(Employee.last_name, Employee.first_name),
        )
        return list(result.scalars().all())

    async def get_by_unit(self, unit_id: UUID) -> list[Employee]:
        result = await self.db.execute(
            select(Employee)
            .where(Employee.technical_business_unit_id == unit_id)
            .order_by(Employee.last_name, Employee.first_name),
        )
        return list(result.scalars().all())
