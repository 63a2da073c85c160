"""
Expense repository.

Month windows are half-open date ranges, ``[first day, first day of next
month)``.
"""

from datetime import date
from typing import List

from ..db.base import ExpenseModel
from ..domain.entities import Expense, ExpenseCategory
from ..domain.interfaces import IExpenseRepository


class ExpenseRepository(IExpenseRepository):
    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_by_date_range(self, start_date: date, end_date: date) -> List[Expense]:
        rows = (
            self.db.query(ExpenseModel)
            .filter(ExpenseModel.day >= start_date, ExpenseModel.day < end_date)
            .order_by(ExpenseModel.day.asc(), ExpenseModel.id.asc())
            .all()
        )
        return [self._to_domain(row) for row in rows]

    def create(self, expense: Expense) -> Expense:
        row = ExpenseModel(
            day=expense.date,
            amount=expense.amount,
            description=expense.description.strip(),
            category=expense.category.value,
        )
        try:
            self.db.add(row)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(row)
        return self._to_domain(row)

    def delete(self, expense_id: int) -> bool:
        row = self.db.get(ExpenseModel, expense_id)
        if row is None:
            return False
        try:
            self.db.delete(row)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return True

    @staticmethod
    def _to_domain(row: ExpenseModel) -> Expense:
        return Expense(
            id=row.id,
            description=row.description,
            category=ExpenseCategory(row.category),
            amount=float(row.amount),
            date=row.day,
        )
