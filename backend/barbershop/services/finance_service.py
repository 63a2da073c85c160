"""
Finance service: expenses and monthly KPIs.

Month windows are half-open (``[first day, first day of next month)``) for
both appointments and expenses.
"""

from datetime import datetime, time
from typing import List, Optional

from ..core.exceptions import ResourceNotFoundError
from ..core.logging_config import get_logger
from ..domain.entities import Expense, ShopProfile
from ..domain.interfaces import (
    IAppointmentReader,
    IExpenseRepository,
    IShopSettingsRepository,
)
from ..schemas.dtos import ExpenseRequest, MonthlyHistoryPoint, MonthlyReportResponse
from . import report_helpers

logger = get_logger(__name__)

DEFAULT_HISTORY_MONTHS = 6
MAX_HISTORY_MONTHS = 24


class FinanceService:
    def __init__(
        self,
        appointment_repo: IAppointmentReader,
        expense_repo: IExpenseRepository,
        settings_repo: Optional[IShopSettingsRepository] = None,
    ) -> None:
        self.appointment_repo = appointment_repo
        self.expense_repo = expense_repo
        self.settings_repo = settings_repo

    def list_expenses(self, year: int, month: int) -> List[Expense]:
        return self.expense_repo.get_by_date_range(
            *report_helpers.month_bounds(year, month)
        )

    def add_expense(self, request: ExpenseRequest) -> Expense:
        request.validate()
        expense = self.expense_repo.create(request.to_domain())
        logger.info(
            "Expense recorded",
            extra={
                "context": {
                    "expense_id": expense.id,
                    "category": expense.category.value,
                    "amount": expense.amount,
                }
            },
        )
        return expense

    def delete_expense(self, expense_id: int) -> None:
        if not self.expense_repo.delete(expense_id):
            raise ResourceNotFoundError("Expense", expense_id)
        logger.info("Expense deleted", extra={"context": {"expense_id": expense_id}})

    def monthly_report(self, year: int, month: int) -> MonthlyReportResponse:
        """Revenue, clients served, ticket, expenses, profit and service rankings."""
        appointments = self._appointments_in_month(year, month)
        expenses = self.list_expenses(year, month)
        profile = self.settings_repo.get_profile() if self.settings_repo else ShopProfile()

        report = MonthlyReportResponse(
            month=report_helpers.month_label(year, month),
            total_revenue=report_helpers.realized_revenue(appointments),
            clients_served=len(report_helpers.completed(appointments)),
            total_expenses=sum(e.amount for e in expenses),
            monthly_goal=profile.monthly_goal,
            top_services=report_helpers.top_services(appointments),
            revenue_by_service=report_helpers.revenue_by_service(appointments),
        )
        logger.debug(
            "Monthly report computed",
            extra={
                "context": {
                    "month": report.month,
                    "appointments": len(appointments),
                    "expenses": len(expenses),
                }
            },
        )
        return report

    def history(
        self, year: int, month: int, months: int = DEFAULT_HISTORY_MONTHS
    ) -> List[MonthlyHistoryPoint]:
        """Revenue, clients served and expenses for ``months`` months ending
        with ``year``/``month``, oldest first."""
        if not 1 <= months <= MAX_HISTORY_MONTHS:
            raise ValueError(f"Months must be between 1 and {MAX_HISTORY_MONTHS}")

        points = []
        for offset in range(months - 1, -1, -1):
            y, m = report_helpers.shift_month(year, month, -offset)
            appointments = self._appointments_in_month(y, m)
            points.append(
                MonthlyHistoryPoint(
                    month=report_helpers.month_label(y, m),
                    revenue=report_helpers.realized_revenue(appointments),
                    clients_served=len(report_helpers.completed(appointments)),
                    expenses=sum(e.amount for e in self.list_expenses(y, m)),
                )
            )
        return points

    def _appointments_in_month(self, year: int, month: int):
        start, end = report_helpers.month_bounds(year, month)
        return self.appointment_repo.get_by_date_range(
            datetime.combine(start, time.min), datetime.combine(end, time.min)
        )
