"""
Finance controller - expenses, monthly KPIs and revenue history.

Months are passed as ``?month=YYYY-MM`` and default to the current month.
"""

from flask import Blueprint, request

from ..core.api_utils import (
    api_response,
    error_response,
    parse_date_param,
    parse_month_param,
    parse_number,
    parse_optional_int,
)
from ..db.session import SessionLocal
from ..repositories import AppointmentRepository, ExpenseRepository, ShopSettingsRepository
from ..schemas.dtos import ExpenseRequest
from ..services.finance_service import DEFAULT_HISTORY_MONTHS, FinanceService

finance_bp = Blueprint("finance", __name__, url_prefix="/api/finance")


def _build_service(db) -> FinanceService:
    return FinanceService(
        AppointmentRepository(db), ExpenseRepository(db), ShopSettingsRepository(db)
    )


def _expense_dict(expense) -> dict:
    return {
        "id": expense.id,
        "description": expense.description,
        "category": expense.category.value,
        "amount": expense.amount,
        "date": expense.date.isoformat(),
    }


@finance_bp.route("/expenses", methods=["GET"])
def list_expenses():
    db = SessionLocal()
    try:
        year, month = parse_month_param(request.args.get("month"))
        expenses = _build_service(db).list_expenses(year, month)
        return api_response(
            True, f"{len(expenses)} expenses", [_expense_dict(e) for e in expenses]
        )
    except Exception as e:
        return error_response(e)
    finally:
        db.close()


@finance_bp.route("/expenses", methods=["POST"])
def create_expense():
    """{"description", "category", "amount", "date": "YYYY-MM-DD"}"""
    db = SessionLocal()
    try:
        data = request.get_json(silent=True) or {}
        expense_request = ExpenseRequest(
            description=data.get("description") or "",
            category=data.get("category") or "Outros",
            amount=parse_number(data.get("amount"), "amount"),
            date=parse_date_param(data.get("date")),
        )
        expense = _build_service(db).add_expense(expense_request)
        return api_response(True, "Expense recorded", _expense_dict(expense), 201)
    except Exception as e:
        return error_response(e)
    finally:
        db.close()


@finance_bp.route("/expenses/<int:expense_id>", methods=["DELETE"])
def delete_expense(expense_id: int):
    db = SessionLocal()
    try:
        _build_service(db).delete_expense(expense_id)
        return api_response(True, "Expense deleted")
    except Exception as e:
        return error_response(e)
    finally:
        db.close()


@finance_bp.route("/report", methods=["GET"])
def monthly_report():
    db = SessionLocal()
    try:
        year, month = parse_month_param(request.args.get("month"))
        report = _build_service(db).monthly_report(year, month)
        return api_response(True, f"Report for {report.month}", report.to_dict())
    except Exception as e:
        return error_response(e)
    finally:
        db.close()


@finance_bp.route("/history", methods=["GET"])
def history():
    db = SessionLocal()
    try:
        year, month = parse_month_param(request.args.get("month"))
        months = parse_optional_int(request.args.get("months"), "months")
        points = _build_service(db).history(
            year, month, months if months is not None else DEFAULT_HISTORY_MONTHS
        )
        return api_response(
            True, f"{len(points)} months", [p.to_dict() for p in points]
        )
    except Exception as e:
        return error_response(e)
    finally:
        db.close()
