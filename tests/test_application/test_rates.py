"""
Tests for spending rate estimates
"""
from datetime import date

from budgie.application.bookkeeping import (
    CreateAccountUseCase,
    CreditAccountUseCase,
    DebitAccountUseCase,
)
from budgie.application.budgeting import CreateTargetUseCase
from budgie.application.rates import SpendingRateService, months_spanned


def test_months_spanned():
    assert months_spanned(date(2020, 11, 15), date(2020, 11, 20)) == 1
    assert months_spanned(date(2020, 11, 30), date(2020, 12, 1)) == 2
    assert months_spanned(date(2020, 11, 1), date(2021, 10, 31)) == 12
    assert months_spanned(date(2021, 1, 1), date(2020, 1, 1)) == 1


def test_projected_rate_weekly_target(store, start_date):
    CreateTargetUseCase(store).execute(start_date, "groceries", 100, "WEEKLY", priority=1)

    # 53 weekly ticks fall in the year starting 2020-11-01
    assert SpendingRateService(store).projected_spending_rate(start_date) == 442


def test_projected_rate_monthly_targets(store, start_date):
    CreateTargetUseCase(store).execute(start_date, "rent", 800, "MONTHLY", priority=2)
    CreateTargetUseCase(store).execute(start_date, "food", 200, "MONTHLY", priority=1)

    assert SpendingRateService(store).projected_spending_rate(start_date) == 1000


def test_projected_rate_without_targets(store, start_date):
    assert SpendingRateService(store).projected_spending_rate(start_date) == 0


def test_historical_expense_rate(store, start_date):
    CreateAccountUseCase(store).execute("checking")
    CreditAccountUseCase(store).execute("checking", 5000, start_date)
    DebitAccountUseCase(store).execute("checking", {"groceries": 300}, date(2020, 11, 2))
    DebitAccountUseCase(store).execute("checking", {"groceries": 300, "_": 1000}, date(2020, 12, 5))
    CreditAccountUseCase(store).execute("checking", {"groceries": 50}, date(2020, 12, 6))

    rate = SpendingRateService(store).historical_expense_rate(start_date, date(2020, 12, 31))

    assert rate == 275
