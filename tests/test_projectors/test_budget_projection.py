"""
Tests for BudgetProjection
"""
import logging
from datetime import date, timedelta

import pytest

from budgie.domain.events import CreateAccount, CreateTarget, Transact, Transfer
from budgie.readmodels.projectors.budget import BudgetProjection, TargetBudget


def _target(name, on, value, cadence, priority=1):
    return CreateTarget(
        start_date=on,
        target_name=name,
        target_value=value,
        cadence=cadence,
        priority=priority,
    )


def _transact(on, amounts):
    return Transact(account_name="checking", date=on, itemized_amounts=amounts)


@pytest.fixture
def checking(store, start_date):
    store.append(CreateAccount(account_name="checking"))
    store.append(_transact(start_date, {"_": 2000}))
    return store


def test_grocery_scenario(checking, start_date):
    """Weekly 50 for groceries: debits lower the budget, refunds raise it"""
    def day(n):
        return start_date + timedelta(days=n)

    checking.append(_target("groceries", start_date, 50, "WEEKLY"))
    projection = BudgetProjection(checking)

    assert projection.budgets(day(0)) == {"groceries": 50}

    checking.append(_transact(day(2), {"groceries": -25}))
    assert projection.budgets(day(2)) == {"groceries": 25}
    assert projection.budgets(day(7)) == {"groceries": 75}

    checking.append(_transact(day(8), {"groceries": -100}))
    assert projection.budgets(day(8)) == {"groceries": -25}

    checking.append(_transact(day(9), {"groceries": 50}))
    assert projection.budgets(day(9)) == {"groceries": 25}


def test_future_transaction_counts_in_earlier_budget(checking, start_date):
    """Itemized amounts are netted over the whole log, whatever their date"""
    checking.append(_target("groceries", start_date, 50, "WEEKLY"))
    checking.append(_transact(date(2020, 12, 1), {"groceries": -30}))

    assert BudgetProjection(checking).budgets(start_date) == {"groceries": 20}


def test_rent_and_supplies(checking, start_date):
    checking.append(_target("rent", start_date, 800, "MONTHLY", priority=1))
    checking.append(_target("supplies", start_date, 100, "WEEKLY", priority=2))
    checking.append(_transact(start_date, {"rent": -800, "supplies": -50}))
    projection = BudgetProjection(checking)

    assert projection.budgets(start_date) == {"rent": 0, "supplies": 50}
    assert projection.expenditures_by_target(start_date) == {"rent": 800, "supplies": 50}


def test_expenditures_respect_as_of_and_refunds(checking, start_date):
    checking.append(_target("supplies", start_date, 100, "WEEKLY"))
    checking.append(_transact(start_date, {"supplies": -50, "_": -10}))
    checking.append(_transact(date(2020, 11, 2), {"supplies": 20}))
    projection = BudgetProjection(checking)

    assert projection.expenditures_by_target(start_date) == {"supplies": 50}
    assert projection.expenditures_by_target(date(2020, 11, 2)) == {"supplies": 30}
    assert projection.expenditures_by_target(date(2020, 10, 31)) == {}


def test_unknown_target_itemization_is_ignored(checking, start_date, caplog):
    checking.append(_target("rent", start_date, 800, "MONTHLY"))
    checking.append(_transact(start_date, {"vacation": -100}))

    with caplog.at_level(logging.WARNING):
        budgets = BudgetProjection(checking).budgets(start_date)

    assert budgets == {"rent": 800}
    assert "unknown target vacation" in caplog.text


def test_budget_summaries_sorted_by_name(checking, start_date):
    checking.append(_target("supplies", start_date, 100, "WEEKLY", priority=2))
    checking.append(_target("rent", start_date, 800, "MONTHLY", priority=1))

    summaries = BudgetProjection(checking).budget_summaries(start_date)

    assert summaries == [
        TargetBudget(name="rent", cadence="MONTHLY", priority=1, current_value=800, accrued=800),
        TargetBudget(name="supplies", cadence="WEEKLY", priority=2, current_value=100, accrued=100),
    ]


def test_historical_expenses(checking, start_date):
    projection = BudgetProjection(checking)
    end = date(2020, 11, 30)
    checking.append(CreateAccount(account_name="savings"))

    checking.append(_transact(date(2020, 11, 2), {"_": -100}))
    assert projection.historical_expenses(start_date, end) == {"_": 100}

    checking.append(_transact(date(2020, 11, 3), {"targetA": -300, "_": -200}))
    checking.append(Transfer(
        source_account="checking",
        destination_account="savings",
        value=500,
        date=date(2020, 11, 3),
    ))
    assert projection.historical_expenses(start_date, end) == {"_": 300, "targetA": 300}

    checking.append(_transact(date(2020, 11, 4), {"targetA": 100}))
    assert projection.historical_expenses(start_date, end) == {"_": 300, "targetA": 200}

    checking.append(_transact(date(2020, 12, 1), {"targetA": -999}))
    assert projection.historical_expenses(start_date, end) == {"_": 300, "targetA": 200}
