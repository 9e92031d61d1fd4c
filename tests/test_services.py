from datetime import date
from pathlib import Path

import pytest

from finance_engine.domain import Account, Direction, Snapshot, Transaction, TransactionType
from finance_engine.services import ReportService
from finance_engine.transforms import load_snapshot

SEED = Path(__file__).resolve().parent.parent / "data" / "seed.json"
TODAY = date(2024, 3, 20)


@pytest.fixture
def service():
    return ReportService(load_snapshot(SEED), today=TODAY)


def test_period_report_all_accounts(service):
    report = service.period_report()
    summary = report["summary"]

    assert report["period"].key == "2024-03"
    assert summary.income == 4550
    assert summary.expense == pytest.approx(1577.5)
    assert summary.net == pytest.approx(2972.5)
    assert summary.opening_balance == pytest.approx(2763.6)
    assert summary.closing_balance == pytest.approx(summary.opening_balance + summary.net)

    labels = [row.label for row in report["expense"].rows]
    assert labels == ["Rent", "Utilities", "Dining", "Uncategorized Expense"]
    assert "Travel" not in labels
    assert len(report["daily_spending"]) == 31


def test_period_report_compares_with_previous_month(service):
    trend = service.period_report()["vs_previous"]

    assert trend.average == pytest.approx(1436.4)
    assert trend.direction is Direction.LIMIT
    assert not trend.favorable


def test_period_report_for_one_account(service):
    summary = service.period_report("2024-03", account_id="acc-checking")["summary"]

    assert summary.income == 4550
    assert summary.expense == 1470
    assert summary.net == 2280


def test_unknown_period_key_falls_back_to_latest(service):
    assert service.period_report("1999-01")["period"].key == "2024-03"


def test_category_report_defaults_to_largest_category(service):
    report = service.category_report(TransactionType.EXPENSE)

    assert report["category"] == "Rent"
    assert report["total"] == 1350
    assert report["trend"].average == 450
    assert report["trend"].delta == 900
    assert not report["trend"].favorable
    assert sum(total for _, total in report["weekly"]) == 1350


def test_category_report_for_named_category(service):
    report = service.category_report("expense", "Dining", "2024-03")

    assert report["total"] == 62.5
    assert report["daily_average"] == pytest.approx(62.5 / 31)


def test_weekly_report_nets_add_up(service):
    report = service.weekly_report("2024-03")

    assert len(report["weeks"]) == 5
    assert report["net"] == pytest.approx(2972.5)


def test_weekly_report_matches_period_net_for_an_account(service):
    weekly = service.weekly_report("2024-03", "acc-savings")
    period = service.period_report("2024-03", "acc-savings")

    assert weekly["net"] == pytest.approx(period["summary"].net)
    assert weekly["net"] != 0


def test_goal_report(service):
    (savings_goal, savings), (dining_goal, dining) = service.goal_report()

    assert savings_goal.id == "g-1"
    assert savings.percentage == 1
    assert savings.completed
    assert dining.value == 62.5
    assert dining.percentage == pytest.approx(0.25)


def test_balances(service):
    balances = service.balances()

    assert balances["accounts"]["acc-checking"] == pytest.approx(6630)
    assert balances["accounts"]["acc-savings"] == 5500
    assert balances["accounts"]["acc-card"] == pytest.approx(106.1)
    assert "acc-wallet" not in balances["accounts"]
    assert balances["total"] == pytest.approx(6630 + 5500 + 106.1 + 80)


def test_all_accounts_view_skips_other_currencies():
    snapshot = Snapshot(
        transactions=(
            Transaction("t1", 100, TransactionType.EXPENSE, "Food", "2024-03-02", "usd"),
            Transaction("t2", 900, TransactionType.EXPENSE, "Food", "2024-03-02", "eur"),
        ),
        accounts=(Account("usd", "Checking", currency="USD"), Account("eur", "Euro", currency="EUR")),
        currency="USD",
    )
    service = ReportService(snapshot, today=TODAY)

    assert service.period_report()["summary"].expense == 100
    assert service.period_report(account_id="eur")["summary"].expense == 900
