from datetime import date

from finance_engine.breakdown import breakdown, category_total, daily_average, percent
from finance_engine.domain import Breakdown, CategorySlice, DateRange, Transaction, TransactionType

MARCH = DateRange(date(2024, 3, 1), date(2024, 3, 31))


def make_tx(id, amount, category, t_type=TransactionType.EXPENSE, ts="2024-03-05", excluded=False):
    return Transaction(
        id=id,
        amount=amount,
        type=t_type,
        category=category,
        date=ts,
        account_id="A",
        exclude_from_reports=excluded,
    )


def test_scenario_b_single_category():
    trans = (
        make_tx("t1", 1000, "Salary", TransactionType.INCOME, "2024-03-01"),
        make_tx("t2", 200, "Food"),
    )
    result = breakdown(trans, TransactionType.EXPENSE)

    assert result.rows == (CategorySlice("Food", 200, 100),)
    assert result.slices == (CategorySlice("Food", 200, 100),)
    assert result.total == 200


def test_rows_sorted_descending_with_stable_ties():
    trans = (
        make_tx("t1", 50, "Bills"),
        make_tx("t2", 100, "Rent"),
        make_tx("t3", 50, "Fun"),
        make_tx("t4", 25, "Rent"),
    )
    result = breakdown(trans, TransactionType.EXPENSE)

    assert [(r.label, r.value) for r in result.rows] == [("Rent", 125), ("Bills", 50), ("Fun", 50)]


def test_other_slice_collects_the_tail():
    trans = tuple(make_tx(f"t{i}", 100 - i * 10, f"Cat{i}") for i in range(8))
    result = breakdown(trans, TransactionType.EXPENSE, top_n=6)

    assert len(result.rows) == 8
    assert len(result.slices) == 7
    other = result.slices[-1]
    assert other.label == "Other"
    assert other.is_other
    assert other.value == 40 + 30
    assert sum(r.value for r in result.rows) == result.total


def test_other_slice_never_rounds_to_zero():
    trans = (make_tx("t1", 10000, "Rent"), make_tx("t2", 1, "Gum"))
    result = breakdown(trans, TransactionType.EXPENSE, top_n=1)

    assert result.rows[1].percentage == 0
    assert result.slices[-1] == CategorySlice("Other", 1, 1, is_other=True)


def test_no_other_slice_when_nothing_remains():
    trans = (make_tx("t1", 10, "A"), make_tx("t2", 20, "B"))
    result = breakdown(trans, TransactionType.EXPENSE, top_n=6)
    assert not any(s.is_other for s in result.slices)


def test_percentages_close_to_hundred():
    trans = (make_tx("t1", 1, "A"), make_tx("t2", 1, "B"), make_tx("t3", 1, "C"))
    result = breakdown(trans, TransactionType.EXPENSE)

    assert [r.percentage for r in result.rows] == [33, 33, 33]
    assert abs(sum(r.percentage for r in result.rows) - 100) <= len(result.rows)


def test_empty_breakdown():
    assert breakdown((), TransactionType.EXPENSE) == Breakdown()


def test_blank_categories_use_fallback_labels():
    trans = (
        make_tx("t1", 40, ""),
        make_tx("t2", 60, "  ", TransactionType.INCOME),
    )
    assert breakdown(trans, TransactionType.EXPENSE).rows[0].label == "Uncategorized Expense"
    assert breakdown(trans, TransactionType.INCOME).rows[0].label == "Uncategorized Income"


def test_excluded_and_out_of_range_skipped():
    trans = (
        make_tx("t1", 40, "Food"),
        make_tx("t2", 500, "Travel", excluded=True),
        make_tx("t3", 70, "Food", ts="2024-02-28"),
    )
    result = breakdown(trans, TransactionType.EXPENSE, date_range=MARCH)
    assert result.rows == (CategorySlice("Food", 40, 100),)


def test_breakdown_is_idempotent():
    trans = tuple(make_tx(f"t{i}", i + 1, f"C{i % 3}") for i in range(10))
    assert breakdown(trans, TransactionType.EXPENSE) == breakdown(trans, TransactionType.EXPENSE)


def test_percent_rounds_half_up():
    assert percent(1, 8) == 13
    assert percent(0, 0) == 0
    assert percent(5, 0) == 0


def test_category_total_and_daily_average():
    trans = (make_tx("t1", 40, "Food"), make_tx("t2", 22, "Food", ts="2024-03-30"), make_tx("t3", 5, "Bills"))
    total = category_total(trans, TransactionType.EXPENSE, "Food", MARCH)

    assert total == 62
    assert daily_average(total, MARCH) == 2
