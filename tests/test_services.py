import csv
from decimal import Decimal

import pytest

from tracker_core.exceptions import InvalidAmountError, RecordNotFoundError, ValidationError


def test_add_assigns_sequential_ids_and_today(service):
    first = service.add("Lunch", "20")
    second = service.add("Coffee", "5")

    assert (first.id, second.id) == (1, 2)
    assert first.date == "2026-08-15"
    assert first.category == "Other"


def test_add_continues_after_highest_id(service):
    for description in ("a", "b", "c"):
        service.add(description, "1")
    service.delete(1)
    service.delete(3)

    assert service.add("d", "1").id == 3


def test_add_sanitises_description_and_rejects_bad_amount(service):
    expense = service.add("<script>x</script>Dinner", "30", "Food")
    assert expense.description == "xDinner"

    with pytest.raises(InvalidAmountError):
        service.add("Free sample", "0")
    with pytest.raises(ValidationError):
        service.add("<b></b>", "3")

    assert [e.id for e in service.list()] == [1]


def test_list_filters_by_category_case_insensitively(service):
    service.add("Lunch", "20", "Food")
    service.add("Bus", "3", "Transportation")
    service.add("Dinner", "25", "food")

    assert [e.description for e in service.list(category="FOOD")] == ["Lunch", "Dinner"]
    assert service.list(category="Fo") == []


def test_list_reflects_surviving_records_in_store_order(service):
    service.add("a", "1")
    service.add("b", "2")
    service.add("c", "3")
    service.update(2, description="b2")
    service.delete(1)
    service.add("d", "4")

    assert [(e.id, e.description) for e in service.list()] == [(2, "b2"), (3, "c"), (4, "d")]


def test_update_changes_only_supplied_fields(service):
    original = service.add("Lunch", "20", "Food")

    updated = service.update(original.id, amount=Decimal("22.5"))

    assert updated.amount == Decimal("22.5")
    assert updated.description == "Lunch"
    assert updated.category == "Food"
    assert updated.date == original.date
    assert service.list() == [updated]


def test_update_and_delete_unknown_id_raise_not_found(service, data_dir):
    service.add("Lunch", "20")
    before = (data_dir / "expenses.json").read_bytes()

    with pytest.raises(RecordNotFoundError, match="Expense with ID 999 not found"):
        service.update(999, description="x")
    with pytest.raises(RecordNotFoundError):
        service.delete(999)

    assert (data_dir / "expenses.json").read_bytes() == before


def test_summary_totals_and_category_breakdown(service):
    service.add("Lunch", "20")
    service.add("Coffee", "5")

    summary = service.summarize(by_category=True)

    assert summary.total == Decimal("25")
    assert summary.month is None
    assert summary.by_category == {"Other": Decimal("25")}


def test_summary_category_filter(service):
    service.add("Lunch", "20", "Food")
    service.add("Bus", "3", "Transportation")

    assert service.summarize(category="food").total == Decimal("20")


def test_month_filter_discards_category_filter(service):
    service.add("Lunch", "20", "Food")
    service.add("Bus", "3", "Transportation")

    summary = service.summarize(month=8, category="Food", by_category=True)

    assert summary.total == Decimal("23")
    assert list(summary.by_category) == ["Food", "Transportation"]


def test_month_summary_compares_against_budget(service):
    service.set_budget(8, "500")
    for amount in ("200", "250", "150"):
        service.add("Groceries", amount, "Food")

    summary = service.summarize(month=8)

    assert summary.total == Decimal("600")
    assert summary.budget == Decimal("500")
    assert summary.over_budget
    assert summary.budget_delta == Decimal("100")


def test_month_summary_remaining_budget_and_other_months(service):
    service.set_budget(8, "100")
    service.add("Lunch", "20")

    summary = service.summarize(month=8)
    assert not summary.over_budget
    assert summary.budget_delta == Decimal("80")

    july = service.summarize(month=7)
    assert july.total == Decimal("0")
    assert july.budget is None


def test_set_budget_overwrites(service, budget_store):
    service.set_budget(3, "100")
    service.set_budget(3, "250.5")

    assert budget_store.read_all() == {3: Decimal("250.5")}


def test_export_csv(service, tmp_path):
    service.add("Lunch", "20", "Food")
    service.add("Train", "12.5")
    target = tmp_path / "out.csv"

    assert service.export_csv(target) == 2

    text = target.read_text(encoding="utf-8")
    assert text.splitlines()[0] == "ID,Date,Category,Description,Amount"
    assert text.splitlines()[1] == '1,2026-08-15,Food,"Lunch",20'

    rows = list(csv.reader(text.splitlines()))
    assert len(rows) == 3
    assert rows[2] == ["2", "2026-08-15", "Other", "Train", "12.5"]


@pytest.mark.parametrize(
    "description, field",
    [
        ('Say "hi"', '"Say "hi""'),
        ("Bus, train", '"Bus, train"'),
    ],
)
def test_export_quotes_description_without_escaping(service, tmp_path, description, field):
    service.add(description, "1")
    target = tmp_path / "out.csv"

    service.export_csv(target)

    assert target.read_text(encoding="utf-8").splitlines()[1] == f"1,2026-08-15,Other,{field},1"


def test_add_after_stored_record_with_loose_date(service, data_dir):
    (data_dir / "expenses.json").write_text(
        '[{"id": 1, "date": "2026-8-1", "description": "Old", "amount": 4, "category": "Food"}]'
    )

    added = service.add("New", "3")

    assert added.id == 2
    assert [e.date for e in service.list()] == ["2026-8-1", "2026-08-15"]
    assert service.summarize(month=8).total == Decimal("7")


def test_export_empty_store_writes_header_only(service, tmp_path):
    target = tmp_path / "empty.csv"

    assert service.export_csv(target) == 0
    assert target.read_text(encoding="utf-8") == "ID,Date,Category,Description,Amount\n"
