from datetime import date

import pytest
from sprint_report.lib.filters import (
    DateBetween,
    Predicate,
    assignee_is_not_empty,
    equal_sprint_name,
    narrow,
    status_equal,
    status_not_equal,
    tested_by_empty,
    tested_by_not_empty,
    updated_between,
)

from conftest import frame, record

START, END = date(2022, 10, 1), date(2022, 10, 14)
in_window = updated_between("Updated", START, END, "%d/%m/%Y")

def test_emptiness_predicates():
    assert assignee_is_not_empty("Assignee")({"Assignee": "Alice"})
    assert not assignee_is_not_empty("Assignee")({"Assignee": ""})
    assert tested_by_empty("Tested By")({"Tested By": ""})
    assert tested_by_empty("Tested By")({"Tested By": None})
    assert not tested_by_not_empty("Tested By")({"Tested By": None})
    # whitespace is a value, not emptiness
    assert tested_by_not_empty("Tested By")({"Tested By": " "})

def test_equality_is_exact():
    done = status_equal("Status", "Done")
    assert done({"Status": "Done"})
    assert not done({"Status": "done"})
    assert not done({"Status": "Done "})
    assert status_not_equal("Status", "Ready To QA")({"Status": "Ready to QA"})
    assert not status_not_equal("Status", "Ready To QA")({"Status": "Ready To QA"})
    assert equal_sprint_name("Sprint", "Sprint 18")({"Sprint": "Sprint 18"})
    assert not equal_sprint_name("Sprint", "Sprint 18")({"Sprint": "Sprint 17"})

@pytest.mark.parametrize("value,expected", [
    ("01/10/2022", True),   # start bound
    ("14/10/2022", True),   # end bound
    ("14/10/2022 23:59", True),
    ("07/10/2022 9:15 AM", True),
    ("30/09/2022", False),
    ("15/10/2022", False),
    ("", False),
    ("not a date", False),
    ("2022-10-07", False),
    ("32/10/2022", False),
    ("110/10/2022", False),
    ("05/10/20221", False),
    ("ref 05/10/2022", False),
])
def test_updated_between(value, expected):
    assert in_window({"Updated": value}) is expected

def test_updated_between_month_first():
    pred = DateBetween("Updated", START, END, "%m/%d/%Y")
    assert pred({"Updated": "10/14/2022"})
    assert not pred({"Updated": "14/10/2022"})

def test_month_first_rejects_day_first_cells():
    # April..October: a lenient parse of "14/10/2022" would land in April
    pred = DateBetween("Updated", date(2022, 4, 1), date(2022, 10, 31), "%m/%d/%Y")
    assert pred({"Updated": "04/14/2022"})
    assert not pred({"Updated": "14/10/2022"})
    assert not pred({"Updated": "10/140/2022"})

def test_predicate_base_is_abstract():
    with pytest.raises(TypeError):
        Predicate()

def test_mask_agrees_with_record_call():
    df = frame(
        record("A", assignee="Alice", updated="01/10/2022"),
        record("B", assignee="", updated="14/10/2022 10:00"),
        record("C", assignee="Bob", updated="garbage"),
        record("D", assignee="Bob", updated="20/10/2022"),
    )
    for pred in (in_window, assignee_is_not_empty("Assignee"), status_equal("Status", "Done")):
        mask = pred.mask(df)
        assert list(mask) == [pred(rec) for rec in df.to_dict(orient="records")]

def test_narrow_applies_in_order():
    df = frame(
        record("A", assignee="Alice", status="Done"),
        record("B", assignee="", status="Done"),
        record("C", assignee="Bob", status="Backlog", updated="01/01/2021"),
        record("D", assignee="Bob", status="Backlog"),
    )
    out = narrow(df, in_window, assignee_is_not_empty("Assignee"), status_not_equal("Status", "Done"))
    assert list(out["Issue Key"]) == ["D"]
    assert narrow(df, status_equal("Status", "Nope"), in_window).empty
    assert narrow(df) is df

def test_predicates_are_values():
    assert status_equal("Status", "Done") == status_equal("Status", "Done")
    assert {tested_by_empty("T"), tested_by_empty("T")} == {tested_by_empty("T")}
