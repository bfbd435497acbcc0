"""Mini README: Tests for the FastAPI pages, form posts and JSON API.

The application is built around an in-memory backend and a pinned clock so
month comparisons are deterministic. Form posts are checked for their
redirect, for the inline alert on invalid input, and for the re-rendered
page reflecting the store after each mutation.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from fynov.finance import Collection
from fynov.interface import create_application
from fynov.storage import JsonFileBackend, ProfileStore, RecordStore
from fynov.storage.profile import PROFILE_KEY

TODAY = date(2024, 3, 15)


@pytest.fixture()
def client(store: RecordStore, profile_store: ProfileStore) -> TestClient:
    return TestClient(create_application(store, profile_store, clock=lambda: TODAY))


def test_dashboard_renders_with_empty_store(client: TestClient) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert "R$ 0,00" in response.text
    assert "Create your first goal" in response.text


def test_empty_income_page_shows_empty_state(client: TestClient) -> None:
    response = client.get("/income")

    assert response.status_code == 200
    assert 'data-empty-state="income"' in response.text


def test_create_transaction_redirects_and_lists(client: TestClient, store: RecordStore) -> None:
    response = client.post(
        "/expenses",
        data={"description": "Groceries", "amount": "120,40", "date": "2024-03-02", "category": "Food"},
        follow_redirects=False,
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/expenses"
    page = client.get("/expenses").text
    assert "Groceries" in page
    assert "R$ 120,40" in page
    assert len(store.list(Collection.EXPENSES)) == 1


def test_invalid_transaction_shows_inline_alert(client: TestClient, store: RecordStore) -> None:
    response = client.post("/income", data={"description": "", "amount": "10"})

    assert response.status_code == 400
    assert "Fill in description and amount." in response.text
    assert store.list(Collection.INCOME) == []


def test_edit_and_delete_transaction(client: TestClient, store: RecordStore) -> None:
    record = store.create(Collection.INCOME, {"description": "Salary", "amount": 100, "date": "2024-03-01"})

    edit_page = client.get(f"/income/{record.id}/edit")
    assert edit_page.status_code == 200
    assert 'value="Salary"' in edit_page.text

    response = client.post(
        f"/income/{record.id}/edit",
        data={"description": "Salary March", "amount": "150", "date": "2024-03-01"},
        follow_redirects=False,
    )
    assert response.status_code == 303
    assert store.get_by_id(Collection.INCOME, record.id).description == "Salary March"

    response = client.post(f"/income/{record.id}/delete", follow_redirects=False)
    assert response.status_code == 303
    assert store.list(Collection.INCOME) == []


def test_delete_unknown_record_is_a_no_op(client: TestClient) -> None:
    response = client.post("/expenses/987/delete", follow_redirects=False)
    assert response.status_code == 303


def test_month_comparison_on_transaction_page(client: TestClient, store: RecordStore) -> None:
    store.create(Collection.EXPENSES, {"description": "Feb", "amount": 100, "date": "2024-02-10"})
    store.create(Collection.EXPENSES, {"description": "Mar", "amount": 150, "date": "2024-03-10"})

    page = client.get("/expenses").text

    assert 'stat-variation--negative' in page
    assert "+50%" in page


def test_goal_lifecycle(client: TestClient, store: RecordStore) -> None:
    response = client.post("/goals", data={"title": "New bike", "target": "2.000"}, follow_redirects=False)
    assert response.status_code == 303
    goal = store.list(Collection.GOALS)[0]

    client.post(f"/goals/{goal.id}/contribute", data={"amount": "1700"})
    detail = client.get(f"/goals/{goal.id}")

    assert detail.status_code == 200
    assert "85%" in detail.text
    assert "Almost there! Final stretch!" in detail.text

    response = client.post(
        f"/goals/{goal.id}/edit",
        data={"title": "New bike", "target": "1700", "current": "1700"},
        follow_redirects=False,
    )
    assert response.headers["location"] == f"/goals/{goal.id}"
    assert "Goal reached!" in client.get("/goals").text

    client.post(f"/goals/{goal.id}/delete")
    assert 'data-empty-state="goals"' in client.get("/goals").text


def test_invalid_goal_shows_alert(client: TestClient) -> None:
    response = client.post("/goals", data={"title": "", "target": "100"})

    assert response.status_code == 400
    assert "Fill in title and target amount." in response.text


def test_unknown_goal_and_collection_return_404(client: TestClient) -> None:
    assert client.get("/goals/404").status_code == 404
    assert client.get("/savings").status_code == 404
    assert client.post("/goals/404/contribute", data={"amount": "5"}, follow_redirects=False).status_code == 303


def test_profile_update_changes_initials(client: TestClient) -> None:
    client.post("/profile", data={"name": "Maria Clara", "email": "maria@example.com"})

    page = client.get("/profile").text

    assert "MC" in page
    assert "maria@example.com" in page


def test_summary_api(client: TestClient, store: RecordStore) -> None:
    store.create(Collection.INCOME, {"description": "Feb", "amount": 200, "date": "2024-02-01"})
    store.create(Collection.INCOME, {"description": "Mar", "amount": 300, "date": "2024-03-01"})
    store.create(Collection.EXPENSES, {"description": "Mar", "amount": 80, "date": "2024-03-01"})

    payload = client.get("/api/summary").json()

    assert payload["summary"]["balance"] == pytest.approx(220.0)
    assert payload["summary"]["income_badge"]["text"] == "+50%"
    assert payload["summary"]["expense_badge"] is None
    assert payload["comparisons"]["income"]["percent"] == 50
    assert payload["comparisons"]["expenses"]["variation"] == "+100%"


def test_charts_api(client: TestClient, store: RecordStore) -> None:
    store.create(Collection.EXPENSES, {"description": "Rent", "amount": 900, "date": "2024-03-01", "category": "Home"})

    configs = client.get("/api/charts").json()

    assert set(configs) == {
        "evolutionChart",
        "incomeChart",
        "expensesChart",
        "categoryChart",
        "incomeComparisonChart",
        "expensesComparisonChart",
    }
    assert configs["evolutionChart"]["data"]["labels"][-1] == "Mar 2024"
    assert configs["expensesChart"]["data"]["datasets"][0]["data"][-1] == pytest.approx(900.0)
    assert configs["categoryChart"]["data"]["labels"] == ["Home"]
    assert configs["expensesComparisonChart"]["data"]["labels"] == ["Feb 2024", "Mar 2024"]


def test_collection_api_lists_records(client: TestClient, store: RecordStore) -> None:
    record = store.create(Collection.GOALS, {"title": "Car", "target": 100})

    payload = client.get("/api/goals").json()

    assert payload["records"] == [record.as_dict()]
    assert client.get("/api/unknown").status_code == 404


def test_factory_uses_configured_backend() -> None:
    """Without injected stores the settings pick the (in-memory) backend."""

    client = TestClient(create_application())
    assert client.get("/income").status_code == 200


def test_unchanged_edit_keeps_fractional_amount(client: TestClient, store: RecordStore) -> None:
    """Saving the edit form as pre-filled does not regroup three-decimal amounts."""

    client.post("/income", data={"description": "Interest", "amount": "1,234", "date": "2024-03-01"})
    record = store.list(Collection.INCOME)[0]

    page = client.get(f"/income/{record.id}/edit").text
    assert 'value="1,234"' in page

    client.post(
        f"/income/{record.id}/edit",
        data={"description": "Interest", "amount": "1,234", "date": "2024-03-01", "category": "Other"},
    )
    assert store.get_by_id(Collection.INCOME, record.id).amount == pytest.approx(1.234)


def test_goal_form_prefills_amounts_in_input_style(client: TestClient, store: RecordStore) -> None:
    goal = store.create(Collection.GOALS, {"title": "Trip", "target": 2500.5, "current": 1.25})

    page = client.get(f"/goals/{goal.id}").text

    assert 'value="2500,5"' in page
    assert 'value="1,25"' in page


def test_invalid_edit_rerenders_edit_form_with_typed_values(client: TestClient, store: RecordStore) -> None:
    record = store.create(Collection.EXPENSES, {"description": "Rent", "amount": 900, "date": "2024-03-01"})

    response = client.post(
        f"/expenses/{record.id}/edit",
        data={"description": "", "amount": "950,50", "date": "2024-03-01", "category": "Home"},
    )

    assert response.status_code == 400
    assert "Fill in description and amount." in response.text
    assert 'id="edit-expenses-form"' in response.text
    assert 'value="950,50"' in response.text
    assert store.get_by_id(Collection.EXPENSES, record.id).description == "Rent"


def test_invalid_goal_edit_keeps_typed_values(client: TestClient, store: RecordStore) -> None:
    goal = store.create(Collection.GOALS, {"title": "Trip", "target": 1000})

    response = client.post(f"/goals/{goal.id}/edit", data={"title": "Big trip", "target": "", "current": "10"})

    assert response.status_code == 400
    assert 'value="Big trip"' in response.text


def test_damaged_files_do_not_break_pages(tmp_path: Path) -> None:
    (tmp_path / "income.json").write_bytes(b"[\xff\xfe broken")
    (tmp_path / f"{PROFILE_KEY}.json").write_bytes(b"{\xff")
    backend = JsonFileBackend(tmp_path)
    client = TestClient(create_application(RecordStore(backend), ProfileStore(backend), clock=lambda: TODAY))

    response = client.get("/income")

    assert response.status_code == 200
    assert 'data-empty-state="income"' in response.text
    assert client.get("/").status_code == 200
