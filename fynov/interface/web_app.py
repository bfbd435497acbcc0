"""Mini README: FastAPI application serving the FyNov pages.

Structure:
    * create_application - application factory wiring stores, templates and routes.
    * Pages - dashboard, income, expenses, goals, goal detail and profile.
    * Form posts - create/edit/delete handlers that redirect back to the page.
    * JSON API - dashboard summary, chart configs and raw collections.

Each request reads fresh snapshots from the record store, so the pages always
reflect the last write. Stores can be injected (tests use an in-memory
backend); otherwise the backend configured in ``FynovSettings`` is used.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Callable, Dict, Optional

from fastapi import FastAPI, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from ..configuration import get_settings
from ..finance.records import Collection
from ..logging_utils import configure_root_logger, get_logger
from ..presentation.charts import build_chart_configs
from ..presentation.formatting import CurrencyFormatter
from ..presentation.views import ViewRenderer, dashboard_summary, goal_cards, month_comparison
from ..storage import ProfileStore, RecordStore, create_backend
from .forms import FormController, FormValidationError

LOGGER = get_logger(__name__)

PAGE_TITLES = {
    Collection.INCOME: "Income",
    Collection.EXPENSES: "Expenses",
    Collection.GOALS: "Goals",
}


def _collection_or_404(name: str, *, transactional: bool = False) -> Collection:
    try:
        collection = Collection.from_str(name)
    except KeyError as error:
        raise HTTPException(status_code=404, detail=str(error)) from error
    if transactional and not collection.is_transactional:
        raise HTTPException(status_code=404, detail=f"'{name}' does not hold transactions")
    return collection


def _redirect(path: str) -> RedirectResponse:
    return RedirectResponse(url=path, status_code=303)


def create_application(
    record_store: Optional[RecordStore] = None,
    profile_store: Optional[ProfileStore] = None,
    *,
    clock: Callable[[], date] = date.today,
) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    if record_store is None or profile_store is None:
        backend = create_backend(settings)
        record_store = record_store or RecordStore(backend)
        profile_store = profile_store or ProfileStore(backend)

    app = FastAPI(title="FyNov", version="1.0.0")
    static_directory = Path(__file__).parent / "static"
    app.mount("/static", StaticFiles(directory=str(static_directory)), name="static")

    formatter = CurrencyFormatter.from_settings(settings)
    renderer = ViewRenderer(formatter)
    templates = Jinja2Templates(env=renderer.environment)
    controller = FormController(record_store, profile_store)

    def page_context(active: str, **extra: object) -> Dict[str, object]:
        profile = profile_store.get()
        return {"active": active, "profile": profile, "alert": None, **extra}

    def render_transactions(
        request: Request,
        collection: Collection,
        *,
        alert: Optional[str] = None,
        status_code: int = 200,
    ) -> HTMLResponse:
        records = record_store.list(collection)
        context = page_context(
            collection.value,
            title=PAGE_TITLES[collection],
            comparison=month_comparison(collection, records, formatter, clock()),
            **renderer.collection_context(collection, records),
        )
        context["alert"] = alert
        return templates.TemplateResponse(request, "transactions.html", context, status_code=status_code)

    def render_goals(request: Request, *, alert: Optional[str] = None, status_code: int = 200) -> HTMLResponse:
        goals = record_store.list(Collection.GOALS)
        context = page_context("goals", title="Goals", **renderer.collection_context(Collection.GOALS, goals))
        context["alert"] = alert
        return templates.TemplateResponse(request, "goals.html", context, status_code=status_code)

    def render_goal_detail(
        request: Request,
        record_id: int,
        *,
        alert: Optional[str] = None,
        status_code: int = 200,
        submitted: Optional[Dict[str, object]] = None,
    ) -> HTMLResponse:
        goal = record_store.get_by_id(Collection.GOALS, record_id)
        if goal is None:
            raise HTTPException(status_code=404, detail=f"Goal {record_id} not found")
        form_values = {**goal.as_dict(), **(submitted or {})}
        context = page_context("goals", title=goal.title, goal=form_values, card=goal_cards([goal], formatter)[0])  # type: ignore[list-item]
        context["alert"] = alert
        return templates.TemplateResponse(request, "goal_detail.html", context, status_code=status_code)

    def render_transaction_edit(
        request: Request,
        collection: Collection,
        record_id: int,
        *,
        alert: Optional[str] = None,
        status_code: int = 200,
        submitted: Optional[Dict[str, object]] = None,
    ) -> HTMLResponse:
        record = record_store.get_by_id(collection, record_id)
        if record is None:
            raise HTTPException(status_code=404, detail=f"Record {record_id} not found")
        form_values = {**record.as_dict(), **(submitted or {})}
        context = page_context(
            collection.value,
            title=f"Edit {PAGE_TITLES[collection].lower()}",
            record=form_values,
            collection=collection.value,
        )
        context["alert"] = alert
        return templates.TemplateResponse(request, "transaction_edit.html", context, status_code=status_code)

    @app.get("/", response_class=HTMLResponse)
    async def dashboard(request: Request) -> HTMLResponse:
        """Render the dashboard for the current month."""

        today = clock()
        income = record_store.list(Collection.INCOME)
        expenses = record_store.list(Collection.EXPENSES)
        summary = dashboard_summary(income, expenses, record_store.list(Collection.GOALS), formatter, today)
        return templates.TemplateResponse(
            request,
            "dashboard.html",
            page_context("dashboard", title="Dashboard", summary=summary),
        )

    @app.get("/profile", response_class=HTMLResponse)
    async def profile_page(request: Request) -> HTMLResponse:
        return templates.TemplateResponse(request, "profile.html", page_context("profile", title="Profile"))

    @app.post("/profile")
    async def save_profile(name: str = Form(""), email: str = Form("")) -> RedirectResponse:
        controller.save_profile(name=name, email=email)
        return _redirect("/profile")

    @app.get("/goals", response_class=HTMLResponse)
    async def goals_page(request: Request) -> HTMLResponse:
        return render_goals(request)

    @app.post("/goals")
    async def create_goal(
        request: Request,
        title: str = Form(""),
        target: str = Form(""),
        deadline: str = Form(""),
    ):
        """Create a goal or re-render the page with the validation alert."""

        try:
            controller.add_goal(title=title, target=target, deadline=deadline)
        except FormValidationError as error:
            return render_goals(request, alert=str(error), status_code=400)
        return _redirect("/goals")

    @app.get("/goals/{record_id}", response_class=HTMLResponse)
    async def goal_detail(request: Request, record_id: int) -> HTMLResponse:
        return render_goal_detail(request, record_id)

    @app.post("/goals/{record_id}/edit")
    async def edit_goal(
        request: Request,
        record_id: int,
        title: str = Form(""),
        target: str = Form(""),
        deadline: str = Form(""),
        current: str = Form(""),
    ):
        try:
            goal = controller.edit_goal(record_id, title=title, target=target, deadline=deadline, current=current)
        except FormValidationError as error:
            submitted = {"title": title, "target": target, "current": current, "deadline": deadline}
            return render_goal_detail(request, record_id, alert=str(error), status_code=400, submitted=submitted)
        if goal is None:
            return _redirect("/goals")
        return _redirect(f"/goals/{record_id}")

    @app.post("/goals/{record_id}/contribute")
    async def contribute(request: Request, record_id: int, amount: str = Form("")):
        try:
            goal = controller.contribute_to_goal(record_id, amount=amount)
        except FormValidationError as error:
            return render_goal_detail(request, record_id, alert=str(error), status_code=400)
        if goal is None:
            return _redirect("/goals")
        return _redirect(f"/goals/{record_id}")

    @app.get("/api/summary")
    async def api_summary() -> JSONResponse:
        """Dashboard figures and month comparisons as JSON."""

        today = clock()
        income = record_store.list(Collection.INCOME)
        expenses = record_store.list(Collection.EXPENSES)
        summary = dashboard_summary(income, expenses, record_store.list(Collection.GOALS), formatter, today)
        comparisons = {}
        for collection, records in ((Collection.INCOME, income), (Collection.EXPENSES, expenses)):
            comparison = month_comparison(collection, records, formatter, today)
            comparisons[collection.value] = {
                "current_total": comparison.current_total,
                "previous_total": comparison.previous_total,
                "percent": comparison.percent,
                "variation": comparison.variation_text,
                "tone": comparison.tone,
            }
        return JSONResponse({"summary": summary.as_dict(), "comparisons": comparisons})

    @app.get("/api/charts")
    async def api_charts() -> JSONResponse:
        configs = build_chart_configs(
            record_store.list(Collection.INCOME),  # type: ignore[arg-type]
            record_store.list(Collection.EXPENSES),  # type: ignore[arg-type]
            clock(),
        )
        LOGGER.debug("Returning %s chart configs", len(configs))
        return JSONResponse(configs)

    @app.get("/api/{collection_name}")
    async def api_collection(collection_name: str) -> JSONResponse:
        collection = _collection_or_404(collection_name)
        return JSONResponse({"records": [record.as_dict() for record in record_store.list(collection)]})

    @app.get("/{collection_name}", response_class=HTMLResponse)
    async def transactions_page(request: Request, collection_name: str) -> HTMLResponse:
        return render_transactions(request, _collection_or_404(collection_name, transactional=True))

    @app.post("/{collection_name}")
    async def create_transaction(
        request: Request,
        collection_name: str,
        description: str = Form(""),
        amount: str = Form(""),
        date: str = Form(""),
        category: str = Form(""),
    ):
        """Create an income or expense entry from the add form."""

        collection = _collection_or_404(collection_name, transactional=True)
        try:
            controller.add_transaction(
                collection, description=description, amount=amount, date=date, category=category
            )
        except FormValidationError as error:
            return render_transactions(request, collection, alert=str(error), status_code=400)
        return _redirect(f"/{collection.value}")

    @app.get("/{collection_name}/{record_id}/edit", response_class=HTMLResponse)
    async def edit_transaction_page(request: Request, collection_name: str, record_id: int) -> HTMLResponse:
        return render_transaction_edit(request, _collection_or_404(collection_name, transactional=True), record_id)

    @app.post("/{collection_name}/{record_id}/edit")
    async def edit_transaction(
        request: Request,
        collection_name: str,
        record_id: int,
        description: str = Form(""),
        amount: str = Form(""),
        date: str = Form(""),
        category: str = Form(""),
    ):
        collection = _collection_or_404(collection_name, transactional=True)
        try:
            controller.edit_transaction(
                collection, record_id, description=description, amount=amount, date=date, category=category
            )
        except FormValidationError as error:
            submitted = {"description": description, "amount": amount, "date": date, "category": category}
            return render_transaction_edit(
                request, collection, record_id, alert=str(error), status_code=400, submitted=submitted
            )
        return _redirect(f"/{collection.value}")

    @app.post("/{collection_name}/{record_id}/delete")
    async def delete_record(collection_name: str, record_id: int) -> RedirectResponse:
        collection = _collection_or_404(collection_name)
        controller.delete(collection, record_id)
        return _redirect(f"/{collection.value}")

    return app
