import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

import config
from db import init_db
from routes import (
    accounts,
    budgets,
    calendar,
    dashboard,
    forecast,
    goals,
    investments,
    recurring,
    reports,
    transactions,
)
from services.errors import NotFoundError

config.configure_logging()

app = FastAPI(title="Budget Tracker")


@app.on_event("startup")
def startup():
    init_db()


@app.exception_handler(NotFoundError)
def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"success": False, "error": str(exc)})


@app.exception_handler(ValueError)
def value_error_handler(request: Request, exc: ValueError):
    logging.warning(f"{request.method} {request.url.path} rejected: {exc}")
    return JSONResponse(status_code=400, content={"success": False, "error": str(exc)})


app.include_router(dashboard.router)
app.include_router(accounts.router)
app.include_router(transactions.router)
app.include_router(recurring.router)
app.include_router(budgets.router)
app.include_router(goals.router)
app.include_router(investments.router)
app.include_router(forecast.router)
app.include_router(calendar.router)
app.include_router(reports.router)


@app.get("/health")
def health():
    return {"status": "ok"}
