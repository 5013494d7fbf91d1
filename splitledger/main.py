from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from splitledger.api.v1.routes.balances import router as balances_router
from splitledger.api.v1.routes.expense import router as expense_router
from splitledger.api.v1.routes.group import router as group_router
from splitledger.core.config import settings
from splitledger.core.exceptions import LedgerError
from splitledger.core.logging import setup_logging

setup_logging(settings.log_level)


async def ledger_error_handler(request: Request, exc: LedgerError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


def create_app() -> FastAPI:
    app = FastAPI(title="Splitledger Balance Service")

    app.add_exception_handler(LedgerError, ledger_error_handler)

    @app.get("/")
    async def root():
        return {"message": "Splitledger is live"}

    @app.get("/health")
    async def health():
        return {"status": "ok", "service": settings.service_name}

    app.include_router(expense_router, prefix="/api/v1/expense", tags=["expense"])
    app.include_router(group_router, prefix="/api/v1/groups", tags=["groups"])
    app.include_router(balances_router, prefix="/api/v1/balances", tags=["balances"])

    return app


app = create_app()
