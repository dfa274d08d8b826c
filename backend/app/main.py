from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import health
from app.core.observability import configure_error_monitoring, configure_observability
from app.domains.payroll.router import router as payroll_router
from shiftpay.config import get_settings
from shiftpay.log import configure_logging, get_logger

settings = get_settings()
configure_logging(settings.log_level)
configure_observability()
configure_error_monitoring()
logger = get_logger(__name__)

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(payroll_router)


@app.on_event("startup")
def startup_event() -> None:
    logger.info("startup_complete", env=settings.env, timezone=settings.timezone)


@app.get("/")
def root() -> dict[str, str]:
    return {"message": "Shift payroll reconciliation API running", "environment": settings.env}
