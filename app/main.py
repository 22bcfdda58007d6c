import logging
from typing import List, Optional, Tuple

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import APP_ENV, CORS_ORIGINS, EXPOSE_ERROR_DETAILS, LOG_LEVEL, PLAN_RANDOM_SEED
from app.progress_store import ProgressStore
from app.routes import router
from utils.errors import FitPlanError

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)


# ── Error rendering ─────────────────────────────────────────────────────────
def _describe_error(err: dict) -> Tuple[str, str]:
    loc = [str(part) for part in err.get("loc", ()) if part != "body"]
    field = ".".join(loc) or "body"
    err_type = err.get("type", "")
    if err_type == "missing":
        return "missing", f"{field} is required"
    if err_type.startswith(("int_", "float_")) or err_type == "finite_number":
        return "type", f"{field} must be a number"
    return "other", f"{field}: {err.get('msg', 'invalid value')}"


def _validation_body(errors: List[dict]) -> dict:
    described = [_describe_error(err) for err in errors]
    missing = [detail for kind, detail in described if kind == "missing"]
    if missing:
        return {"error": "Missing required fields", "details": missing}
    if all(kind == "type" for kind, _ in described):
        return {"error": "Invalid data types", "details": [detail for _, detail in described]}
    return {"error": "Invalid request", "details": [detail for _, detail in described]}


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content=_validation_body(exc.errors()))


async def fitplan_error_handler(request: Request, exc: FitPlanError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    content = {"error": "Internal server error"}
    if EXPOSE_ERROR_DETAILS:
        content["details"] = [str(exc)]
    return JSONResponse(status_code=500, content=content)


# ── Application factory ─────────────────────────────────────────────────────
def create_app(progress_store: Optional[ProgressStore] = None, plan_seed: Optional[int] = PLAN_RANDOM_SEED) -> FastAPI:
    app = FastAPI(title="FitPlan API")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.progress_store = progress_store if progress_store is not None else ProgressStore()
    app.state.plan_seed = plan_seed

    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(FitPlanError, fitplan_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(router)

    @app.get("/")
    def root():
        return {
            "status": "running",
            "endpoints": [
                "/plan",
                "/nutrition",
                "/progress",
                "/progress/reset",
                "/progress/demo",
                "/equipment-suggestions",
            ],
        }

    return app


app = create_app()
logger.info("FitPlan API ready (env=%s)", APP_ENV)
