"""stockchart — FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.app.api.deps import get_chart_adapter
from backend.app.api.v1 import router as v1_router
from backend.app.config import get_settings
from backend.app.core.errors import StockDataError, UpstreamError
from backend.app.core.resolver import resolve
from backend.app.data.base import ChartDataAdapter
from backend.app.logging_config import get_logger, setup_logging

VERSION = "0.1.0"

DIAG_SYMBOL = "AAPL"

logger = get_logger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging()
    logger.info("stockchart_starting", env=settings.app_env, upstream=settings.yahoo_base_url)

    yield

    logger.info("stockchart_shutting_down")


async def stock_data_error_handler(request: Request, exc: StockDataError) -> JSONResponse:
    if isinstance(exc, UpstreamError):
        logger.error("stock_fetch_failed", path=request.url.path, error=exc.message, details=exc.details)
    else:
        logger.info("stock_request_rejected", path=request.url.path, status=exc.status_code, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path)
    return JSONResponse(
        status_code=500,
        content=UpstreamError(details=str(exc)).to_dict(),
    )


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title="stockchart",
        description="Stock price history (OHLC) for line and candlestick charts",
        version=VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS: permissive for dev, explicit origins otherwise
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StockDataError, stock_data_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Routes
    app.include_router(v1_router, prefix="/api")

    @app.get("/health", tags=["system"])
    async def health():
        return {
            "status": "ok",
            "app": settings.app_name,
            "version": VERSION,
            "env": settings.app_env,
        }

    @app.get("/diag", tags=["system"])
    async def diagnostics(adapter: ChartDataAdapter = Depends(get_chart_adapter)):
        """Probe upstream connectivity with a single small chart request."""
        upstream = {"adapter": adapter.name, "base_url": settings.yahoo_base_url, "symbol_tested": DIAG_SYMBOL}
        try:
            candles = await resolve(DIAG_SYMBOL, "1d", adapter=adapter)
            upstream.update(status="ok", rows=len(candles))
        except StockDataError as e:
            upstream.update(status="error", error=e.message, details=e.details)
        return {"upstream": upstream}

    return app


app = create_app()
