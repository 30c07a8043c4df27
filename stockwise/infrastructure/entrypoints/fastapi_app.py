"""
FastAPI entry point.

create_app() builds the application. When no Container is passed in, the
lifespan handler wires the real adapters at startup (secrets bootstrap,
settings, logging, Composition Root) and releases them on shutdown.
Authentication is performed by an ITokenValidator reading the Bearer JWT
from each protected request.

Run locally:
    uvicorn stockwise.infrastructure.entrypoints.fastapi_app:app --reload --port 8000
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from stockwise.domain.errors import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    RecommendationError,
    RetrievalError,
    SignUpValidationError,
)
from stockwise.infrastructure.config.logging_config import configure_logging
from stockwise.infrastructure.config.settings import Settings, bootstrap_secrets
from stockwise.infrastructure.entrypoints.container import Container, build_container
from stockwise.infrastructure.entrypoints.schemas import (
    AnalyzeResponse,
    CredentialsRequest,
    LoginResponse,
    StockData,
    StockResponse,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    owned = app.state.container is None
    if owned:
        load_dotenv()
        bootstrap_secrets()
        settings = Settings.from_env()
        configure_logging(settings.log_level)
        app.state.container = build_container(settings)
    try:
        yield
    finally:
        if owned:
            app.state.container.close()
            app.state.container = None


def get_container(request: Request) -> Container:
    return request.app.state.container


async def get_current_user(
    request: Request,
    container: Container = Depends(get_container),
) -> dict:
    """FastAPI dependency: validate the JWT from the Authorization header."""
    scheme, _, token = request.headers.get("Authorization", "").partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise HTTPException(status_code=401, detail="Access denied. No token provided.")
    try:
        return container.token_validator.validate(token)
    except ValueError as exc:
        logger.info("Rejected bearer token: %s", exc)
        raise HTTPException(status_code=403, detail="Invalid token.") from exc


router = APIRouter()


@router.post("/auth/signup", status_code=201)
def signup(body: CredentialsRequest, container: Container = Depends(get_container)):
    """Register a user. Runs in the threadpool: bcrypt and pymongo block."""
    try:
        container.sign_up.execute(body.email, body.password)
    except SignUpValidationError as exc:
        return JSONResponse(status_code=400, content={"message": str(exc)})
    except EmailAlreadyRegisteredError as exc:
        return JSONResponse(status_code=409, content={"message": str(exc)})
    except Exception:
        logger.exception("Signup Error")
        return JSONResponse(status_code=500, content={"message": "Server error during signup."})
    return {"message": "User created successfully."}


@router.post("/auth/login", response_model=LoginResponse)
def login(body: CredentialsRequest, container: Container = Depends(get_container)):
    try:
        result = container.log_in.execute(body.email, body.password)
    except InvalidCredentialsError as exc:
        return JSONResponse(status_code=401, content={"message": str(exc)})
    except Exception:
        logger.exception("Login Error")
        return JSONResponse(status_code=500, content={"message": "Server error during login."})
    return LoginResponse(message="Login successful.", token=result.token, user_email=result.email)


@router.get("/stock/{symbol}", response_model=StockResponse)
async def get_stock(
    symbol: str,
    user: dict = Depends(get_current_user),
    container: Container = Depends(get_container),
):
    metrics = await container.stock_metrics.execute(symbol.upper())
    return StockResponse(stock_data=StockData.from_entity(metrics))


@router.get("/analyze/{symbol}", response_model=AnalyzeResponse)
async def analyze_stock(
    symbol: str,
    user: dict = Depends(get_current_user),
    container: Container = Depends(get_container),
):
    recommendation = await container.analyze_stock.execute(symbol.upper())
    return AnalyzeResponse.from_entity(recommendation)


@router.get("/health")
async def health():
    return {"status": "ok"}


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


async def retrieval_error_handler(request: Request, exc: RetrievalError) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": str(exc)})


async def recommendation_error_handler(request: Request, exc: RecommendationError) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": f"AI analysis failed. {exc}"})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Failed to process request."})


def create_app(container: Optional[Container] = None) -> FastAPI:
    app = FastAPI(title="Stockwise API", lifespan=lifespan)
    app.state.container = container
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(RetrievalError, retrieval_error_handler)
    app.add_exception_handler(RecommendationError, recommendation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
    app.include_router(router)
    return app


app = create_app()


def main() -> None:
    import uvicorn

    load_dotenv()
    uvicorn.run(app, host="0.0.0.0", port=Settings.from_env().port)


if __name__ == "__main__":
    main()
