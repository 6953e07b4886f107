import uvicorn
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from app.config.config import Settings, get_settings
from app.db.database import create_engine, create_session_factory, init_models
from app.middleware.jwt import JWTAuthVerifier
from app.middleware.logging import LoggingMiddleware
from app.routers.router import router, utils_router


@asynccontextmanager
async def lifespan(application: FastAPI):
    engine = application.state.engine
    await init_models(engine)  # ошибка подключения только логируется
    yield
    await engine.dispose()


async def http_exception_handler(_: Request, exc: StarletteHTTPException):
    return JSONResponse(
        content={"message": exc.detail},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(_: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Invalid request body"
    if errors:
        field = ".".join(str(part) for part in errors[0].get("loc", ()) if part != "body")
        detail = f"{field} {errors[0].get('msg', '')}".strip()
        if detail:
            message = f"{message}: {detail}"
    return JSONResponse(content={"message": message}, status_code=400)


def get_application(settings: Settings | None = None):
    settings = settings or get_settings()

    application = FastAPI(
        title="Auth API",
        description="Registration, login and token-protected user endpoints",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    engine = create_engine(settings)
    application.state.settings = settings
    application.state.engine = engine
    application.state.session_factory = create_session_factory(engine)
    application.state.auth_verifier = JWTAuthVerifier.from_settings(settings)

    application.include_router(router)
    application.include_router(utils_router)
    application.add_exception_handler(StarletteHTTPException, http_exception_handler)
    application.add_exception_handler(RequestValidationError, validation_exception_handler)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_middleware(LoggingMiddleware)

    return application


app = get_application()

if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=get_settings().PORT,
        reload=get_settings().DEBUG
    )
