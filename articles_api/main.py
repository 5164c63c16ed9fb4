from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from articles_api import __version__
from articles_api.errors import register_exception_handlers
from articles_api.logging_config import setup_logging
from articles_api.middleware import ErrorReportingMiddleware, RequestTracingMiddleware
from articles_api.monitoring import close_monitoring, init_monitoring
from articles_api.routers import articles, comments
from articles_api.schemas import HealthResponse

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    setup_logging()
    init_monitoring()
    yield
    # Shutdown
    close_monitoring()

app = FastAPI(
    title="Articles API",
    description="Articles and their nested comments over a relational store",
    version=__version__,
    lifespan=lifespan,
)

register_exception_handlers(app)

# Middleware (added last runs first: the tracer wraps error reporting)
app.add_middleware(ErrorReportingMiddleware)
app.add_middleware(RequestTracingMiddleware)

# Routers
app.include_router(articles.router)
app.include_router(comments.router)

@app.get("/", response_class=PlainTextResponse)
async def hello():
    return "Hello world!"

@app.get("/health", response_model=HealthResponse)
async def health():
    return {"status": "healthy", "version": __version__}
