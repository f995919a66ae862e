import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware

from blogful.config import configure_logging, settings
from blogful.database import dispose_engine
from blogful.errors import install_error_handlers, unhandled_exception_handler
from blogful.middleware import AccessLogMiddleware, ErrorResponderMiddleware, SecurityHeadersMiddleware
from blogful.routers import articles, comments, users

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    configure_logging()
    logger.info("Blogful API starting (env=%s)", settings.APP_ENV)
    yield
    # Shutdown
    await dispose_engine()


app = FastAPI(
    title="Blogful API",
    description="CRUD API for articles, comments and users",
    version="1.0.0",
    lifespan=lifespan,
)

# Middleware (the last one added runs outermost)
app.add_middleware(ErrorResponderMiddleware, handler=unhandled_exception_handler)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(AccessLogMiddleware)

install_error_handlers(app)

# Routers
app.include_router(articles.router)
app.include_router(comments.router)
app.include_router(users.router)


@app.get("/", include_in_schema=False)
async def root():
    return Response(status_code=200)
