import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from retail_api.api import auth, customers
from retail_api.core.config import settings
from retail_api.core.errors import APIError
from retail_api.db.base import mongo

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Refuse to serve if the store is unreachable; every handler needs it.
    await mongo.connect()
    try:
        yield
    finally:
        await mongo.close()


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Customer management API for the retail store",
    version=settings.VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(APIError)
async def api_error_handler(request: Request, exc: APIError):
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_body(),
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request", "error": str(exc)},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal Server Error"})


# Routers
app.include_router(auth.router)
app.include_router(customers.router)


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "Welcome to the Retail Store API"


@app.get("/health")
async def health_check():
    return {"status": "ok", "version": settings.VERSION}
