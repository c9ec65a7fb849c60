# checkout_api/main.py

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from checkout_api.api import checkout, graphql, users
from checkout_api.config import CORS_ORIGINS
from checkout_api.database import init_db
from checkout_api.utils.logging import configure_logging, get_logger


configure_logging()
init_db()

logger = get_logger(__name__)

app = FastAPI(title="checkout-api")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(HTTPException)
async def http_error(request: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    logger.info("Request body rejected", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(status_code=400, content={"error": "Dados inválidos"})


app.include_router(users.router)
app.include_router(checkout.router)
app.include_router(graphql.router, prefix="/graphql")
