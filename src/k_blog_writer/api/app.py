import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from k_blog_writer.api.schemas import ErrorResponse, GenerateRequest
from k_blog_writer.errors import KBlogWriterError, ValidationError
from k_blog_writer.service.generator import GenerateService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="k-blog-writer", version="0.1.0")
service = GenerateService()

ERROR_RESPONSES = {status: {"model": ErrorResponse} for status in (400, 401, 429, 500)}


def _error_response(exc: KBlogWriterError) -> JSONResponse:
    body = ErrorResponse(error=exc.message)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


@app.exception_handler(KBlogWriterError)
async def handle_app_error(request: Request, exc: KBlogWriterError) -> JSONResponse:
    return _error_response(exc)


@app.exception_handler(RequestValidationError)
async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("request.invalid errors=%d", len(exc.errors()))
    return _error_response(ValidationError())


@app.get("/healthz")
async def healthz() -> dict:
    return {"status": "ok"}


@app.post("/api/generate", responses=ERROR_RESPONSES)
async def generate(req: GenerateRequest) -> JSONResponse:
    result = await service.generate(req.keyword)
    return JSONResponse(content=result)
