"""FastAPI application exposing GitHub repository and token checks."""

import time
from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from repo_reachability.logging_config import setup_logging, get_logger
from repo_reachability.models import (
    ValidateRepositoryRequest, PublicRepositoryRequest, ValidateTokenRequest,
    TokenValidationResponse, ValidationResult, ErrorResponse
)
from repo_reachability.tools.github_checker import GitHubRepoChecker
from repo_reachability.errors import create_error_response

# Setup logging on module load
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("Starting repository reachability API")
    app.state.checker = GitHubRepoChecker()
    yield
    logger.info("Shutting down repository reachability API")
    await app.state.checker.close()


app = FastAPI(
    title="Repository Reachability Checker",
    description="Validates GitHub repository URLs and access tokens for IndieGameHub projects",
    version="1.0.0",
    lifespan=lifespan
)


def get_checker(request: Request) -> GitHubRepoChecker:
    """Returns the checker shared by all requests."""
    return request.app.state.checker


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle Pydantic validation errors."""
    errors = exc.errors()
    if errors:
        message = errors[0].get("msg", "Validation error")
    else:
        message = "Invalid request"

    logger.warning(f"Validation error: {message}")
    return JSONResponse(
        status_code=400,
        content=create_error_response(message)
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content=create_error_response("An unexpected error occurred")
    )


@app.post(
    "/repositories/validate",
    response_model=ValidationResult,
    response_model_by_alias=False,
    responses={
        400: {"model": ErrorResponse, "description": "Missing or blank repository URL"},
        500: {"model": ErrorResponse, "description": "Unexpected server error"},
    }
)
async def validate_repository(
    request: ValidateRepositoryRequest,
    checker: GitHubRepoChecker = Depends(get_checker),
) -> ValidationResult:
    """
    Check a GitHub repository URL.

    Always answers 200 once the request body is valid; whether the
    repository is reachable is reported in the result itself.
    """
    start_time = time.time()
    result = await checker.check_repository(request.repo_url, request.access_token)
    duration = time.time() - start_time
    logger.info(
        f"Repository check finished in {duration:.2f}s "
        f"(accessible={result.is_accessible}, failure={result.failure})"
    )
    return result


@app.post(
    "/repositories/public",
    response_model=ValidationResult,
    response_model_by_alias=False,
    responses={400: {"model": ErrorResponse, "description": "Missing or blank repository URL"}}
)
async def public_repository(
    request: PublicRepositoryRequest,
    checker: GitHubRepoChecker = Depends(get_checker),
) -> ValidationResult:
    """Look up a repository without credentials."""
    return await checker.get_public_repo_info(request.repo_url)


@app.post(
    "/tokens/validate",
    response_model=TokenValidationResponse,
    responses={400: {"model": ErrorResponse, "description": "Missing or blank token"}}
)
async def validate_token(
    request: ValidateTokenRequest,
    checker: GitHubRepoChecker = Depends(get_checker),
) -> TokenValidationResponse:
    """Check whether GitHub accepts an access token."""
    valid = await checker.validate_token(request.access_token)
    return TokenValidationResponse(valid=valid)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
