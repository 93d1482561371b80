"""Pydantic models for check results and request/response validation."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from repo_reachability.errors import FailureKind


class RepositoryMetadata(BaseModel):
    """
    Snapshot of a repository as reported by the hosting API.

    Populated from the API's JSON keys (full_name, private, html_url,
    clone_url); dump with by_alias=True to get those keys back.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    full_name: str
    is_private: bool = Field(..., alias="private")
    description: Optional[str] = None
    html_url: str
    clone_url: str


class ValidationResult(BaseModel):
    """Outcome of a repository check."""

    model_config = ConfigDict(frozen=True)

    is_valid_format: bool
    is_accessible: bool
    metadata: Optional[RepositoryMetadata] = None
    error_detail: Optional[str] = None
    failure: Optional[FailureKind] = None

    @model_validator(mode="after")
    def check_outcome(self) -> "ValidationResult":
        if self.is_accessible:
            if self.metadata is None or self.error_detail is not None:
                raise ValueError("an accessible result carries metadata and no error")
            if not self.is_valid_format:
                raise ValueError("an accessible result must have a valid format")
        else:
            if self.metadata is not None or self.error_detail is None:
                raise ValueError("an inaccessible result carries an error and no metadata")
        if (self.failure is None) != (self.error_detail is None):
            raise ValueError("failure and error_detail must be set together")
        return self

    @classmethod
    def accessible(cls, metadata: RepositoryMetadata) -> "ValidationResult":
        return cls(is_valid_format=True, is_accessible=True, metadata=metadata)

    @classmethod
    def failed(cls, failure: FailureKind, error_detail: str, is_valid_format: bool = True) -> "ValidationResult":
        return cls(
            is_valid_format=is_valid_format,
            is_accessible=False,
            error_detail=error_detail,
            failure=failure,
        )


class ValidateRepositoryRequest(BaseModel):
    """Request model for the /repositories/validate endpoint."""

    repo_url: str = Field(
        ...,
        description="GitHub repository URL (https or SSH form)",
        examples=["https://github.com/psf/requests"]
    )
    access_token: Optional[str] = Field(
        None,
        description="Optional GitHub access token for private repositories"
    )

    @field_validator("repo_url")
    @classmethod
    def validate_repo_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Repository URL cannot be empty")
        return v

    @field_validator("access_token")
    @classmethod
    def blank_token_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v


class PublicRepositoryRequest(BaseModel):
    """Request model for the /repositories/public endpoint."""

    repo_url: str = Field(..., description="GitHub repository URL")

    @field_validator("repo_url")
    @classmethod
    def validate_repo_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Repository URL cannot be empty")
        return v


class ValidateTokenRequest(BaseModel):
    """Request model for the /tokens/validate endpoint."""

    access_token: str = Field(..., description="GitHub access token to verify")

    @field_validator("access_token")
    @classmethod
    def validate_token(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Access token cannot be empty")
        return v.strip()


class TokenValidationResponse(BaseModel):
    """Response model for token validation."""

    valid: bool = Field(..., description="Whether GitHub accepted the token")


class ErrorResponse(BaseModel):
    """Response model for errors."""

    status: Literal["error"] = "error"
    message: str = Field(..., description="Error description")
