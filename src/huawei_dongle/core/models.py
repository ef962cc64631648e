"""
Huawei Dongle Client - Configuration Models

This module contains Pydantic models for configuration and validation.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..shared.constants import DEFAULT_DEVICE_URL, DEFAULT_USER_AGENT
from .retry import RetryPolicy


class DongleConfig(BaseModel):
    """Configuration for a device connection."""

    model_config = ConfigDict(validate_assignment=True)

    url: str = Field(default=DEFAULT_DEVICE_URL, description="Device base URL")
    username: Optional[str] = Field(default=None, description="Web UI username")
    password: Optional[str] = Field(
        default=None, description="Web UI password", repr=False
    )  # Hide in logs
    timeout: float = Field(default=30.0, gt=0, description="Per-request timeout in seconds")
    max_retries: int = Field(default=3, ge=1, description="Attempts per request, first one included")
    retry_delay: float = Field(default=0.5, ge=0, description="Initial retry delay in seconds")
    max_retry_delay: float = Field(default=30.0, ge=0, description="Maximum retry delay in seconds")
    backoff_multiplier: float = Field(default=2.0, gt=1.0, description="Exponential backoff factor")
    jitter: bool = Field(default=True, description="Randomize retry delays")
    verify_ssl: bool = Field(default=True, description="Whether to verify SSL certificates")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, description="User-Agent header")
    max_requests_per_second: Optional[float] = Field(
        default=None, gt=0, description="Client-side request throttle"
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v):
        """Validate URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip("/")

    @model_validator(mode="after")
    def validate_retry_delays(self):
        if self.retry_delay > self.max_retry_delay:
            raise ValueError("retry_delay must not exceed max_retry_delay")
        return self

    def retry_policy(self) -> RetryPolicy:
        """Build the retry policy shared by all requests of a client."""
        return RetryPolicy(
            max_attempts=self.max_retries,
            initial_delay=self.retry_delay,
            max_delay=self.max_retry_delay,
            backoff_multiplier=self.backoff_multiplier,
            jitter=self.jitter,
        )

    @property
    def has_credentials(self) -> bool:
        return bool(self.username and self.password)
