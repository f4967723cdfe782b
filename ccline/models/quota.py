"""Models for the account quota API and its endpoint cache."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class EndpointConfig(BaseModel):
    """One candidate address serving the account-status API."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)  # Human label, e.g. "main"
    url: str = Field(..., min_length=1)


class QuotaResponse(BaseModel):
    """Body of a successful account-status response.

    Types are strict: a 200 response whose body does not match this shape
    counts as a failed attempt.
    """

    daily_spent_usd: StrictStr
    opus_enabled: StrictBool


class EndpointCache(BaseModel):
    """Single-slot record of the last endpoint that answered for a credential."""

    api_key_hash: int = Field(..., ge=0, lt=2**64)
    successful_endpoint: str
    last_success_time: datetime
    success_count: int = Field(default=1, ge=0)

    @field_validator("last_success_time", mode="before")
    @classmethod
    def _accept_epoch_pair(cls, value: object) -> object:
        """Accept ``{"secs_since_epoch": .., "nanos_since_epoch": ..}`` timestamps."""
        if isinstance(value, dict) and "secs_since_epoch" in value:
            try:
                seconds = int(value["secs_since_epoch"])
                micros = int(value.get("nanos_since_epoch", 0)) // 1000
                return _EPOCH + timedelta(seconds=seconds, microseconds=micros)
            except (TypeError, ValueError, OverflowError) as exc:
                raise ValueError(f"invalid epoch timestamp: {value!r}") from exc
        return value

    @field_validator("last_success_time")
    @classmethod
    def _ensure_aware(cls, value: datetime) -> datetime:
        # Naive timestamps are taken as UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
