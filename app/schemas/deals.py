"""
app/schemas/deals.py

Request and response schemas for the deal import endpoint.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, NaiveDatetime, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from app.domain.deal import DealImportSummary, DealRecord

_REQUIRED_MESSAGES = {
    "deal_unique_id": "Deal Unique Id is required",
    "from_currency": "From Currency is required",
    "to_currency": "To Currency is required",
    "deal_timestamp": "Deal timestamp is required",
    "deal_amount": "Deal amount is required",
}


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class DealRequest(_CamelModel):
    """
    One deal as submitted by a client.

    Fields default to None only so that absent keys reach the required-field
    check and report the same message as explicit nulls.
    """

    model_config = ConfigDict(frozen=True)

    deal_unique_id: str = Field(default=None, max_length=255, validate_default=True)
    from_currency: str = Field(default=None, validate_default=True)
    to_currency: str = Field(default=None, validate_default=True)
    # Deals carry local wall-clock time; offsets would be lost in storage.
    deal_timestamp: NaiveDatetime = Field(default=None, validate_default=True)
    deal_amount: Decimal = Field(default=None, validate_default=True)

    @field_validator(
        "deal_unique_id",
        "from_currency",
        "to_currency",
        "deal_timestamp",
        "deal_amount",
        mode="before",
    )
    @classmethod
    def _require_value(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise PydanticCustomError("deal_field_required", _REQUIRED_MESSAGES[info.field_name])
        return value

    @field_validator("from_currency", "to_currency")
    @classmethod
    def _uppercase_iso_code(cls, value: str) -> str:
        if len(value) != 3:
            raise PydanticCustomError("iso_code_length", "ISO code must be 3 characters")
        if not value.isalpha():
            raise PydanticCustomError("iso_code_letters", "ISO code must contain letters only")
        return value.upper()

    @field_validator("deal_amount")
    @classmethod
    def _positive_amount(cls, value: Decimal) -> Decimal:
        if value <= 0:
            raise PydanticCustomError("deal_amount_positive", "Deal amount must be positive")
        return value

    def to_record(self) -> DealRecord:
        return DealRecord(
            deal_unique_id=self.deal_unique_id,
            from_currency=self.from_currency,
            to_currency=self.to_currency,
            deal_timestamp=self.deal_timestamp,
            deal_amount=self.deal_amount,
        )


class DealImportResponse(_CamelModel):
    """
    API response model for a deal import batch.
    """

    total_received: int = Field(..., ge=0)
    successful_imports: int = Field(..., ge=0)
    failed_or_skipped: int = Field(..., ge=0)

    @classmethod
    def from_summary(cls, summary: DealImportSummary) -> DealImportResponse:
        return cls(
            total_received=summary.total_received,
            successful_imports=summary.successful_imports,
            failed_or_skipped=summary.failed_or_skipped,
        )


class ProblemDetailResponse(BaseModel):
    """
    RFC 7807 style error body.
    """

    type: str = "about:blank"
    title: str
    status: int
    detail: str
    instance: str | None = None
    errors: list[str] | None = None
    error: str | None = None
