from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, ValidationError

from plusgrid.core.errors import CODE_BATCH_TOO_LARGE, APIError
from plusgrid.core.settings import Settings, get_settings
from plusgrid.olc.validation import normalize_code
from plusgrid.services import codes as code_service


router = APIRouter(prefix="/v1/codes", tags=["codes"])


logger = logging.getLogger(__name__)


class AreaOut(BaseModel):
    latitude_lo: float
    longitude_lo: float
    latitude_hi: float
    longitude_hi: float
    latitude_center: float
    longitude_center: float
    code_length: int


class LocatedCodeResponse(BaseModel):
    code: str
    area: AreaOut


class EncodeRequest(BaseModel):
    # Out-of-range coordinates are clipped/wrapped by the encoder; only
    # non-finite values are refused.
    latitude: float = Field(allow_inf_nan=False)
    longitude: float = Field(allow_inf_nan=False)
    # Defaults to settings.default_code_length.
    code_length: int | None = None


class EncodeBatchRequest(BaseModel):
    # Keep items untyped so one bad item doesn't 422 the whole batch.
    items: list[Any] = Field(default_factory=list)


class EncodeBatchRejectedItem(BaseModel):
    index: int
    reason_code: str
    message: str


class EncodeBatchResponse(BaseModel):
    codes: list[str | None]
    rejected: list[EncodeBatchRejectedItem]


class ValidityResponse(BaseModel):
    code: str
    is_valid: bool
    is_short: bool
    is_full: bool


class ShortenRequest(BaseModel):
    code: str
    latitude: float = Field(allow_inf_nan=False)
    longitude: float = Field(allow_inf_nan=False)
    # Defaults to settings.default_maximum_truncation.
    maximum_truncation: int | None = None


class ShortenResponse(BaseModel):
    code: str
    short_code: str


class RecoverRequest(BaseModel):
    short_code: str
    latitude: float = Field(allow_inf_nan=False)
    longitude: float = Field(allow_inf_nan=False)


class LocateRequest(BaseModel):
    code: str
    latitude: float | None = Field(default=None, allow_inf_nan=False)
    longitude: float | None = Field(default=None, allow_inf_nan=False)


def _located_response(located: code_service.LocatedCode) -> LocatedCodeResponse:
    return LocatedCodeResponse(
        code=located.code, area=AreaOut(**located.area.as_dict())
    )


@router.post("/encode", response_model=LocatedCodeResponse)
async def encode(payload: EncodeRequest) -> LocatedCodeResponse:
    located = code_service.encode_location(
        payload.latitude, payload.longitude, code_length=payload.code_length
    )
    return _located_response(located)


@router.post("/encode/batch", response_model=EncodeBatchResponse)
async def encode_batch(
    payload: EncodeBatchRequest,
    settings: Settings = Depends(get_settings),
) -> EncodeBatchResponse:
    if len(payload.items) > settings.max_batch_items:
        raise APIError(
            code=CODE_BATCH_TOO_LARGE,
            message=f"At most {settings.max_batch_items} items per batch",
            status_code=413,
        )

    codes: list[str | None] = []
    rejected: list[EncodeBatchRejectedItem] = []
    for index, raw in enumerate(payload.items):
        try:
            item = EncodeRequest.model_validate(raw)
            located = code_service.encode_location(
                item.latitude, item.longitude, code_length=item.code_length
            )
        except ValidationError as exc:
            msg = "; ".join(err.get("msg", "invalid") for err in exc.errors())
            rejected.append(
                EncodeBatchRejectedItem(
                    index=index, reason_code="CODE_BATCH_ITEM_INVALID", message=msg
                )
            )
            codes.append(None)
            continue
        except APIError as exc:
            rejected.append(
                EncodeBatchRejectedItem(
                    index=index, reason_code=exc.code, message=exc.message
                )
            )
            codes.append(None)
            continue
        codes.append(located.code)

    logger.info(
        "Encoded batch (items=%s rejected=%s)", len(payload.items), len(rejected)
    )
    return EncodeBatchResponse(codes=codes, rejected=rejected)


@router.post("/shorten", response_model=ShortenResponse)
async def shorten(payload: ShortenRequest) -> ShortenResponse:
    short_code = code_service.shorten_code(
        payload.code,
        payload.latitude,
        payload.longitude,
        maximum_truncation=payload.maximum_truncation,
    )
    return ShortenResponse(code=normalize_code(payload.code), short_code=short_code)


@router.post("/recover", response_model=LocatedCodeResponse)
async def recover(payload: RecoverRequest) -> LocatedCodeResponse:
    located = code_service.recover_code(
        payload.short_code, payload.latitude, payload.longitude
    )
    return _located_response(located)


@router.post("/locate", response_model=LocatedCodeResponse)
async def locate(payload: LocateRequest) -> LocatedCodeResponse:
    located = code_service.locate(
        payload.code,
        reference_latitude=payload.latitude,
        reference_longitude=payload.longitude,
    )
    return _located_response(located)


@router.get("/{code}/validity", response_model=ValidityResponse)
async def validity(code: str) -> ValidityResponse:
    result = code_service.classify(code)
    return ValidityResponse(
        code=result.code,
        is_valid=result.is_valid,
        is_short=result.is_short,
        is_full=result.is_full,
    )


@router.get("/{code}", response_model=LocatedCodeResponse)
async def decode(code: str) -> LocatedCodeResponse:
    return _located_response(code_service.decode_code(code))
