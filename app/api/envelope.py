# app/api/envelope.py
from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app.domain.schemas import Envelope


def envelope(status: int, message: str, data: Any = None, headers: dict | None = None) -> JSONResponse:
    """`{status, message, data}` with the HTTP status mirroring `status`."""
    body = Envelope(status=status, message=message, data=data if data is not None else {})
    return JSONResponse(status_code=status, content=jsonable_encoder(body), headers=headers)
