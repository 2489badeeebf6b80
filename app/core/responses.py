from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel


def format_default_response(status_code: int, message: Optional[str] = None, body: Any = None) -> JSONResponse:
    """Wrap a result in the {statusCode, message, body} envelope used by every route"""
    if isinstance(body, BaseModel):
        body = body.model_dump(by_alias=True, mode="json")
    return JSONResponse(
        status_code=status_code,
        content={
            "statusCode": status_code,
            "message": message,
            "body": jsonable_encoder(body),
        },
    )
