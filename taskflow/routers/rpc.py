"""RPC router: exposes the procedure registry over HTTP."""
from fastapi import APIRouter, Body, Depends, Query, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from typing import Any, Optional
from sqlmodel import Session
import json

from taskflow.db.config import get_session
from taskflow.rpc.server import MUTATION, RPCServer, get_rpc_server
from taskflow.services.errors import (
    ServiceError,
    ValidationError,
    create_error_response,
    create_success_response,
)

router = APIRouter(tags=["RPC"])  # No prefix since main.py adds /rpc

ERROR_STATUS = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "CONFLICT": status.HTTP_409_CONFLICT,
    "INTEGRITY_VIOLATION": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(error: ServiceError) -> JSONResponse:
    return JSONResponse(
        status_code=ERROR_STATUS.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR),
        content=jsonable_encoder(create_error_response(error)),
    )


def run_procedure(rpc_server: RPCServer, procedure: str, session: Session, payload: Any) -> JSONResponse:
    try:
        result = rpc_server.invoke(procedure, session, payload)
    except ServiceError as e:
        return error_response(e)
    return JSONResponse(content=jsonable_encoder(create_success_response(result)))


@router.get("")
async def list_procedures(rpc_server: RPCServer = Depends(get_rpc_server)):
    """Describe every registered procedure with its input JSON schema."""
    return rpc_server.get_procedure_schemas()


@router.get("/{procedure}")
async def call_query(
    procedure: str,
    input: Optional[str] = Query(None, description="JSON encoded procedure input"),
    session: Session = Depends(get_session),
    rpc_server: RPCServer = Depends(get_rpc_server),
):
    """Run a query procedure. Mutations must be sent with POST."""
    try:
        if rpc_server.get_procedure(procedure).kind == MUTATION:
            return JSONResponse(
                status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
                content={
                    "success": False,
                    "error": {
                        "code": "METHOD_NOT_ALLOWED",
                        "message": f"{procedure} is a mutation; use POST",
                        "details": {"procedure": procedure},
                    },
                },
            )
        payload = json.loads(input) if input else None
    except ServiceError as e:
        return error_response(e)
    except json.JSONDecodeError:
        return error_response(ValidationError("input is not valid JSON", {"field": "input"}))

    return run_procedure(rpc_server, procedure, session, payload)


@router.post("/{procedure}")
async def call_procedure(
    procedure: str,
    payload: Optional[Any] = Body(None),
    session: Session = Depends(get_session),
    rpc_server: RPCServer = Depends(get_rpc_server),
):
    """Run any procedure with the JSON request body as its input."""
    return run_procedure(rpc_server, procedure, session, payload)
