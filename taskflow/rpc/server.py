"""
RPC Server Implementation

A registry of named procedures. Each procedure pairs an input schema with a
handler and an optional output schema; ``invoke`` validates the raw payload,
runs the handler inside the caller's database session and serializes the
result.
"""

from typing import Any, Callable, Dict, Optional, Type
from dataclasses import dataclass
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlmodel import Session

from taskflow.services.errors import NotFoundError, ServiceError, ValidationError
from taskflow.utils.logger import get_logger, redact

logger = get_logger("taskflow.rpc")

QUERY = "query"
MUTATION = "mutation"


@dataclass
class RPCProcedure:
    """RPC procedure definition"""
    name: str
    description: str
    kind: str
    handler: Callable[[Session, Any], Any]
    input_model: Optional[Type[BaseModel]] = None
    output_model: Optional[Type[BaseModel]] = None


class RPCServer:
    """
    RPC Server for the taskflow API

    Procedures are looked up by name. Input validation happens here, before a
    handler ever sees the store.
    """

    def __init__(self, name: str = "taskflow-rpc"):
        self.procedures: Dict[str, RPCProcedure] = {}
        self.name = name

    def register_procedure(self, procedure: RPCProcedure):
        """Register a procedure with the RPC server"""
        if procedure.name in self.procedures:
            logger.warning("Procedure already registered, overwriting", procedure=procedure.name)

        self.procedures[procedure.name] = procedure
        logger.debug("Registered RPC procedure", procedure=procedure.name, kind=procedure.kind)

    def get_procedure(self, name: str) -> RPCProcedure:
        """Get a registered procedure by name"""
        if name not in self.procedures:
            raise NotFoundError(
                f"Procedure {name} not found",
                {"procedure": name, "available": self.list_procedures()}
            )
        return self.procedures[name]

    def list_procedures(self) -> list[str]:
        """List all registered procedure names"""
        return list(self.procedures.keys())

    def parse_input(self, procedure: RPCProcedure, payload: Any) -> Any:
        """Validate a raw payload against the procedure's input schema."""
        if procedure.input_model is None:
            return None
        try:
            return procedure.input_model.model_validate(payload if payload is not None else {})
        except PydanticValidationError as e:
            errors = [
                {
                    "field": ".".join(str(part) for part in err["loc"]) or "input",
                    "message": err["msg"],
                    "type": err["type"],
                }
                for err in e.errors()
            ]
            raise ValidationError(f"Invalid input for {procedure.name}", {"errors": errors})

    def serialize(self, procedure: RPCProcedure, result: Any) -> Any:
        if result is None or procedure.output_model is None:
            return result
        if isinstance(result, list):
            return [procedure.output_model.model_validate(item) for item in result]
        return procedure.output_model.model_validate(result)

    def invoke(self, name: str, session: Session, payload: Any = None) -> Any:
        """
        Invoke a procedure with a raw payload

        Args:
            name: Name of the procedure to invoke
            session: Database session the handler runs in
            payload: Unvalidated input (usually decoded JSON)

        Returns:
            Output schema instance, list of them, plain data, or None

        Raises:
            ServiceError: For any structured failure (validation, not found, ...)
        """
        procedure = self.get_procedure(name)
        params = redact(payload) if isinstance(payload, dict) else {}
        logger.info("Invoking RPC procedure", procedure=name, params=params)

        data = self.parse_input(procedure, payload)

        try:
            result = procedure.handler(session, data)
        except ServiceError as e:
            session.rollback()
            logger.warning("Procedure failed", procedure=name, code=e.code, error=e.message)
            raise
        except Exception:
            session.rollback()
            logger.exception("Procedure crashed", procedure=name)
            raise

        logger.info("Procedure executed successfully", procedure=name)
        return self.serialize(procedure, result)

    def get_procedure_schemas(self) -> Dict[str, Dict[str, Any]]:
        """Get JSON schemas for all registered procedures"""
        return {
            name: {
                "name": procedure.name,
                "description": procedure.description,
                "kind": procedure.kind,
                "input": procedure.input_model.model_json_schema() if procedure.input_model else None,
            }
            for name, procedure in self.procedures.items()
        }


# Global RPC server instance
rpc_server = RPCServer()


def get_rpc_server() -> RPCServer:
    """Get the global RPC server instance"""
    return rpc_server
