"""
NAT service compilation endpoints.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from edge_nat.core.config import settings
from edge_nat.core.directory import get_gateway_directory
from edge_nat.core.exceptions import GatewayNotFoundError, NatCompilationError
from edge_nat.schemas.nat import IdRangeResponse, NatCompileResponse, NatServiceIntent
from edge_nat.services.gateway_directory import GatewayDirectory
from edge_nat.services.nat_service import compile_nat_service

logger = logging.getLogger(__name__)

router = APIRouter()


def _error_detail(exc: NatCompilationError, trace_id: str) -> dict:
    return {
        "message": exc.message,
        "error": type(exc).__name__,
        "context": exc.context,
        "trace_id": trace_id,
    }


@router.get("/id-range", response_model=IdRangeResponse)
async def get_nat_id_range():
    """Return the identifier range auto-assigned NAT rule ids are drawn from."""
    id_range = settings.id_range("nat")
    return IdRangeResponse(minimum=id_range.minimum, maximum=id_range.maximum)


@router.post("/{gateway_id}/compile", response_model=NatCompileResponse)
def compile_nat(
    gateway_id: str,
    intent: NatServiceIntent,
    request: Request,
    directory: GatewayDirectory = Depends(get_gateway_directory),
):
    """
    Compile a NAT service intent into the gateway's NatService configuration.

    Rules keep their declared order. Rules without an id get sequential ids
    from the NAT id range. Any invalid rule or unknown network fails the
    whole request; no partial configuration is returned.
    """
    trace_id = getattr(request.state, "trace_id", "-")
    try:
        config = compile_nat_service(
            gateway_id,
            intent.model_dump(),
            directory,
            settings.id_range("nat"),
        )
    except GatewayNotFoundError as e:
        logger.warning(f"[{trace_id}] {e.message}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=_error_detail(e, trace_id)
        )
    except NatCompilationError as e:
        logger.warning(f"[{trace_id}] NAT compilation failed for gateway {gateway_id}: {e.message}")
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=_error_detail(e, trace_id)
        )

    return NatCompileResponse(
        gateway_id=gateway_id,
        rule_count=len(config["NatRule"]),
        config=config,
    )
