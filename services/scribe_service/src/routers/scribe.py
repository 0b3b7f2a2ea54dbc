from typing import Any, Callable, Optional

from anyio import to_thread
from fastapi import APIRouter, Body, Depends, Header, Request, status

from ..exceptions import InternalError, ScribeError
from ..generation import GenerationClient
from ..logging import jlog
from ..schemas import (
    DrugClassificationRequest,
    DrugClassificationResponse,
    ErrorResponse,
    FollowupRequest,
    FollowupResponse,
    HospitalOrderRequest,
    HospitalOrderResponse,
    NoteRequest,
    NoteResponse,
)
from ..service import classify_drugs, generate_followup_questions, generate_hospital_order, generate_note

router = APIRouter()

ERROR_RESPONSES: dict = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}

def get_generation_client(request: Request) -> Optional[GenerationClient]:
    return getattr(request.app.state, "generation_client", None)

async def _run_operation(event: str, fn: Callable[..., Any], *args: Any, correlation_id: Optional[str]) -> Any:
    try:
        # Offload the blocking backend call to a worker thread
        return await to_thread.run_sync(fn, *args, correlation_id)
    except ScribeError as e:
        jlog(
            event=f"{event}_failed",
            severity="WARNING" if e.status_code < 500 else "ERROR",
            error_type=type(e).__name__,
            error=str(e),
            status=e.status_code,
            backend_status=getattr(e, "backend_status", None),
            correlation_id=correlation_id,
        )
        raise
    except Exception as e:
        jlog(event=f"{event}_failed", severity="ERROR", error_type=type(e).__name__, error=str(e), correlation_id=correlation_id)
        raise InternalError(f"Unexpected failure in {event}: {e}") from e

@router.post(
    "/gerar-soap",
    response_model=NoteResponse,
    responses=ERROR_RESPONSES,
    summary="Generate SOAP note and prescription from a transcript",
    status_code=status.HTTP_200_OK,
)
async def gerar_soap(
    payload: NoteRequest,
    client: Optional[GenerationClient] = Depends(get_generation_client),
    x_correlation_id: Optional[str] = Header(default=None),
) -> NoteResponse:
    return await _run_operation("note", generate_note, payload, client, correlation_id=x_correlation_id)

@router.post(
    "/recomendacoes-anamnese",
    response_model=FollowupResponse,
    responses=ERROR_RESPONSES,
    summary="Suggest follow-up anamnesis questions from a SOAP note",
    status_code=status.HTTP_200_OK,
)
async def recomendacoes_anamnese(
    payload: FollowupRequest,
    client: Optional[GenerationClient] = Depends(get_generation_client),
    x_correlation_id: Optional[str] = Header(default=None),
) -> FollowupResponse:
    return await _run_operation(
        "followup_questions", generate_followup_questions, payload, client, correlation_id=x_correlation_id
    )

@router.post(
    "/prescricao-hospitalar",
    response_model=HospitalOrderResponse,
    responses=ERROR_RESPONSES,
    summary="Generate a hospital order sheet from a transcript",
    status_code=status.HTTP_200_OK,
)
async def prescricao_hospitalar(
    payload: HospitalOrderRequest,
    client: Optional[GenerationClient] = Depends(get_generation_client),
    x_correlation_id: Optional[str] = Header(default=None),
) -> HospitalOrderResponse:
    return await _run_operation(
        "hospital_order", generate_hospital_order, payload, client, correlation_id=x_correlation_id
    )

@router.post(
    "/classificar-gestacao-lactacao",
    response_model=DrugClassificationResponse,
    responses=ERROR_RESPONSES,
    summary="Classify drugs for pregnancy and lactation safety",
    status_code=status.HTTP_200_OK,
)
async def classificar_gestacao_lactacao(
    payload: Optional[DrugClassificationRequest] = Body(default=None),
    client: Optional[GenerationClient] = Depends(get_generation_client),
    x_correlation_id: Optional[str] = Header(default=None),
) -> DrugClassificationResponse:
    # no body means no medicamentos
    if payload is None:
        payload = DrugClassificationRequest()
    return await _run_operation(
        "drug_classification", classify_drugs, payload, client, correlation_id=x_correlation_id
    )
