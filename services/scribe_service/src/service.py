from typing import Any, Callable, Optional

from opentelemetry import trace

from .config import settings
from .exceptions import BackendNotConfigured, InvalidInput, UnparsableResponse
from .extraction import extract_json
from .generation import GenerationClient
from .logging import jlog
from .normalize import (
    normalize_drug_classification,
    normalize_followup,
    normalize_hospital_order,
    normalize_note,
)
from .prompt import (
    build_drug_classification_prompt,
    build_followup_prompt,
    build_hospital_order_prompt,
    build_note_prompt,
)
from .sanitize import hash_preview, normalize_string_array, normalize_text
from .schemas import (
    DrugClassificationRequest,
    DrugClassificationResponse,
    FollowupRequest,
    FollowupResponse,
    GenerationOptions,
    GenerationReply,
    GenerationRequest,
    HospitalOrderRequest,
    HospitalOrderResponse,
    NoteRequest,
    NoteResponse,
    Operation,
    Prompt,
)

tracer = trace.get_tracer("scribe.generation")

NOTE_OPTIONS = GenerationOptions(temperature=0.2, max_tokens=800)
FOLLOWUP_OPTIONS = GenerationOptions(temperature=0.3, max_tokens=700)
HOSPITAL_ORDER_OPTIONS = GenerationOptions(temperature=0.2, max_tokens=1200)
DRUG_CLASSIFICATION_OPTIONS = GenerationOptions(temperature=0.1, max_tokens=1500)

def _require(request: GenerationRequest, field: str) -> str:
    value = request.raw_inputs.get(field)
    if not value:
        raise InvalidInput(f"Missing {field}", public_message=f"Campo '{field}' é obrigatório.")
    return value

def _generate_structured(
    request: GenerationRequest,
    prompt: Prompt,
    options: GenerationOptions,
    client: Optional[GenerationClient],
    correlation_id: Optional[str],
) -> GenerationReply:
    if client is None:
        raise BackendNotConfigured("OPENAI_API_KEY not set")

    raw_text = client.generate(prompt, options, correlation_id=correlation_id)
    try:
        parsed = extract_json(raw_text)
    except UnparsableResponse:
        jlog(
            event=f"{request.operation.value}_unparsable",
            severity="ERROR",
            correlation_id=correlation_id,
            reply_preview=hash_preview(raw_text),
        )
        raise
    return GenerationReply(raw_text=raw_text, parsed_json=parsed)

def _run(
    request: GenerationRequest,
    span_name: str,
    build: Callable[[], Prompt],
    options: GenerationOptions,
    normalize: Callable[[Any], Any],
    client: Optional[GenerationClient],
    correlation_id: Optional[str],
):
    with tracer.start_as_current_span(span_name) as span:
        span.set_attribute("operation", request.operation.value)
        span.set_attribute("model_name", settings.generation_model)
        span.set_attribute("correlation_id", correlation_id or "")

        prompt = build()
        span.set_attribute("prompt_preview", hash_preview(prompt.user))

        reply = _generate_structured(request, prompt, options, client, correlation_id)
        result = normalize(reply.parsed_json)

        jlog(
            event=f"{request.operation.value}_ok",
            correlation_id=correlation_id,
            model_name=settings.generation_model,
            input_preview=hash_preview(prompt.user),
            reply_preview=hash_preview(reply.raw_text),
        )
        return result

def generate_note(
    payload: NoteRequest,
    client: Optional[GenerationClient],
    correlation_id: Optional[str] = None,
) -> NoteResponse:
    request = GenerationRequest(
        operation=Operation.NOTE,
        raw_inputs={"transcricao": normalize_text(payload.transcricao, settings.max_transcript_chars)},
        sanitized=True,
    )
    transcricao = _require(request, "transcricao")
    return _run(
        request, "NoteGeneration",
        lambda: build_note_prompt(transcricao),
        NOTE_OPTIONS, normalize_note, client, correlation_id,
    )

def generate_followup_questions(
    payload: FollowupRequest,
    client: Optional[GenerationClient],
    correlation_id: Optional[str] = None,
) -> FollowupResponse:
    request = GenerationRequest(
        operation=Operation.FOLLOWUP_QUESTIONS,
        raw_inputs={
            "soap": normalize_text(payload.soap, settings.max_soap_chars),
            "queixa_principal": normalize_text(payload.queixa_principal, settings.max_complaint_chars),
            "historico_resumido": normalize_text(payload.historico_resumido, settings.max_history_chars),
        },
        sanitized=True,
    )
    soap = _require(request, "soap")
    return _run(
        request, "FollowupQuestions",
        lambda: build_followup_prompt(
            soap,
            queixa_principal=request.raw_inputs["queixa_principal"],
            historico_resumido=request.raw_inputs["historico_resumido"],
        ),
        FOLLOWUP_OPTIONS, normalize_followup, client, correlation_id,
    )

def generate_hospital_order(
    payload: HospitalOrderRequest,
    client: Optional[GenerationClient],
    correlation_id: Optional[str] = None,
) -> HospitalOrderResponse:
    request = GenerationRequest(
        operation=Operation.HOSPITAL_ORDER,
        raw_inputs={"transcricao": normalize_text(payload.transcricao, settings.max_transcript_chars)},
        sanitized=True,
    )
    transcricao = _require(request, "transcricao")
    return _run(
        request, "HospitalOrder",
        lambda: build_hospital_order_prompt(transcricao),
        HOSPITAL_ORDER_OPTIONS, normalize_hospital_order, client, correlation_id,
    )

def classify_drugs(
    payload: DrugClassificationRequest,
    client: Optional[GenerationClient],
    correlation_id: Optional[str] = None,
) -> DrugClassificationResponse:
    request = GenerationRequest(
        operation=Operation.DRUG_CLASSIFICATION,
        raw_inputs={
            "medicamentos": normalize_string_array(payload.medicamentos, settings.max_drugs, settings.max_drug_chars),
        },
        sanitized=True,
    )
    medicamentos = request.raw_inputs["medicamentos"]
    if not medicamentos:
        jlog(event="drug_classification_skipped", correlation_id=correlation_id, reason="empty_list")
        return DrugClassificationResponse()

    return _run(
        request, "DrugClassification",
        lambda: build_drug_classification_prompt(medicamentos),
        DRUG_CLASSIFICATION_OPTIONS,
        lambda parsed: normalize_drug_classification(parsed, max_entries=len(medicamentos)),
        client, correlation_id,
    )
