from typing import Any, Dict, List, Optional

from .sanitize import normalize_string_array, normalize_text
from .schemas import (
    DrugClassificationResponse,
    DrugSafetyEntry,
    FollowupResponse,
    HospitalOrderResponse,
    NoteResponse,
)

CATEGORIES = {"A", "B", "C", "D", "E", "NA"}
DRUG_MAX_CHARS = 120
DESCRIPTION_MAX_CHARS = 80
UNSPECIFIED_DRUG = "não informado"
INSUFFICIENT_DATA = "dados insuficientes"

def _as_object(parsed: Any) -> Dict[str, Any]:
    return parsed if isinstance(parsed, dict) else {}

def _string_or_empty(value: Any) -> str:
    return value if isinstance(value, str) else ""

def normalize_note(parsed: Any) -> NoteResponse:
    data = _as_object(parsed)
    return NoteResponse(
        soap=_string_or_empty(data.get("soap")),
        prescricao=_string_or_empty(data.get("prescricao")),
    )

def normalize_followup(parsed: Any) -> FollowupResponse:
    # Uncapped: the prompt asks for 5-15 questions but nothing enforces it here.
    data = _as_object(parsed)
    return FollowupResponse(perguntas=normalize_string_array(data.get("perguntas")))

def normalize_hospital_order(parsed: Any) -> HospitalOrderResponse:
    data = _as_object(parsed)
    return HospitalOrderResponse(prescricao_hospitalar=_string_or_empty(data.get("prescricao_hospitalar")))

def normalize_category(value: Any) -> str:
    category = normalize_text(value).upper()
    return category if category in CATEGORIES else "NA"

def _normalize_entries(value: Any, max_entries: Optional[int]) -> List[DrugSafetyEntry]:
    if not isinstance(value, list):
        return []
    entries: List[DrugSafetyEntry] = []
    for item in value:
        if max_entries is not None and len(entries) >= max_entries:
            break
        item = _as_object(item)
        entries.append(DrugSafetyEntry(
            drug=normalize_text(item.get("drug"), DRUG_MAX_CHARS) or UNSPECIFIED_DRUG,
            category=normalize_category(item.get("category")),  # type: ignore[arg-type]
            description=normalize_text(item.get("description"), DESCRIPTION_MAX_CHARS) or INSUFFICIENT_DATA,
        ))
    return entries

def normalize_drug_classification(parsed: Any, max_entries: Optional[int] = None) -> DrugClassificationResponse:
    data = _as_object(parsed)
    return DrugClassificationResponse(
        gestacao=_normalize_entries(data.get("gestacao"), max_entries),
        lactacao=_normalize_entries(data.get("lactacao"), max_entries),
    )
