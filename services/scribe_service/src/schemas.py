from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

# -----------------------
# Internal records
# -----------------------

class Operation(str, Enum):
    NOTE = "note"
    FOLLOWUP_QUESTIONS = "followup_questions"
    HOSPITAL_ORDER = "hospital_order"
    DRUG_CLASSIFICATION = "drug_classification"

class GenerationRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    operation: Operation
    raw_inputs: Dict[str, Any] = Field(default_factory=dict)
    sanitized: bool = False

class GenerationReply(BaseModel):
    raw_text: str
    parsed_json: Optional[Any] = None

class GenerationOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    temperature: float = 0.2
    max_tokens: int = 800

class Prompt(BaseModel):
    model_config = ConfigDict(frozen=True)

    system: str = Field(..., description="Static instruction template for the operation")
    user: str = Field(..., description="Sanitized payload, embedded verbatim")

# -----------------------
# HTTP bodies
# -----------------------
# Request fields are typed loosely on purpose: the sanitizer turns anything
# that is not a string (or list of strings) into an empty value.

class NoteRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    transcricao: Any = Field(default=None, description="Free-text consultation transcript")

class NoteResponse(BaseModel):
    soap: str = ""
    prescricao: str = ""

class FollowupRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    soap: Any = Field(default=None, description="SOAP note the questions are based on")
    queixa_principal: Any = None
    historico_resumido: Any = None

class FollowupResponse(BaseModel):
    perguntas: List[str] = Field(default_factory=list)

class HospitalOrderRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    transcricao: Any = Field(default=None, description="Free-text consultation transcript")

class HospitalOrderResponse(BaseModel):
    prescricao_hospitalar: str = ""

class DrugClassificationRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    medicamentos: Any = Field(default=None, description="Drug names to classify")

Category = Literal["A", "B", "C", "D", "E", "NA"]

class DrugSafetyEntry(BaseModel):
    drug: str
    category: Category
    description: str

class DrugClassificationResponse(BaseModel):
    gestacao: List[DrugSafetyEntry] = Field(default_factory=list)
    lactacao: List[DrugSafetyEntry] = Field(default_factory=list)

class ErrorResponse(BaseModel):
    error: str
