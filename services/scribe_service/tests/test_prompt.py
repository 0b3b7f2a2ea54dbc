import pytest
from pydantic import ValidationError

from services.scribe_service.src.prompt import (
    DISALLOWED_TERMS,
    build_drug_classification_prompt,
    build_followup_prompt,
    build_hospital_order_prompt,
    build_note_prompt,
)


def test_note_prompt_embeds_transcript_and_schema():
    prompt = build_note_prompt("Paciente com dor de cabeça há 2 dias.")
    assert prompt.user == "TRANSCRIÇÃO DA CONSULTA:\n\nPaciente com dor de cabeça há 2 dias."
    assert '"soap"' in prompt.system
    assert '"prescricao"' in prompt.system
    assert "Não inventar dados" in prompt.system


def test_prompts_are_deterministic():
    assert build_note_prompt("abc") == build_note_prompt("abc")
    assert build_hospital_order_prompt("abc") == build_hospital_order_prompt("abc")
    assert build_followup_prompt("S: x", "tosse", "HAS") == build_followup_prompt("S: x", "tosse", "HAS")
    assert build_drug_classification_prompt(["a", "b"]) == build_drug_classification_prompt(["a", "b"])


def test_prompt_is_immutable():
    prompt = build_note_prompt("abc")
    with pytest.raises(ValidationError):
        prompt.user = "changed"


def test_followup_prompt_optional_sections():
    bare = build_followup_prompt("S: tosse seca")
    assert bare.user == "SOAP:\n\nS: tosse seca"

    full = build_followup_prompt("S: tosse seca", queixa_principal="tosse", historico_resumido="asma")
    assert "QUEIXA PRINCIPAL:\n\ntosse" in full.user
    assert "HISTÓRICO RESUMIDO:\n\nasma" in full.user
    assert '"perguntas"' in full.system


def test_hospital_order_prompt_lists_disallowed_terms():
    prompt = build_hospital_order_prompt("Internar para antibioticoterapia.")
    for term, replacement in DISALLOWED_TERMS.items():
        assert f'"{term}" -> usar "{replacement}"' in prompt.system
    assert '"prescricao_hospitalar"' in prompt.system


def test_drug_classification_prompt_lists_drugs_and_scale():
    prompt = build_drug_classification_prompt(["Dipirona", "Losartana"])
    assert prompt.user == "MEDICAMENTOS:\n\n- Dipirona\n- Losartana"
    for category in ('"A"', '"B"', '"C"', '"D"', '"E"', '"NA"'):
        assert category in prompt.system
