import json

import pytest

from services.scribe_service.src.exceptions import UnparsableResponse
from services.scribe_service.src.extraction import extract_json


def test_direct_parse():
    assert extract_json('{"soap": "S: ok", "prescricao": ""}') == {"soap": "S: ok", "prescricao": ""}


def test_direct_parse_ignores_surrounding_whitespace():
    assert extract_json('\n\n  {"a": 1}  \n') == {"a": 1}


def test_direct_parse_accepts_non_object_json():
    assert extract_json("[1, 2, 3]") == [1, 2, 3]


def test_recovers_object_wrapped_in_prose():
    raw = 'Here is the result:\n{"soap":"S: ok","prescricao":""}\nThanks'
    assert extract_json(raw) == {"soap": "S: ok", "prescricao": ""}


def test_recovers_object_inside_code_fence():
    raw = '```json\n{"perguntas": ["Tem febre?", "Usa algum remédio?"]}\n```'
    assert extract_json(raw) == {"perguntas": ["Tem febre?", "Usa algum remédio?"]}


@pytest.mark.parametrize("prefix,suffix", [
    ("", " trailing words"),
    ("Resposta: ", ""),
    ("```\n", "\n```"),
    ("Segue o JSON solicitado -> ", " <- fim."),
])
def test_recovers_nested_json_exactly(prefix, suffix):
    payload = {
        "gestacao": [{"drug": "Dipirona", "category": "C", "description": "Evitar no 3º trimestre"}],
        "lactacao": [{"drug": "Dipirona", "category": "B", "description": "Compatível"}],
    }
    raw = prefix + json.dumps(payload, ensure_ascii=False) + suffix
    assert extract_json(raw) == payload


@pytest.mark.parametrize("raw", [
    "",
    "   ",
    "no json here at all",
    "only a closing brace } here",
    "} reversed braces {",
])
def test_no_brace_pair_is_unparsable(raw):
    with pytest.raises(UnparsableResponse):
        extract_json(raw)


@pytest.mark.parametrize("raw", [
    'prefix {"a": 1,} suffix',
    "prefix {'a': 1} suffix",
    'first {"a": 1} and second {"b": 2}',
    '{"a": {"b": 1}',
    '{"n": ' + "9" * 5000 + '}',
    'Resultado: {"n": ' + "9" * 5000 + '} fim',
    "[" * 100000 + "]" * 100000,
    '{"a": ' + "[" * 100000 + "]" * 100000 + '}',
])
def test_invalid_slice_is_unparsable(raw):
    with pytest.raises(UnparsableResponse):
        extract_json(raw)
