import time
from typing import Any, Dict, Optional

from openai import APIConnectionError, APIStatusError, OpenAI, OpenAIError

from .config import settings
from .exceptions import BackendUnavailable, EmptyCompletion
from .logging import jlog
from .schemas import GenerationOptions, Prompt

BODY_LOG_LIMIT = 2000

class GenerationClient:
    """
    Thin wrapper over an OpenAI-compatible chat completions backend.

    One backend call per `generate`; no retry loop. Timeouts are whatever the
    SDK transport enforces unless `timeout` is given.
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        json_mode: bool = True,
    ):
        self.model = model
        self.timeout = timeout
        self.json_mode = json_mode
        self._client = OpenAI(api_key=api_key, base_url=base_url)

    def generate(
        self,
        prompt: Prompt,
        options: GenerationOptions,
        correlation_id: Optional[str] = None,
    ) -> str:
        kwargs: Dict[str, Any] = dict(
            model=self.model,
            messages=[
                {"role": "system", "content": prompt.system},
                {"role": "user", "content": prompt.user},
            ],
            temperature=options.temperature,
            max_tokens=options.max_tokens,
        )
        if self.json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout

        try:
            start = time.time()
            completion = self._client.chat.completions.create(**kwargs)  # type: ignore
            elapsed = time.time() - start
        except APIStatusError as e:
            body = _response_text(e)
            jlog(
                event="generation_backend_error",
                severity="ERROR",
                correlation_id=correlation_id,
                model_name=self.model,
                backend_status=e.status_code,
                backend_body=body,
            )
            raise BackendUnavailable(f"LLM status {e.status_code}", backend_status=e.status_code, backend_body=body) from e
        except APIConnectionError as e:
            jlog(event="generation_backend_error", severity="ERROR", correlation_id=correlation_id, model_name=self.model, error=str(e))
            raise BackendUnavailable(f"LLM timeout/conn: {e}") from e
        except OpenAIError as e:
            jlog(event="generation_backend_error", severity="ERROR", correlation_id=correlation_id, model_name=self.model, error=str(e))
            raise BackendUnavailable(f"LLM error: {e}") from e

        choices = getattr(completion, "choices", None) or []
        message = getattr(choices[0], "message", None) if choices else None
        content = getattr(message, "content", None)
        if not isinstance(content, str) or not content.strip():
            raise EmptyCompletion("LLM returned no message content")

        usage = getattr(completion, "usage", None)
        jlog(
            event="generation_ok",
            correlation_id=correlation_id,
            model_name=self.model,
            latency_ms=int(elapsed * 1000),
            prompt_tokens=getattr(usage, "prompt_tokens", None),
            completion_tokens=getattr(usage, "completion_tokens", None),
            total_tokens=getattr(usage, "total_tokens", None),
        )
        return content

def _response_text(e: APIStatusError) -> str:
    try:
        text = e.response.text
    except Exception:
        text = str(e.body or "")
    return text[:BODY_LOG_LIMIT]

def make_generation_client() -> Optional[GenerationClient]:
    """Build the process client from settings, or None when no credential is configured."""
    if not settings.openai_api_key:
        return None
    return GenerationClient(
        api_key=settings.openai_api_key,
        model=settings.generation_model,
        base_url=settings.openai_base_url,
        timeout=settings.generation_timeout_s,
        json_mode=settings.generation_json_mode,
    )
