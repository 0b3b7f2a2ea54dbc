from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

class Settings(BaseSettings):

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Core
    service_name: str = "scribe-service"
    environment: str = "local"
    log_level: str = "INFO"
    port: int = 3000

    # Tracing
    use_cloud_trace: bool = False
    trace_console: bool = False

    # Generation backend
    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None
    generation_model: str = "gpt-4o-mini"
    generation_json_mode: bool = True
    generation_timeout_s: Optional[float] = None  # None defers to the SDK transport

    # Input limits (characters / items)
    max_transcript_chars: int = 20000
    max_soap_chars: int = 20000
    max_complaint_chars: int = 1000
    max_history_chars: int = 4000
    max_drugs: int = 30
    max_drug_chars: int = 120

settings = Settings() # type: ignore
