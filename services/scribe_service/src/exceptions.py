from typing import Optional


class ScribeError(Exception):
    """Base failure for a scribe request. `public_message` is what the caller sees."""
    status_code = 500
    public_message = "Erro interno no servidor."

    def __init__(self, detail: Optional[str] = None, public_message: Optional[str] = None):
        super().__init__(detail or self.public_message)
        if public_message is not None:
            self.public_message = public_message

class InvalidInput(ScribeError):
    """Missing or blank required field in the request body."""
    status_code = 400
    public_message = "Requisição inválida."

class InternalError(ScribeError):
    pass

class BackendNotConfigured(ScribeError):
    public_message = "Variável de ambiente OPENAI_API_KEY não configurada no servidor."

class BackendUnavailable(ScribeError):
    """Transport failure or non-success status from the generation backend."""
    public_message = "Erro ao chamar o serviço de geração de texto."

    def __init__(self, detail: str, backend_status: Optional[int] = None, backend_body: Optional[str] = None):
        super().__init__(detail)
        self.backend_status = backend_status
        self.backend_body = backend_body

class EmptyCompletion(ScribeError):
    public_message = "Resposta inesperada do serviço de geração de texto."

class UnparsableResponse(ScribeError):
    public_message = "Não foi possível interpretar a resposta do serviço de geração de texto."
