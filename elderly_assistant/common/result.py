"""
Enveloppe de réponse uniforme {code, message, data}.
- En interne: Result = Ok | Err (variante succès avec data, variante erreur avec code + message).
- En bordure (vues): to_envelope() sérialise vers la forme historique attendue par l'app mobile.
  code=0 / message="success" en cas de succès, code=500 (ou code explicite) sinon.
"""
from dataclasses import dataclass
from typing import Any, Optional, Union

from pydantic import BaseModel

from elderly_assistant.common.errors import AppError

SUCCESS_CODE = 0
SUCCESS_MESSAGE = "success"
DEFAULT_ERROR_CODE = 500


class Envelope(BaseModel):
    code: int
    message: str
    data: Optional[Any] = None


@dataclass(frozen=True)
class Ok:
    data: Any = None


@dataclass(frozen=True)
class Err:
    message: str
    code: int = DEFAULT_ERROR_CODE


Result = Union[Ok, Err]


def from_exception(exc: Exception) -> Err:
    """Convertit une exception en variante Err (message brut de l'exception)."""
    if isinstance(exc, AppError):
        return Err(message=exc.message, code=exc.code)
    return Err(message=str(exc) or exc.__class__.__name__)


def to_envelope(result: Result) -> dict:
    if isinstance(result, Ok):
        return Envelope(code=SUCCESS_CODE, message=SUCCESS_MESSAGE, data=result.data).model_dump()
    return Envelope(code=result.code, message=result.message, data=None).model_dump()


def success(data: Any = None) -> dict:
    return to_envelope(Ok(data))


def error(message: str, code: int = DEFAULT_ERROR_CODE) -> dict:
    return to_envelope(Err(message=message, code=code))
