"""Helpers turning request payloads into pydantic models."""

from typing import Any, List, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from vocabdrill_app.core.error_handlers import ValidationError

ModelT = TypeVar('ModelT', bound=BaseModel)


def validate_payload(model: Type[ModelT], data: Any, message: str = 'Invalid request body') -> ModelT:
    """Validate ``data`` against ``model`` or raise the app's ValidationError (HTTP 400)."""
    if data is None:
        raise ValidationError(message)
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        errors = exc.errors(include_url=False, include_context=False, include_input=False)
        raise ValidationError(message, errors={'fields': errors}) from exc


def parse_id_list(raw: Optional[str]) -> List[int]:
    """Parse ``"1,2,3"`` into ``[1, 2, 3]``; blank parts are skipped."""
    if not raw:
        return []
    try:
        return [int(part) for part in raw.split(',') if part.strip()]
    except ValueError as exc:
        raise ValidationError('Expected a comma separated list of ids') from exc
