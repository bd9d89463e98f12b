"""Request validation utilities."""

import json
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from core.models.errors import RequestValidationError
from core.utils.constants import ERROR_CODE_INVALID_JSON, MESSAGE_INVALID_JSON_BODY

ModelT = TypeVar("ModelT", bound=BaseModel)


def sanitize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Sanitize Pydantic validation errors for logs and error details.

    Removes sensitive/internal fields like:
    - url
    - ctx
    - input
    """
    sanitized: list[dict[str, str]] = []

    for err in errors:
        field = ".".join(str(x) for x in err.get("loc", [])) or "body"
        msg = err.get("msg", "Invalid value").replace("Value error,", "").strip()

        sanitized.append({"field": field, "message": msg})

    return sanitized


def parse_json_body(raw: str) -> Any:
    """Parse a JSON request body.

    Raises:
        RequestValidationError: If the body is not valid JSON
    """
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, TypeError) as exc:
        raise RequestValidationError(
            message=MESSAGE_INVALID_JSON_BODY,
            error_code=ERROR_CODE_INVALID_JSON,
        ) from exc


def validate_request(model: type[ModelT], data: Any, *, message: str) -> ModelT:
    """Validate request data against a Pydantic model.

    Args:
        model: Pydantic model class
        data: Input data to validate
        message: Client-facing message used when validation fails

    Returns:
        The validated model

    Raises:
        RequestValidationError: With sanitized pydantic errors in `details`
    """
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise RequestValidationError(
            message=message,
            details={"errors": sanitize_validation_errors(list(exc.errors()))},
        ) from exc
