"""Server-side decorators for endpoint handlers"""
from functools import wraps
from typing import Callable, Any, Type, Optional
from flask import request, jsonify
from werkzeug.exceptions import BadRequest, UnsupportedMediaType
from pydantic import BaseModel, ValidationError
import traceback
import logging

from massing.core import ResponseKey, DocumentNotFoundError, ExportError, ImportPayloadError
from massing.server.enums import Endpoint, HTTPStatus
from massing.validation import ValidationError as EditValidationError

logger = logging.getLogger(__name__)


def _format_pydantic_errors(error: ValidationError) -> str:
    return "; ".join([
        f"{'.'.join(str(part) for part in e['loc']) or 'body'}: {e['msg']}"
        for e in error.errors()
    ])


def _error(message: str, error_type: str, status: HTTPStatus) -> tuple:
    return jsonify({
        ResponseKey.ERROR.value: message,
        ResponseKey.ERROR_TYPE.value: error_type
    }), status.value


def endpoint_error_handler(
    endpoint: Endpoint,
    request_model: Optional[Type[BaseModel]] = None
) -> Callable:
    """
    Decorator for endpoint handlers to provide unified error handling and JSON extraction.

    Handles:
    - JSON data extraction (missing or empty bodies become {})
    - Pydantic model validation (optional, for type safety)
    - BadRequest, pydantic ValidationError, editor ValidationError,
      ImportPayloadError, ExportError and ValueError (returned as 400)
    - DocumentNotFoundError (returned as 404)
    - Generic exceptions (logged with traceback and returned as 500)

    The decorated function receives data as first parameter after self,
    followed by the URL parameters:
        @endpoint_error_handler(Endpoint.EXTRUDE, ExtrudeRequest)
        def _extrude(self, data: ExtrudeRequest, document_id: str):
            ...

    Args:
        endpoint: The Endpoint enum member for this handler
        request_model: Optional Pydantic BaseModel class for request validation

    Returns:
        Decorated function with JSON extraction, validation, and error handling
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                try:
                    raw_data = request.get_json(force=True, silent=False) if request.data else None
                except (BadRequest, UnsupportedMediaType):
                    raise BadRequest("Request body is not valid JSON")

                if raw_data is None:
                    raw_data = {}

                if request_model:
                    if not isinstance(raw_data, dict):
                        raise BadRequest(f"Request body must be a JSON object, got {type(raw_data).__name__}")
                    data = request_model(**raw_data)
                else:
                    data = raw_data

                return func(*args, data, **kwargs)
            except BadRequest as e:
                logger.error(f"{endpoint.value} bad request: {e.description}")
                return _error(e.description, type(e).__name__, HTTPStatus.BAD_REQUEST)
            except ValidationError as e:
                error_msgs = _format_pydantic_errors(e)
                logger.error(f"{endpoint.value} validation error: {error_msgs}")
                return _error(f"Validation error: {error_msgs}", type(e).__name__, HTTPStatus.BAD_REQUEST)
            except EditValidationError as e:
                logger.warning(f"{endpoint.value} rejected: {str(e)}")
                return _error(str(e), e.error_type.value, HTTPStatus.BAD_REQUEST)
            except DocumentNotFoundError as e:
                logger.warning(f"{endpoint.value}: {str(e)}")
                return _error(str(e), type(e).__name__, HTTPStatus.NOT_FOUND)
            except (ImportPayloadError, ExportError, ValueError) as e:
                logger.error(f"{endpoint.value} error: {str(e)}")
                return _error(str(e), type(e).__name__, HTTPStatus.BAD_REQUEST)
            except Exception as e:
                error_trace = traceback.format_exc()
                logger.error(
                    f"{endpoint.value} failed: {str(e)}\n"
                    f"Error type: {type(e).__name__}\n"
                    f"Traceback:\n{error_trace}"
                )
                return _error(f"{endpoint.value} failed: {str(e)}", type(e).__name__,
                              HTTPStatus.INTERNAL_SERVER_ERROR)

        return wrapper

    return decorator
