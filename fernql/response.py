from __future__ import annotations
import traceback
from typing import Any, Dict, Optional

from .core.errors import BaseError


def generate_normal_response(data: Any) -> Dict[str, Any]:
    return _generate_response(data)


def generate_error_response(error: BaseError, *, debug: bool = False) -> Dict[str, Any]:
    return _generate_response(None, error, debug=debug)


def _generate_response(data: Any, error: Optional[BaseError] = None, *, debug: bool = False) -> Dict[str, Any]:
    response: Dict[str, Any] = {'data': data}
    if error is not None:
        payload: Dict[str, Any] = {
            'message': str(error),
            'type': error.error_name,
            'fieldPath': error.field_path,
        }
        if debug:
            payload['stack'] = ''.join(traceback.format_exception(type(error), error, error.__traceback__))
        response['error'] = payload
    return response


__all__ = ['generate_normal_response', 'generate_error_response']
