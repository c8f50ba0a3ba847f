from __future__ import annotations
import inspect
from typing import Any, List, Optional

from strawberry import UNSET

from .errors import BaseError

__all__ = ['UNSET', 'LOOKUP', 'is_object', 'process_error', 'maybe_await']


class _LookupMarker:
    """Selects a field with no arguments, regardless of the configured lookup value."""

    _instance: Optional['_LookupMarker'] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return 'LOOKUP'


LOOKUP = _LookupMarker()


def is_object(value: Any) -> bool:
    return isinstance(value, dict)


def process_error(err: BaseException, field_path: Optional[List[str]] = None) -> BaseError:
    """Normalize ``err`` into the error taxonomy.

    Taxonomy errors keep their own ``field_path`` when one was already set by a
    deeper call, so the most specific origin wins. Anything else is wrapped in a
    :class:`BaseError` chained to the original exception.
    """
    if isinstance(err, BaseError):
        if field_path is not None and err.field_path is None:
            err.field_path = list(field_path)
        return err
    wrapped = BaseError(str(err) or type(err).__name__, field_path=field_path)
    wrapped.__cause__ = err
    return wrapped


async def maybe_await(value: Any) -> Any:
    # user callables (resolvers, validators, transformers) may be sync or async
    if inspect.isawaitable(value):
        return await value
    return value
