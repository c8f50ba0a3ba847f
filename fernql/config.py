"""Runtime parameters for the request pipeline and the HTTP binding.

Values can be given explicitly or read from the environment (and an optional
``.env`` file) via :meth:`FernParams.from_env`:

  FERNQL_DEBUG                '1' to include stack traces in error responses (default '0')
  FERNQL_PATH                 path of the generic endpoint (default '/fernql')
  FERNQL_PROCESS_ENTIRE_TREE  '0' to return root resolver output without running nested resolvers
  FERNQL_LOOKUP_VALUE         string used as the selection marker instead of ``true``
"""
from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Any, Optional

from dotenv import load_dotenv

from .core.errors import InitializationError

_TRUTHY = ('1', 'true', 't', 'yes', 'y', 'on')


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class FernParams:
    debug: bool = False
    lookup_value: Any = True
    path: str = '/fernql'
    process_entire_tree: bool = True

    def validate(self) -> 'FernParams':
        if not isinstance(self.path, str) or not self.path.startswith('/'):
            raise InitializationError("Invalid fernql path")
        return self

    @classmethod
    def from_env(cls, *, dotenv_path: Optional[str] = None, load_env_file: bool = True) -> 'FernParams':
        if load_env_file:
            load_dotenv(dotenv_path)
        lookup_value: Any = os.getenv('FERNQL_LOOKUP_VALUE')
        return cls(
            debug=_env_flag('FERNQL_DEBUG', False),
            lookup_value=True if lookup_value is None else lookup_value,
            path=os.getenv('FERNQL_PATH', '/fernql'),
            process_entire_tree=_env_flag('FERNQL_PROCESS_ENTIRE_TREE', True),
        ).validate()


__all__ = ['FernParams']
