from __future__ import annotations
from typing import Any, List, Optional, TYPE_CHECKING

from .errors import ArgsError
from .fields import InputFieldType
from .utils import UNSET, is_object, process_error

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from ..registry import FernSchema


class ArgsValidator:
    """Validates and normalizes client-supplied ``__args`` against an argument slot.

    Input-type objects are normalized in place: keys whose validated value is
    absent are removed and scalar values are replaced by their parsed form.
    """

    def __init__(self, schema: 'FernSchema'):
        self.schema = schema

    def validate(self, args: Any, arg_definition: Optional[InputFieldType], field_path: List[str]) -> Any:
        try:
            if arg_definition is None:
                if args is not UNSET and args is not None:
                    raise ArgsError("Not expecting any args")
                return UNSET

            if args is UNSET:
                if arg_definition.required:
                    raise ArgsError("Args is required")
                return UNSET

            if not arg_definition.allow_null and args is None:
                raise ArgsError("Null field is not allowed")

            array_options = arg_definition.array_options
            if array_options:
                if arg_definition.allow_null and not isinstance(args, list) and args is not None:
                    raise ArgsError("Field must be Array or null")
                if not arg_definition.allow_null and not isinstance(args, list):
                    raise ArgsError("Array expected")
                if isinstance(args, list) and not array_options.allow_null_element and any(e is None for e in args):
                    raise ArgsError("Null field is not allowed on array element")

            arg_type = self.schema.resolve_input_type(arg_definition.type)

            if arg_type.kind == 'input':
                candidates = args if (array_options and isinstance(args, list)) else [args]
                for candidate in candidates:
                    if candidate is None:
                        # nullability of both the slot and its elements was checked above
                        continue
                    if not is_object(candidate):
                        if arg_definition.allow_null:
                            raise ArgsError("Object or null expected")
                        raise ArgsError("Object expected")
                    unknown = [key for key in candidate if key not in arg_type.fields]
                    for key, field_def in arg_type.fields.items():
                        validated = self.validate(candidate.get(key, UNSET), field_def, field_path + [key])
                        if validated is UNSET:
                            candidate.pop(key, None)
                        else:
                            candidate[key] = validated
                    if unknown:
                        raise ArgsError(f"Unknown args '{','.join(unknown)}'")
                    if arg_type.inputs_validator is not None:
                        arg_type.inputs_validator(candidate, field_path)
                return args

            parse_value = arg_type.parse_value
            if parse_value is None or args is None:
                return args
            try:
                if array_options and isinstance(args, list):
                    return [None if e is None else parse_value(e) for e in args]
                return parse_value(args)
            except Exception:
                raise ArgsError(f"Invalid scalar value for '{arg_type.name}'")
        except Exception as err:
            raise process_error(err, field_path)
