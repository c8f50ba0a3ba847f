# Core subpackage for fernql: type definitions and the build/execute/validate stages.
from .errors import BaseError, ArgsError, QueryError, ResultError, InitializationError, UnresolvedTypeError
from .fields import ArrayOptions, InputFieldType, FieldDef, ResolverInfo, ValidatorInfo, ResolverNode, field, input_field
from .types import ScalarType, ObjectType, InputType, ObjectTypeLookup, InputTypeLookup, RestOptions, RootOperation
from .utils import UNSET, LOOKUP, is_object, process_error
from .args import ArgsValidator
from .tree import ResolverTreeBuilder
from .executor import ResolverTreeProcessor
from .results import ResultValidator, validate_result_fields, validate_result_nullish

__all__ = [
    'BaseError','ArgsError','QueryError','ResultError','InitializationError','UnresolvedTypeError',
    'ArrayOptions','InputFieldType','FieldDef','ResolverInfo','ValidatorInfo','ResolverNode','field','input_field',
    'ScalarType','ObjectType','InputType','ObjectTypeLookup','InputTypeLookup','RestOptions','RootOperation',
    'UNSET','LOOKUP','is_object','process_error',
    'ArgsValidator','ResolverTreeBuilder','ResolverTreeProcessor','ResultValidator',
    'validate_result_fields','validate_result_nullish',
]
