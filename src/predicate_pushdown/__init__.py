from .adapter import IRowFilter
from .assembler import TreeAssembler
from .builder import PushDownFilterBuilder
from .config import BetweenPolicy, NullPolicy, PushDownSettings
from .evaluator import LeafOperator, LeafOperatorRegistry
from .exceptions import (
    ConstructionError,
    DescriptorError,
    EvaluationError,
    FieldNotFoundError,
    OperatorNotFoundError,
    PushDownError,
    ValidationError,
)
from .fields import Comparator, Field, Fields, RowSchema, as_fields, natural_order
from .filter import PushDownFilter
from .instructions import Instruction, Opcode, replay
from .operators import PredicateKind
from .operators_memory import build_default_registry
from .predicates import (
    CompositePredicate,
    FieldPredicate,
    NodeState,
    OpenComposite,
    Predicate,
    check_arity,
)
from .rows import Row, RowAccessor, resolve_field
from .search_argument import (
    ExpressionBuilder,
    RecordingSearchArgumentBuilder,
    SearchArgument,
    SearchArgumentBuilder,
)

__all__ = [
    # Core types
    "PredicateKind",
    "Predicate",
    "FieldPredicate",
    "CompositePredicate",
    "OpenComposite",
    "NodeState",
    "check_arity",
    # Fields and rows
    "Comparator",
    "Field",
    "Fields",
    "RowSchema",
    "as_fields",
    "natural_order",
    "Row",
    "RowAccessor",
    "resolve_field",
    # Builder
    "PushDownFilterBuilder",
    "TreeAssembler",
    "Instruction",
    "Opcode",
    "replay",
    # Filter
    "PushDownFilter",
    "IRowFilter",
    # Pruning descriptors
    "SearchArgumentBuilder",
    "SearchArgument",
    "ExpressionBuilder",
    "RecordingSearchArgumentBuilder",
    # Configuration
    "PushDownSettings",
    "BetweenPolicy",
    "NullPolicy",
    # Evaluator / strategy
    "LeafOperator",
    "LeafOperatorRegistry",
    "build_default_registry",
    # Exceptions
    "PushDownError",
    "ConstructionError",
    "ValidationError",
    "EvaluationError",
    "OperatorNotFoundError",
    "FieldNotFoundError",
    "DescriptorError",
]
