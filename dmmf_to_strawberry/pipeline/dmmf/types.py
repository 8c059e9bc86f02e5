"""
Records of the semantic schema model.

The raw nodes are enriched with display names, aliases, omission flags and
resolved type references. Every record is built once per run by
`DmmfDocument` and read-only afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..config import InputOmitSetting


class TypeLocation(str, Enum):
    """Where the target of a type reference is declared."""

    SCALAR = "scalar"
    ENUM_TYPES = "enumTypes"
    INPUT_OBJECT_TYPES = "inputObjectTypes"
    OUTPUT_OBJECT_TYPES = "outputObjectTypes"
    FIELD_REF_TYPES = "fieldRefTypes"


class ModelAction(str, Enum):
    """Closed set of client primitives exposed as root operations."""

    FIND_UNIQUE = "findUnique"
    FIND_UNIQUE_OR_THROW = "findUniqueOrThrow"
    FIND_FIRST = "findFirst"
    FIND_FIRST_OR_THROW = "findFirstOrThrow"
    FIND_MANY = "findMany"
    AGGREGATE = "aggregate"
    GROUP_BY = "groupBy"
    CREATE_ONE = "createOne"
    CREATE_MANY = "createMany"
    CREATE_MANY_AND_RETURN = "createManyAndReturn"
    UPDATE_ONE = "updateOne"
    UPDATE_MANY = "updateMany"
    UPSERT_ONE = "upsertOne"
    DELETE_ONE = "deleteOne"
    DELETE_MANY = "deleteMany"


SUPPORTED_QUERY_ACTIONS = (
    ModelAction.FIND_UNIQUE,
    ModelAction.FIND_UNIQUE_OR_THROW,
    ModelAction.FIND_FIRST,
    ModelAction.FIND_FIRST_OR_THROW,
    ModelAction.FIND_MANY,
    ModelAction.AGGREGATE,
    ModelAction.GROUP_BY,
)

SUPPORTED_MUTATION_ACTIONS = (
    ModelAction.CREATE_ONE,
    ModelAction.CREATE_MANY,
    ModelAction.CREATE_MANY_AND_RETURN,
    ModelAction.DELETE_ONE,
    ModelAction.UPDATE_ONE,
    ModelAction.DELETE_MANY,
    ModelAction.UPDATE_MANY,
    ModelAction.UPSERT_ONE,
)


class OperationKind(str, Enum):
    QUERY = "Query"
    MUTATION = "Mutation"


@dataclass(frozen=True)
class TypeInfo:
    """A resolved type reference: `type` is already a display name."""

    type: str
    location: TypeLocation = TypeLocation.SCALAR
    is_list: bool = False


@dataclass
class FieldOmission:
    """Per-field omission flags.

    `input` is either a blanket flag or the input contexts the field is
    hidden from.
    """

    output: bool = False
    input: bool | list[InputOmitSetting] = False

    def is_omitted_from_input(self, input_type_name: str) -> bool:
        if isinstance(self.input, bool):
            return self.input
        markers = {
            InputOmitSetting.CREATE: "Create",
            InputOmitSetting.UPDATE: "Update",
            InputOmitSetting.WHERE: "Where",
            InputOmitSetting.ORDER_BY: "OrderBy",
        }
        return any(markers[setting] in input_type_name for setting in self.input)


@dataclass
class ModelField:
    name: str
    kind: str
    type: str  # raw type name
    type_info: TypeInfo
    is_list: bool = False
    is_required: bool = False
    is_id: bool = False
    is_unique: bool = False
    is_read_only: bool = False
    has_default_value: bool = False
    relation_name: str | None = None
    type_field_alias: str | None = None
    docs: str | None = None
    is_omitted: FieldOmission = field(default_factory=FieldOmission)

    @property
    def location(self) -> TypeLocation:
        return self.type_info.location

    @property
    def output_name(self) -> str:
        """Name the field is exposed under in the API."""
        return self.type_field_alias or self.name


@dataclass
class ModelKey:
    """A composite primary key or unique index."""

    name: str | None
    fields: list[str] = field(default_factory=list)


@dataclass
class Model:
    name: str
    type_name: str
    fields: list[ModelField] = field(default_factory=list)
    primary_key: ModelKey | None = None
    unique_indexes: list[ModelKey] = field(default_factory=list)
    docs: str | None = None
    plural: str | None = None
    is_output_omitted: bool = False
    is_input_omitted: bool = False


@dataclass(frozen=True)
class EnumValue:
    name: str  # member name, alias aware
    value: str


@dataclass
class EnumDef:
    name: str
    type_name: str
    values: list[EnumValue] = field(default_factory=list)
    docs: str | None = None


@dataclass
class SchemaArg:
    """An input type field or an output field argument after variant selection."""

    name: str
    type_name: str  # exposed name (field alias or raw name)
    selected_input_type: TypeInfo
    is_required: bool = False
    is_nullable: bool = False
    is_omitted: bool = False

    @property
    def has_mapped_name(self) -> bool:
        return self.name != self.type_name


@dataclass
class InputType:
    name: str
    type_name: str
    fields: list[SchemaArg] = field(default_factory=list)


@dataclass
class OutputField:
    name: str
    output_type: TypeInfo
    is_required: bool = True
    args: list[SchemaArg] = field(default_factory=list)
    args_type_name: str | None = None


@dataclass
class OutputType:
    name: str
    type_name: str
    fields: list[OutputField] = field(default_factory=list)


@dataclass
class Action:
    """One supported primitive of a model bound to a root field."""

    name: str
    field_name: str
    kind: ModelAction
    operation: OperationKind
    prisma_method: str
    method: OutputField
    output_type_name: str
    action_resolver_name: str
    args_type_name: str | None = None

    @property
    def return_type(self) -> TypeInfo:
        return self.method.output_type

    @property
    def is_required(self) -> bool:
        return self.method.is_required


@dataclass
class ModelMapping:
    model_name: str
    model_type_name: str
    collection_name: str
    resolver_name: str
    actions: list[Action] = field(default_factory=list)

    @property
    def query_actions(self) -> list[Action]:
        return [action for action in self.actions if action.operation is OperationKind.QUERY]

    @property
    def mutation_actions(self) -> list[Action]:
        return [action for action in self.actions if action.operation is OperationKind.MUTATION]

    @property
    def query_resolver_name(self) -> str:
        return f"{self.model_type_name}CrudQueryResolver"

    @property
    def mutation_resolver_name(self) -> str:
        return f"{self.model_type_name}CrudMutationResolver"

    def root_resolver_names(self) -> list[str]:
        """Classes of the grouped resolver module, the query one first."""
        names = []
        if self.query_actions:
            names.append(self.query_resolver_name)
        if self.mutation_actions:
            names.append(self.mutation_resolver_name)
        return names


@dataclass
class RelationField:
    field: ModelField
    output_type_field: OutputField
    type: str  # display name of the related model
    args_type_name: str | None = None


@dataclass
class RelationModel:
    model: Model
    output_type: OutputType
    resolver_name: str
    relation_fields: list[RelationField] = field(default_factory=list)
