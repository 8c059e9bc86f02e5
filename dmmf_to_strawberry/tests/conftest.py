"""
Shared fixtures.

The documents built here follow the shape of the DMMF emitted by the Prisma
toolchain for a relational schema: datamodel, CRUD input and output types in
the "prisma" and "model" namespaces, enums and the model operation mappings.
Only a representative subset of the inputs Prisma declares is produced.
"""

from __future__ import annotations

import ast
from pathlib import Path

import pytest

from dmmf_to_strawberry.pipeline import GeneratorConfig

FILTER_INPUTS = {
    "String": "StringFilter",
    "Int": "IntFilter",
    "Boolean": "BoolFilter",
    "DateTime": "DateTimeFilter",
}

UPDATE_OPERATION_INPUTS = {
    "String": "StringFieldUpdateOperationsInput",
    "Int": "IntFieldUpdateOperationsInput",
    "Boolean": "BoolFieldUpdateOperationsInput",
    "DateTime": "DateTimeFieldUpdateOperationsInput",
}

QUERY_ACTIONS = ("findUnique", "findUniqueOrThrow", "findFirst", "findMany", "aggregate", "groupBy")
MUTATION_ACTIONS = ("createOne", "createMany", "updateOne", "updateMany", "deleteOne", "deleteMany", "upsertOne")


def field(
    name,
    type_,
    *,
    kind="scalar",
    is_id=False,
    is_required=True,
    is_list=False,
    is_unique=False,
    has_default=False,
    relation_name=None,
    documentation=None,
):
    result = {
        "name": name,
        "kind": kind,
        "type": type_,
        "isList": is_list,
        "isRequired": is_required,
        "isId": is_id,
        "isUnique": is_unique,
        "isReadOnly": False,
        "hasDefaultValue": has_default,
    }
    if relation_name:
        result["relationName"] = relation_name
    if documentation:
        result["documentation"] = documentation
    return result


def relation(name, type_, relation_name, *, is_list=False, is_required=True, documentation=None):
    return field(
        name,
        type_,
        kind="object",
        is_list=is_list,
        is_required=is_required and not is_list,
        relation_name=relation_name,
        documentation=documentation,
    )


def model(name, fields, *, documentation=None, primary_key=None, unique_indexes=()):
    result = {
        "name": name,
        "dbName": None,
        "fields": list(fields),
        "primaryKey": primary_key,
        "uniqueIndexes": list(unique_indexes),
    }
    if documentation:
        result["documentation"] = documentation
    return result


def enum(name, values, *, documentation=None):
    result = {"name": name, "values": [{"name": value} for value in values]}
    if documentation:
        result["documentation"] = documentation
    return result


def ref(type_, location="scalar", *, is_list=False):
    return {"type": type_, "location": location, "isList": is_list}


def arg(name, *input_types, is_required=False, is_nullable=False):
    return {
        "name": name,
        "isRequired": is_required,
        "isNullable": is_nullable,
        "inputTypes": list(input_types),
    }


def output_field(name, output_type, *, is_nullable=False, args=()):
    return {"name": name, "isNullable": is_nullable, "outputType": output_type, "args": list(args)}


def _scalar_ref(model_field):
    if model_field["kind"] == "enum":
        return ref(model_field["type"], "enumTypes")
    return ref(model_field["type"])


def _shared_input_types():
    def filter_input(name, scalar):
        return {
            "name": name,
            "fields": [
                arg("equals", ref(scalar)),
                arg("in", ref(scalar, is_list=True)),
                arg("not", ref(scalar), ref(name, "inputObjectTypes")),
            ],
        }

    def operations_input(name, scalar):
        fields = [arg("set", ref(scalar))]
        if scalar == "Int":
            fields.append(arg("increment", ref(scalar)))
        return {"name": name, "fields": fields}

    return [filter_input(name, scalar) for scalar, name in FILTER_INPUTS.items()] + [
        operations_input(name, scalar) for scalar, name in UPDATE_OPERATION_INPUTS.items()
    ]


def _model_input_types(datamodel_model, list_relation_targets):
    name = datamodel_model["name"]
    scalars = [f for f in datamodel_model["fields"] if f["kind"] in ("scalar", "enum")]
    relations = [f for f in datamodel_model["fields"] if f["kind"] == "object"]
    where = f"{name}WhereInput"

    where_fields = [arg("AND", ref(where, "inputObjectTypes", is_list=True), ref(where, "inputObjectTypes"))]
    for f in scalars:
        candidates = [_scalar_ref(f)]
        if f["kind"] == "scalar" and f["type"] in FILTER_INPUTS:
            candidates.insert(0, ref(FILTER_INPUTS[f["type"]], "inputObjectTypes"))
        where_fields.append(arg(f["name"], *candidates))
    for f in relations:
        if f["isList"]:
            where_fields.append(arg(f["name"], ref(f"{f['type']}ListRelationFilter", "inputObjectTypes")))
        else:
            where_fields.append(
                arg(f["name"], ref(f"{f['type']}WhereInput", "inputObjectTypes"), ref("Null"), is_nullable=True)
            )

    unique_fields = [f for f in scalars if f["isId"] or f["isUnique"]]

    def create_fields():
        return [
            arg(f["name"], _scalar_ref(f), is_required=f["isRequired"] and not f["hasDefaultValue"])
            for f in scalars
            if not (f["isId"] and f["hasDefaultValue"])
        ]

    def update_fields():
        result = []
        for f in scalars:
            if f["isId"]:
                continue
            candidates = [_scalar_ref(f)]
            if f["kind"] == "scalar" and f["type"] in UPDATE_OPERATION_INPUTS:
                candidates.append(ref(UPDATE_OPERATION_INPUTS[f["type"]], "inputObjectTypes"))
            result.append(arg(f["name"], *candidates, is_nullable=not f["isRequired"]))
        return result

    input_types = [
        {"name": where, "fields": where_fields},
        {"name": f"{name}WhereUniqueInput", "fields": [arg(f["name"], _scalar_ref(f)) for f in unique_fields]},
        {
            "name": f"{name}OrderByWithRelationInput",
            "fields": [arg(f["name"], ref("SortOrder", "enumTypes")) for f in scalars],
        },
        {"name": f"{name}CreateInput", "fields": create_fields()},
        {"name": f"{name}UncheckedCreateInput", "fields": create_fields()},
        {"name": f"{name}CreateManyInput", "fields": create_fields()},
        {"name": f"{name}UpdateInput", "fields": update_fields()},
        {"name": f"{name}UncheckedUpdateInput", "fields": update_fields()},
    ]
    if name in list_relation_targets:
        input_types.append(
            {
                "name": f"{name}ListRelationFilter",
                "fields": [arg(op, ref(where, "inputObjectTypes")) for op in ("every", "some", "none")],
            }
        )
    return input_types


def _list_args(name):
    return [
        arg("where", ref(f"{name}WhereInput", "inputObjectTypes")),
        arg(
            "orderBy",
            ref(f"{name}OrderByWithRelationInput", "inputObjectTypes", is_list=True),
            ref(f"{name}OrderByWithRelationInput", "inputObjectTypes"),
        ),
        arg("take", ref("Int")),
        arg("skip", ref("Int")),
    ]


def _model_output_types(datamodel_model):
    """Returns the model output type and the per model types of the "prisma" namespace."""
    name = datamodel_model["name"]
    scalars = [f for f in datamodel_model["fields"] if f["kind"] in ("scalar", "enum")]
    list_relations = [f for f in datamodel_model["fields"] if f["kind"] == "object" and f["isList"]]

    fields = []
    for f in datamodel_model["fields"]:
        if f["kind"] == "object":
            target = ref(f["type"], "outputObjectTypes", is_list=f["isList"])
            args = _list_args(f["type"]) if f["isList"] else []
            fields.append(output_field(f["name"], target, is_nullable=not f["isRequired"] and not f["isList"], args=args))
        else:
            fields.append(output_field(f["name"], _scalar_ref(f), is_nullable=not f["isRequired"]))

    prisma_types = []
    if list_relations:
        fields.append(output_field("_count", ref(f"{name}CountOutputType", "outputObjectTypes")))
        prisma_types.append(
            {"name": f"{name}CountOutputType", "fields": [output_field(f["name"], ref("Int")) for f in list_relations]}
        )

    count_aggregate = f"{name}CountAggregateOutputType"
    min_aggregate = f"{name}MinAggregateOutputType"
    prisma_types += [
        {
            "name": f"Aggregate{name}",
            "fields": [
                output_field("_count", ref(count_aggregate, "outputObjectTypes"), is_nullable=True),
                output_field("_min", ref(min_aggregate, "outputObjectTypes"), is_nullable=True),
            ],
        },
        {
            "name": count_aggregate,
            "fields": [output_field(f["name"], ref("Int")) for f in scalars] + [output_field("_all", ref("Int"))],
        },
        {
            "name": min_aggregate,
            "fields": [output_field(f["name"], _scalar_ref(f), is_nullable=True) for f in scalars],
        },
        {
            "name": f"{name}GroupByOutputType",
            "fields": [output_field(f["name"], _scalar_ref(f), is_nullable=not f["isRequired"]) for f in scalars]
            + [
                output_field("_count", ref(count_aggregate, "outputObjectTypes"), is_nullable=True),
                output_field("_min", ref(min_aggregate, "outputObjectTypes"), is_nullable=True),
            ],
        },
    ]
    return {"name": name, "fields": fields}, prisma_types


def _root_fields(name):
    model_ref = ref(name, "outputObjectTypes")
    where = ref(f"{name}WhereInput", "inputObjectTypes")
    where_unique = ref(f"{name}WhereUniqueInput", "inputObjectTypes")
    affected_rows = ref("AffectedRowsOutput", "outputObjectTypes")
    scalar_field_enum = f"{name}ScalarFieldEnum"
    distinct = arg("distinct", ref(scalar_field_enum, "enumTypes", is_list=True), ref(scalar_field_enum, "enumTypes"))

    query = [
        output_field(f"findUnique{name}", model_ref, is_nullable=True, args=[arg("where", where_unique, is_required=True)]),
        output_field(f"findUnique{name}OrThrow", model_ref, args=[arg("where", where_unique, is_required=True)]),
        output_field(f"findFirst{name}", model_ref, is_nullable=True, args=_list_args(name) + [distinct]),
        output_field(f"findMany{name}", ref(name, "outputObjectTypes", is_list=True), args=_list_args(name) + [distinct]),
        output_field(f"aggregate{name}", ref(f"Aggregate{name}", "outputObjectTypes"), args=_list_args(name)),
        output_field(
            f"groupBy{name}",
            ref(f"{name}GroupByOutputType", "outputObjectTypes", is_list=True),
            args=[
                arg("where", where),
                arg("by", ref(scalar_field_enum, "enumTypes", is_list=True), ref(scalar_field_enum, "enumTypes"), is_required=True),
                arg("take", ref("Int")),
                arg("skip", ref("Int")),
            ],
        ),
    ]

    def data(input_name, unchecked_name=None):
        candidates = [ref(input_name, "inputObjectTypes")]
        if unchecked_name:
            candidates.append(ref(unchecked_name, "inputObjectTypes"))
        return arg("data", *candidates, is_required=True)

    mutation = [
        output_field(f"createOne{name}", model_ref, args=[data(f"{name}CreateInput", f"{name}UncheckedCreateInput")]),
        output_field(
            f"createMany{name}",
            affected_rows,
            args=[arg("data", ref(f"{name}CreateManyInput", "inputObjectTypes", is_list=True), is_required=True)],
        ),
        output_field(
            f"updateOne{name}",
            model_ref,
            is_nullable=True,
            args=[data(f"{name}UpdateInput", f"{name}UncheckedUpdateInput"), arg("where", where_unique, is_required=True)],
        ),
        output_field(
            f"updateMany{name}",
            affected_rows,
            args=[data(f"{name}UpdateInput", f"{name}UncheckedUpdateInput"), arg("where", where)],
        ),
        output_field(f"deleteOne{name}", model_ref, is_nullable=True, args=[arg("where", where_unique, is_required=True)]),
        output_field(f"deleteMany{name}", affected_rows, args=[arg("where", where)]),
        output_field(
            f"upsertOne{name}",
            model_ref,
            args=[
                arg("where", where_unique, is_required=True),
                arg("create", ref(f"{name}CreateInput", "inputObjectTypes"), is_required=True),
                arg("update", ref(f"{name}UpdateInput", "inputObjectTypes"), is_required=True),
            ],
        ),
    ]
    return query, mutation


def _mapping(name):
    mapping = {"model": name, "plural": f"{name[0].lower()}{name[1:]}s"}
    for action in QUERY_ACTIONS + MUTATION_ACTIONS:
        if action.endswith("OrThrow"):
            mapping[action] = f"{action.removesuffix('OrThrow')}{name}OrThrow"
        else:
            mapping[action] = f"{action}{name}"
    return mapping


def build_dmmf(models, enums=()):
    """Complete document for the given datamodel models and enums."""
    list_relation_targets = {
        f["type"] for m in models for f in m["fields"] if f["kind"] == "object" and f["isList"]
    }

    input_types = []
    model_output_types = []
    prisma_output_types = []
    query_fields = []
    mutation_fields = []
    for m in models:
        input_types += _model_input_types(m, list_relation_targets)
        model_output_type, prisma_types = _model_output_types(m)
        model_output_types.append(model_output_type)
        prisma_output_types += prisma_types
        query, mutation = _root_fields(m["name"])
        query_fields += query
        mutation_fields += mutation

    prisma_output_types += [
        {"name": "Query", "fields": query_fields},
        {"name": "Mutation", "fields": mutation_fields},
        {"name": "AffectedRowsOutput", "fields": [output_field("count", ref("Int"))]},
    ]

    schema_enums = [{"name": "SortOrder", "values": ["asc", "desc"]}] + [
        {
            "name": f"{m['name']}ScalarFieldEnum",
            "values": [f["name"] for f in m["fields"] if f["kind"] in ("scalar", "enum")],
        }
        for m in models
    ]

    return {
        "datamodel": {"models": list(models), "enums": list(enums), "types": []},
        "schema": {
            "rootQueryType": "Query",
            "rootMutationType": "Mutation",
            "inputObjectTypes": {"prisma": _shared_input_types(), "model": input_types},
            "outputObjectTypes": {"prisma": prisma_output_types, "model": model_output_types},
            "enumTypes": {
                "prisma": schema_enums,
                "model": [{"name": e["name"], "values": [v["name"] for v in e["values"]]} for e in enums],
            },
            "fieldRefTypes": {},
        },
        "mappings": {"modelOperations": [_mapping(m["name"]) for m in models], "otherOperations": {"read": [], "write": []}},
    }


def post_model():
    return model(
        "Post",
        [
            field("id", "Int", is_id=True, has_default=True),
            field("title", "String"),
            field("authorId", "Int"),
        ],
    )


def blog_models():
    user = model(
        "User",
        [
            field("id", "Int", is_id=True, has_default=True),
            field("email", "String", is_unique=True),
            field("name", "String", is_required=False),
            field("role", "Role", kind="enum", has_default=True),
            relation("posts", "Post", "PostToUser", is_list=True),
        ],
        documentation="A blog author",
    )
    post = model(
        "Post",
        [
            field("id", "Int", is_id=True, has_default=True),
            field("title", "String"),
            field("createdAt", "DateTime", has_default=True),
            field("published", "Boolean", has_default=True),
            field("authorId", "Int"),
            relation("author", "User", "PostToUser"),
        ],
    )
    return [user, post]


def blog_enums():
    return [enum("Role", ["USER", "ADMIN"], documentation="Access level")]


def read_module(output_dir: Path, relative: str) -> tuple[str, ast.Module]:
    """Source of a generated unit and its syntax tree."""
    code = (output_dir / relative).read_text()
    return code, ast.parse(code)


def class_def(tree: ast.Module, name: str) -> ast.ClassDef:
    for node in tree.body:
        if isinstance(node, ast.ClassDef) and node.name == name:
            return node
    raise AssertionError(f"class {name} not found")


def method_names(class_node: ast.ClassDef) -> list[str]:
    return [node.name for node in class_node.body if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef))]


def generated_files(output_dir: Path) -> set[str]:
    return {path.relative_to(output_dir).as_posix() for path in output_dir.rglob("*") if path.is_file()}


@pytest.fixture
def post_dmmf():
    """Single model without relations."""
    return build_dmmf([post_model()])


@pytest.fixture
def blog_dmmf():
    """Users and their posts, one to many."""
    return build_dmmf(blog_models(), blog_enums())


@pytest.fixture
def make_dmmf():
    return build_dmmf


@pytest.fixture
def output_dir(tmp_path):
    return tmp_path / "generated"


@pytest.fixture
def make_config(output_dir):
    """Config writing into the temporary output directory, without post-processing."""

    def factory(**options):
        options.setdefault("formatter", None)
        options.setdefault("emit_compiled_code", False)
        return GeneratorConfig(output_dir=str(output_dir), **options)

    return factory


@pytest.fixture
def helpers():
    """Inspection helpers for the generated tree."""

    class Helpers:
        read_module = staticmethod(read_module)
        class_def = staticmethod(class_def)
        method_names = staticmethod(method_names)
        generated_files = staticmethod(generated_files)
        field = staticmethod(field)
        relation = staticmethod(relation)
        model = staticmethod(model)
        enum = staticmethod(enum)
        ref = staticmethod(ref)

    return Helpers
