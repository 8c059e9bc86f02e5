"""
Barrel and index emitters.

Every generated package re-exports its units through `__init__.py` with an
explicit `__all__`. The index at the root of the output re-exports each
generated category and collects the resolver classes to merge into the
Query and Mutation root types.
"""

from __future__ import annotations

from ..source import SourceProject
from .ast_helpers import all_assign, assign, parse_expr, tuple_of_names
from .layout import (
    ARGS_FOLDER,
    CRUD_FOLDER,
    ENHANCE_MODULE,
    ENUMS_FOLDER,
    INPUTS_FOLDER,
    MODELS_FOLDER,
    OUTPUTS_FOLDER,
    RELATIONS_FOLDER,
    RESOLVERS_FOLDER,
    SCALARS_MODULE,
    ModuleParts,
    package_file,
)

CRUD_QUERY_RESOLVERS_COLLECTION = "crud_query_resolvers"
CRUD_MUTATION_RESOLVERS_COLLECTION = "crud_mutation_resolvers"
ACTION_RESOLVERS_COLLECTION = "action_resolvers"
RELATION_RESOLVERS_COLLECTION = "relation_resolvers"
QUERY_RESOLVERS_COLLECTION = "query_resolvers"
MUTATION_RESOLVERS_COLLECTION = "mutation_resolvers"


def generate_barrel(
    project: SourceProject,
    package_parts: ModuleParts,
    exports: list[tuple[str, str]],
    collections: dict[str, list[str]] | None = None,
) -> None:
    """Emit the `__init__.py` of a package.

    Args:
        project: Project the unit is added to
        package_parts: Location of the package
        exports: (module relative to the package, exported name) pairs
        collections: Tuples of exported names to expose under a name
    """
    source_file = project.create_source_file(package_file(package_parts))
    names = []
    for module, name in exports:
        source_file.add_import(module, name, level=1)
        names.append(name)

    for collection_name, members in (collections or {}).items():
        source_file.add_statement(assign(collection_name, tuple_of_names(members)))
        names.append(collection_name)

    source_file.add_statement(all_assign(names))


def generate_names_barrel(project: SourceProject, package_parts: ModuleParts, names: list[str]) -> None:
    """Barrel of a package holding one unit per exported name."""
    generate_barrel(project, package_parts, [(name, name) for name in names])


def generate_enums_barrel(project: SourceProject, enum_names: list[str]) -> None:
    generate_names_barrel(project, (ENUMS_FOLDER,), enum_names)


def generate_models_barrel(project: SourceProject, model_names: list[str]) -> None:
    generate_names_barrel(project, (MODELS_FOLDER,), model_names)


def generate_inputs_barrel(project: SourceProject, input_names: list[str]) -> None:
    generate_names_barrel(project, (RESOLVERS_FOLDER, INPUTS_FOLDER), input_names)


def generate_outputs_barrel(project: SourceProject, output_names: list[str], args_type_names: list[str]) -> None:
    package = (RESOLVERS_FOLDER, OUTPUTS_FOLDER)
    exports = [(name, name) for name in output_names]
    if args_type_names:
        generate_names_barrel(project, package + (ARGS_FOLDER,), args_type_names)
        exports += [(ARGS_FOLDER, name) for name in args_type_names]
    generate_barrel(project, package, exports)


def generate_resolvers_barrel(
    project: SourceProject,
    resolver_dir: ModuleParts,
    resolver_exports: list[tuple[str, str]],
    args_type_names: list[str],
) -> None:
    """Barrel of one model's resolver directory and of its `args` package.

    Args:
        project: Project the unit is added to
        resolver_dir: Location of the directory
        resolver_exports: (module, resolver class) pairs
        args_type_names: Argument bundles of the `args` package
    """
    exports = list(resolver_exports)
    if args_type_names:
        generate_names_barrel(project, resolver_dir + (ARGS_FOLDER,), args_type_names)
        exports += [(ARGS_FOLDER, name) for name in args_type_names]
    generate_barrel(project, resolver_dir, exports)


def generate_crud_resolvers_barrel(
    project: SourceProject,
    crud_resolvers: dict[str, list[str]],
    action_resolvers: dict[str, list[str]],
    args_type_names: dict[str, list[str]],
    *,
    query_resolvers: list[str],
    mutation_resolvers: list[str],
) -> None:
    """Emit `resolvers/crud/__init__.py`.

    Args:
        project: Project the unit is added to
        crud_resolvers: Model display name -> classes of the grouped resolver module
        action_resolvers: Model display name -> action resolver class names
        args_type_names: Model display name -> argument bundle names
        query_resolvers: Grouped resolvers of the query actions
        mutation_resolvers: Grouped resolvers of the mutation actions
    """
    exports = []
    for model_name, resolver_names in crud_resolvers.items():
        exports += [(model_name, name) for name in resolver_names]
        exports += [(model_name, name) for name in action_resolvers.get(model_name, [])]
        exports += [(f"{model_name}.{ARGS_FOLDER}", name) for name in args_type_names.get(model_name, [])]

    collections = {
        CRUD_QUERY_RESOLVERS_COLLECTION: query_resolvers,
        CRUD_MUTATION_RESOLVERS_COLLECTION: mutation_resolvers,
        ACTION_RESOLVERS_COLLECTION: [name for names in action_resolvers.values() for name in names],
    }
    generate_barrel(project, (RESOLVERS_FOLDER, CRUD_FOLDER), exports, collections)


def generate_relation_resolvers_barrel(
    project: SourceProject,
    relation_resolvers: dict[str, str],
    args_type_names: dict[str, list[str]],
) -> None:
    """Emit `resolvers/relations/__init__.py`."""
    exports = []
    for model_name, resolver_name in relation_resolvers.items():
        exports.append((model_name, resolver_name))
        exports += [(f"{model_name}.{ARGS_FOLDER}", name) for name in args_type_names.get(model_name, [])]

    collections = {RELATION_RESOLVERS_COLLECTION: list(relation_resolvers.values())}
    generate_barrel(project, (RESOLVERS_FOLDER, RELATIONS_FOLDER), exports, collections)


def generate_index_file(project: SourceProject, packages: list[ModuleParts], root_collections: dict[str, list[str]]) -> None:
    """Emit the root `__init__.py`.

    Args:
        project: Project the unit is added to
        packages: Generated category packages, re-exported as a whole
        root_collections: Root type collection name -> resolver tuples it concatenates
    """
    source_file = project.create_source_file(package_file(()))
    for package in packages + [ENHANCE_MODULE, SCALARS_MODULE]:
        source_file.add_import(".".join(package), "*", level=1)

    for collection_name, members in root_collections.items():
        spread = ", ".join(f"*{name}" for name in members)
        source_file.add_statement(assign(collection_name, parse_expr(f"({spread},)")))
