"""
End-to-end tests of the generation pipeline.

Each test generates a complete package into a temporary directory and
inspects the written units.
"""

from __future__ import annotations

import ast
import importlib
import json
import logging
import sys
import warnings

import pytest

from dmmf_to_strawberry import __version__
from dmmf_to_strawberry.pipeline import (
    CodeGenerator,
    EmitBlockKind,
    FormatterKind,
    PipelineState,
    SchemaInconsistencyError,
    generate_code,
)
from dmmf_to_strawberry.pipeline.formatters import RuffFormatter

POST_QUERY_METHODS = [
    "aggregate_post",
    "find_first_post",
    "posts",
    "post",
    "get_post",
    "group_by_post",
]

POST_MUTATION_METHODS = [
    "create_many_post",
    "create_one_post",
    "delete_many_post",
    "delete_one_post",
    "update_many_post",
    "update_one_post",
    "upsert_one_post",
]


def decorator_source(function_node):
    return [ast.unparse(decorator) for decorator in function_node.decorator_list]


def find_method(class_node, name):
    return next(node for node in class_node.body if getattr(node, "name", None) == name)


class TestSingleModel:
    """A model without relations and every block enabled."""

    @pytest.fixture
    def generated(self, post_dmmf, make_config, output_dir):
        written = CodeGenerator(make_config()).generate(post_dmmf)
        return output_dir, written

    def test_every_unit_is_valid_python(self, generated):
        output_dir, written = generated
        python_files = [path for path in written if path.suffix == ".py"]
        assert python_files
        for path in python_files:
            assert path.exists()
            ast.parse(path.read_text(), filename=str(path))

    def test_layout(self, generated, helpers):
        output_dir, _ = generated
        files = helpers.generated_files(output_dir)

        assert {"__init__.py", "enhance.py", "scalars.py", "helpers.py"} <= files
        assert {"enums/SortOrder.py", "enums/PostScalarFieldEnum.py", "models/Post.py"} <= files
        assert {
            "resolvers/inputs/PostCreateInput.py",
            "resolvers/inputs/PostUpdateInput.py",
            "resolvers/inputs/PostWhereInput.py",
            "resolvers/inputs/PostWhereUniqueInput.py",
        } <= files
        assert {
            "resolvers/outputs/AggregatePost.py",
            "resolvers/outputs/PostGroupBy.py",
            "resolvers/outputs/PostCountAggregate.py",
            "resolvers/outputs/AffectedRowsOutput.py",
        } <= files
        assert {
            "resolvers/crud/Post/PostCrudResolver.py",
            "resolvers/crud/Post/CreateOnePostResolver.py",
            "resolvers/crud/Post/FindUniquePostResolver.py",
            "resolvers/crud/Post/UpdateOnePostResolver.py",
            "resolvers/crud/Post/DeleteOnePostResolver.py",
            "resolvers/crud/Post/FindManyPostResolver.py",
            "resolvers/crud/Post/args/FindManyPostArgs.py",
            "resolvers/crud/Post/__init__.py",
            "resolvers/crud/__init__.py",
            "resolvers/__init__.py",
        } <= files
        assert not any(name.startswith("resolvers/relations") for name in files)
        # Root types are exposed through the resolvers only
        assert "resolvers/outputs/Query.py" not in files
        assert "resolvers/inputs/PostUncheckedCreateInput.py" not in files

    def test_model_type(self, generated, helpers):
        output_dir, _ = generated
        code, tree = helpers.read_module(output_dir, "models/Post.py")
        post = helpers.class_def(tree, "Post")

        assert decorator_source(post) == ["strawberry.type(name='Post')"]
        annotations = {node.target.id: ast.unparse(node.annotation) for node in post.body if isinstance(node, ast.AnnAssign)}
        assert annotations == {"id": "int", "title": "str", "authorId": "int"}

    def test_crud_resolver(self, generated, helpers):
        output_dir, _ = generated
        code, tree = helpers.read_module(output_dir, "resolvers/crud/Post/PostCrudResolver.py")
        queries = helpers.class_def(tree, "PostCrudQueryResolver")
        mutations = helpers.class_def(tree, "PostCrudMutationResolver")

        for resolver in (queries, mutations):
            assert decorator_source(resolver) == ["strawberry.type"]
            assert all(isinstance(node, ast.AsyncFunctionDef) for node in resolver.body)
        assert helpers.method_names(queries) == POST_QUERY_METHODS
        assert helpers.method_names(mutations) == POST_MUTATION_METHODS

        assert decorator_source(find_method(queries, "posts")) == ["strawberry.field(name='posts')"]
        assert decorator_source(find_method(mutations, "create_one_post")) == ["strawberry.mutation(name='createOnePost')"]
        assert all(decorator_source(node)[0].startswith("strawberry.mutation(") for node in mutations.body)
        assert "get_prisma_from_context(info).post.find_many(**transform_args(args)" in code
        assert "get_prisma_from_context(info).post.create(**transform_args(args)" in code
        assert "get_prisma_from_context(info).post.find_unique_or_raise(" in code
        assert "from ....helpers import" in code
        assert "from ....resolvers.crud.Post.args.FindManyPostArgs import FindManyPostArgs" in code

    def test_find_many_signature(self, generated, helpers):
        output_dir, _ = generated
        _, tree = helpers.read_module(output_dir, "resolvers/crud/Post/FindManyPostResolver.py")
        method = find_method(helpers.class_def(tree, "FindManyPostResolver"), "posts")

        parameters = [a.arg for a in method.args.args]
        assert parameters == ["self", "info", "where", "orderBy", "take", "skip", "distinct"]
        assert ast.unparse(method.args.args[4].annotation) == "int | None"
        assert all(ast.unparse(default) == "strawberry.UNSET" for default in method.args.defaults)
        assert "list[Annotated['Post', strawberry.lazy('....models.Post')]]" == ast.unparse(method.returns)

    def test_aggregate_and_group_by(self, generated, helpers):
        output_dir, _ = generated
        code, _ = helpers.read_module(output_dir, "resolvers/crud/Post/PostCrudResolver.py")

        assert ".post.aggregate(**transform_args(args), **transform_info_into_prisma_args(info))" in code
        assert ".post.group_by(**transform_args(args), **aggregates)" in code
        assert "('_count', '_avg', '_sum', '_min', '_max')" in code

    def test_args_bundle(self, generated, helpers):
        output_dir, _ = generated
        _, tree = helpers.read_module(output_dir, "resolvers/crud/Post/args/GroupByPostArgs.py")
        bundle = helpers.class_def(tree, "GroupByPostArgs")

        assert decorator_source(bundle) == ["dataclass(kw_only=True)"]
        fields = {node.target.id: node for node in bundle.body}
        assert ast.unparse(fields["by"].annotation) == "list[PostScalarFieldEnum]"
        assert fields["by"].value is None
        assert ast.unparse(fields["take"].value) == "strawberry.UNSET"

    def test_input_type(self, generated, helpers):
        output_dir, _ = generated
        code, tree = helpers.read_module(output_dir, "resolvers/inputs/IntFilter.py")
        int_filter = helpers.class_def(tree, "IntFilter")

        assert decorator_source(int_filter) == ["strawberry.input(name='IntFilter')"]
        assert "in_: list[int] | None = strawberry.field(name='in', default=strawberry.UNSET)" in code
        # Self reference
        assert "not_: Annotated['IntFilter', strawberry.lazy('...resolvers.inputs.IntFilter')] | None" in code

    def test_output_type(self, generated, helpers):
        output_dir, _ = generated
        code, _ = helpers.read_module(output_dir, "resolvers/outputs/AggregatePost.py")

        assert "@strawberry.type(name='AggregatePost')" in code
        assert "_count: Annotated['PostCountAggregate', strawberry.lazy('...resolvers.outputs.PostCountAggregate')] | None" in code
        assert "strawberry.field(name='_count', default=None)" in code

    def test_barrels_and_index(self, generated, helpers):
        output_dir, _ = generated
        code, tree = helpers.read_module(output_dir, "resolvers/crud/__init__.py")
        imported = {
            (node.module, alias.name) for node in tree.body if isinstance(node, ast.ImportFrom) for alias in node.names
        }
        assert ("Post", "PostCrudQueryResolver") in imported
        assert ("Post", "PostCrudMutationResolver") in imported
        assert ("Post", "FindManyPostResolver") in imported
        assert ("Post.args", "FindManyPostArgs") in imported
        assert "crud_query_resolvers = (PostCrudQueryResolver,)" in code
        assert "crud_mutation_resolvers = (PostCrudMutationResolver,)" in code
        assert "action_resolvers = (" in code

        code, _ = helpers.read_module(output_dir, "__init__.py")
        for package in ("enums", "models", "resolvers.inputs", "resolvers.outputs", "resolvers.crud", "enhance", "scalars"):
            assert f"from .{package} import *" in code
        assert "query_resolvers = (*crud_query_resolvers,)" in code
        assert "mutation_resolvers = (*crud_mutation_resolvers,)" in code
        assert "relations" not in code

        code, _ = helpers.read_module(output_dir, "resolvers/crud/Post/__init__.py")
        assert "from .PostCrudResolver import PostCrudMutationResolver, PostCrudQueryResolver" in code

    def test_enhance_map(self, generated, helpers):
        output_dir, _ = generated
        code, tree = helpers.read_module(output_dir, "enhance.py")

        assigned = {node.targets[0].id: node for node in tree.body if isinstance(node, ast.Assign)}
        exported = ast.literal_eval(assigned["__all__"].value)
        assert exported == [
            "crud_resolvers_map",
            "actions_resolvers_map",
            "crud_resolvers_info",
            "args_info",
            "model_fields_info",
            "input_types_info",
            "output_types_info",
            "apply_resolvers_enhance_map",
        ]
        assert ast.literal_eval(assigned["crud_resolvers_info"].value)["Post"]["createOnePost"] == "Mutation"
        assert ast.literal_eval(assigned["model_fields_info"].value) == {"Post": ["id", "title", "authorId"]}
        assert "def apply_resolvers_enhance_map(" in code
        assert "def apply_relation_resolvers_enhance_map(" not in code

    def test_support_modules(self, generated, helpers):
        output_dir, _ = generated
        code, _ = helpers.read_module(output_dir, "helpers.py")
        assert "from prisma import Prisma" in code
        assert 'context.get("prisma")' in code
        assert "def transform_count_field_into_select_relations_count(" in code

        code, _ = helpers.read_module(output_dir, "scalars.py")
        assert "BigInt = strawberry.scalar(" in code
        assert "Bytes = strawberry.scalar(" in code

    def test_generation_header(self, generated):
        output_dir, _ = generated
        header = f"# Generated by dmmf_to_strawberry v{__version__} : dmmf_to_strawberry"
        for relative in ("models/Post.py", "helpers.py", "__init__.py"):
            assert (output_dir / relative).read_text().splitlines()[0] == header


class TestDisabledBlocks:
    def test_enums_and_models_only(self, post_dmmf, make_config, output_dir, helpers):
        config = make_config(emit_only=[EmitBlockKind.ENUMS, EmitBlockKind.MODELS])
        CodeGenerator(config).generate(post_dmmf)
        files = helpers.generated_files(output_dir)

        assert "models/Post.py" in files
        assert "enums/SortOrder.py" in files
        assert "models/__init__.py" in files
        assert "enums/__init__.py" in files
        assert not (output_dir / "resolvers").exists()

        code, tree = helpers.read_module(output_dir, "__init__.py")
        assert "from .models import *" in code
        assert "query_resolvers" not in code

        _, tree = helpers.read_module(output_dir, "enhance.py")
        assigned = {node.targets[0].id: node for node in tree.body if isinstance(node, ast.Assign)}
        assert ast.literal_eval(assigned["__all__"].value) == ["model_fields_info"]

    def test_relation_resolvers_without_crud(self, blog_dmmf, make_config, output_dir, helpers):
        CodeGenerator(make_config(emit_only=[EmitBlockKind.RELATION_RESOLVERS])).generate(blog_dmmf)
        files = helpers.generated_files(output_dir)

        assert "resolvers/relations/User/UserRelationsResolver.py" in files
        assert not (output_dir / "resolvers" / "crud").exists()
        # The relation count is only exposed with the CRUD resolvers
        code, _ = helpers.read_module(output_dir, "models/User.py")
        assert "_count" not in code

        code, _ = helpers.read_module(output_dir, "__init__.py")
        assert "from .resolvers.relations import *" in code
        assert "query_resolvers" not in code


class TestRelations:
    """Users and posts, one to many."""

    @pytest.fixture
    def output(self, blog_dmmf, make_config, output_dir):
        CodeGenerator(make_config()).generate(blog_dmmf)
        return output_dir

    def test_relation_resolvers(self, output, helpers):
        code, tree = helpers.read_module(output, "resolvers/relations/User/UserRelationsResolver.py")
        resolver = helpers.class_def(tree, "UserRelationsResolver")

        assert decorator_source(resolver) == ["strawberry.type"]
        assert helpers.method_names(resolver) == ["posts"]
        posts = find_method(resolver, "posts")
        assert [a.arg for a in posts.args.args] == ["self", "info", "where", "orderBy", "take", "skip"]
        assert decorator_source(posts) == ["strawberry.field(name='posts')"]
        assert ast.unparse(posts.returns) == "list[Annotated['Post', strawberry.lazy('....models.Post')]]"
        assert "find_unique_or_raise(where={'id': self.id}, include={'posts': relation_args or True})" in code
        assert "return record.posts" in code
        assert "UserPostsArgs(where=where, orderBy=orderBy, take=take, skip=skip)" in code
        # No import of the model type inheriting the resolver
        assert "models.User" not in code
        assert "strawberry.Parent" not in code

        code, tree = helpers.read_module(output, "resolvers/relations/Post/PostRelationsResolver.py")
        resolver = helpers.class_def(tree, "PostRelationsResolver")
        assert helpers.method_names(resolver) == ["author"]
        assert "where={'id': self.id}" in code
        assert "transform_args" not in ast.unparse(find_method(resolver, "author"))

    def test_relation_args_bundle(self, output, helpers):
        _, tree = helpers.read_module(output, "resolvers/relations/User/args/UserPostsArgs.py")
        bundle = helpers.class_def(tree, "UserPostsArgs")
        assert [node.target.id for node in bundle.body] == ["where", "orderBy", "take", "skip"]

    def test_barrels(self, output, helpers):
        code, _ = helpers.read_module(output, "resolvers/relations/__init__.py")
        assert "relation_resolvers = (UserRelationsResolver, PostRelationsResolver)" in code
        assert "from .User.args import UserPostsArgs" in code

        code, _ = helpers.read_module(output, "__init__.py")
        assert "query_resolvers = (*crud_query_resolvers,)" in code
        assert "mutation_resolvers = (*crud_mutation_resolvers,)" in code
        assert "relation_resolvers," not in code

    def test_model_types(self, output, helpers):
        code, tree = helpers.read_module(output, "models/User.py")
        user = helpers.class_def(tree, "User")

        assert decorator_source(user) == ["strawberry.type(name='User', description='A blog author')"]
        assert [ast.unparse(base) for base in user.bases] == ["UserRelationsResolver"]
        assert "from ..resolvers.relations.User.UserRelationsResolver import UserRelationsResolver" in code
        assert "from ..enums.Role import Role" in code
        assert "role: Role" in code
        assert "name: str | None = None" in code
        # Exposed by the inherited relation resolver
        assert "posts" not in [node.target.id for node in user.body if isinstance(node, ast.AnnAssign)]
        assert "_count: Annotated['UserCount', strawberry.lazy('..resolvers.outputs.UserCount')] | None" in code

        code, tree = helpers.read_module(output, "models/Post.py")
        post = helpers.class_def(tree, "Post")
        assert [ast.unparse(base) for base in post.bases] == ["PostRelationsResolver"]
        assert "createdAt: datetime.datetime" in code
        assert "import datetime" in code
        assert "author" not in [node.target.id for node in post.body if isinstance(node, ast.AnnAssign)]

    def test_model_types_without_relation_resolvers(self, blog_dmmf, make_config, output_dir, helpers):
        CodeGenerator(make_config(emit_only=[EmitBlockKind.MODELS])).generate(blog_dmmf)
        code, tree = helpers.read_module(output_dir, "models/User.py")

        assert helpers.class_def(tree, "User").bases == []
        assert "posts: strawberry.Private[list[Annotated['Post', strawberry.lazy('..models.Post')]] | None] = None" in code

    def test_enum(self, output, helpers):
        code, tree = helpers.read_module(output, "enums/Role.py")
        role = helpers.class_def(tree, "Role")

        assert [ast.unparse(base) for base in role.bases] == ["str", "Enum"]
        assert decorator_source(role) == ["strawberry.enum(name='Role', description='Access level')"]
        assert "USER = 'USER'" in code
        assert "ADMIN = 'ADMIN'" in code

    def test_enhance_map(self, output, helpers):
        code, tree = helpers.read_module(output, "enhance.py")
        assigned = {node.targets[0].id: node for node in tree.body if isinstance(node, ast.Assign)}

        assert ast.literal_eval(assigned["relation_resolvers_info"].value) == {"User": ["posts"], "Post": ["author"]}
        assert ast.literal_eval(assigned["args_info"].value)["UserPostsArgs"] == ["where", "orderBy", "take", "skip"]
        assert "apply_relation_resolvers_enhance_map" in ast.literal_eval(assigned["__all__"].value)
        assert "from .resolvers.relations import PostRelationsResolver, UserRelationsResolver" in code


class TestGeneratedSchema:
    """The generated package builds a strawberry schema."""

    @pytest.fixture
    def package(self, blog_dmmf, make_config, tmp_path, monkeypatch):
        config = make_config()
        config.output_dir = str(tmp_path / "blogapi")
        CodeGenerator(config).generate(blog_dmmf)

        monkeypatch.syspath_prepend(str(tmp_path))
        yield importlib.import_module("blogapi")
        for name in [name for name in sys.modules if name == "blogapi" or name.startswith("blogapi.")]:
            del sys.modules[name]

    @pytest.fixture
    def schema(self, package):
        strawberry = pytest.importorskip("strawberry")
        from strawberry.tools import merge_types

        # Overridden root fields are reported as warnings
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            query = merge_types("Query", package.query_resolvers)
            mutation = merge_types("Mutation", package.mutation_resolvers)
        return strawberry.Schema(query=query, mutation=mutation)

    @staticmethod
    def type_fields(schema, type_name):
        result = schema.execute_sync(
            f'{{ __type(name: "{type_name}") {{ fields {{ name args {{ name type {{ name }} }} }} }} }}'
        )
        assert result.errors is None
        return {field["name"]: field for field in result.data["__type"]["fields"]}

    def test_relation_fields(self, schema):
        assert {"id", "email", "name", "role", "posts", "_count"} <= set(self.type_fields(schema, "User"))
        assert {"id", "title", "createdAt", "authorId", "author"} <= set(self.type_fields(schema, "Post"))

    def test_relation_arguments(self, schema):
        posts = self.type_fields(schema, "User")["posts"]
        args = {arg["name"]: arg["type"]["name"] for arg in posts["args"]}

        assert list(args) == ["where", "orderBy", "take", "skip"]
        assert args["where"] == "PostWhereInput"
        assert args["take"] == "Int"

    def test_root_types(self, schema):
        query_fields = set(self.type_fields(schema, "Query"))
        mutation_fields = set(self.type_fields(schema, "Mutation"))

        assert {"users", "user", "getUser", "findFirstUser", "aggregateUser", "groupByUser", "posts", "post"} <= query_fields
        assert {"createOneUser", "updateOneUser", "deleteManyPost", "upsertOnePost"} <= mutation_fields
        assert not query_fields & mutation_fields


class TestSimpleInputs:
    """Compound update inputs against plain scalars."""

    def test_compound_variant_by_default(self, post_dmmf, make_config, output_dir, helpers):
        CodeGenerator(make_config()).generate(post_dmmf)
        code, _ = helpers.read_module(output_dir, "resolvers/inputs/PostUpdateInput.py")
        assert "title: Annotated['StringFieldUpdateOperationsInput'" in code

    def test_simple_inputs(self, post_dmmf, make_config, output_dir, helpers):
        CodeGenerator(make_config(use_simple_inputs=True)).generate(post_dmmf)
        code, _ = helpers.read_module(output_dir, "resolvers/inputs/PostUpdateInput.py")

        assert "title: str | None = strawberry.UNSET" in code
        assert "authorId: int | None = strawberry.UNSET" in code
        assert "OperationsInput" not in code


class TestAttributes:
    """Documentation attributes reflected in the generated types."""

    def test_aliases_and_omissions(self, helpers, make_dmmf, make_config, output_dir):
        user = helpers.model(
            "User",
            [
                helpers.field("id", "Int", is_id=True, has_default=True),
                helpers.field("email", "String", documentation='The e-mail\n@GraphQL.field(name: "emailAddress")'),
                helpers.field("password", "String", documentation='@GraphQL.omit(output: true, input: ["update"])'),
            ],
            documentation='@@GraphQL.type(name: "Member")',
        )
        CodeGenerator(make_config()).generate(make_dmmf([user]))

        code, tree = helpers.read_module(output_dir, "models/Member.py")
        member = helpers.class_def(tree, "Member")
        getter = find_method(member, "resolve_email_address")

        assert decorator_source(member) == ["strawberry.type(name='Member')"]
        assert decorator_source(getter) == ["strawberry.field(name='emailAddress', description='The e-mail')"]
        assert "email: strawberry.Private[str]" in code
        assert "password: strawberry.Private[str] = None" in code

        code, _ = helpers.read_module(output_dir, "resolvers/inputs/MemberUpdateInput.py")
        assert "password" not in code
        assert "strawberry.field(name='emailAddress', default=strawberry.UNSET)" in code

        code, _ = helpers.read_module(output_dir, "resolvers/inputs/MemberCreateInput.py")
        assert "email: str = strawberry.field(name='emailAddress')" in code
        assert "password: str" in code

        code, _ = helpers.read_module(output_dir, "resolvers/crud/Member/MemberCrudResolver.py")
        assert "get_prisma_from_context(info).user.find_many(" in code
        assert "async def members(" in code

    @pytest.mark.parametrize("emit_only", [None, [EmitBlockKind.ENUMS, EmitBlockKind.MODELS]])
    def test_aliased_relation_has_no_getter(self, blog_dmmf, make_config, output_dir, helpers, emit_only):
        user = blog_dmmf["datamodel"]["models"][0]
        posts = next(f for f in user["fields"] if f["name"] == "posts")
        posts["documentation"] = '@GraphQL.field(name: "articles")'

        CodeGenerator(make_config(emit_only=emit_only)).generate(blog_dmmf)
        code, tree = helpers.read_module(output_dir, "models/User.py")

        assert "resolve_" not in code
        assert helpers.method_names(helpers.class_def(tree, "User")) == []
        if emit_only is None:
            _, tree = helpers.read_module(output_dir, "resolvers/relations/User/UserRelationsResolver.py")
            articles = find_method(helpers.class_def(tree, "UserRelationsResolver"), "articles")
            assert decorator_source(articles)[0].startswith("strawberry.field(name='articles'")
        else:
            assert "posts: strawberry.Private[" in code

    def test_plural_of_capitalized_model_name(self, helpers, make_dmmf, make_config, output_dir):
        category = helpers.model("Category", [helpers.field("id", "Int", is_id=True), helpers.field("label", "String")])
        CodeGenerator(make_config()).generate(make_dmmf([category]))

        _, tree = helpers.read_module(output_dir, "resolvers/crud/Category/CategoryCrudResolver.py")
        find_many = find_method(helpers.class_def(tree, "CategoryCrudQueryResolver"), "categories")
        assert decorator_source(find_many) == ["strawberry.field(name='categories')"]
        assert (output_dir / "resolvers" / "crud" / "Category" / "FindManyCategoryResolver.py").exists()

    def test_output_omitted_model(self, helpers, make_dmmf, make_config, output_dir):
        secret = helpers.model(
            "Secret",
            [helpers.field("id", "Int", is_id=True), helpers.field("value", "String", is_required=False)],
            documentation="@@GraphQL.omit(output: true)",
        )
        CodeGenerator(make_config(emit_only=[EmitBlockKind.MODELS])).generate(make_dmmf([secret]))

        code, tree = helpers.read_module(output_dir, "models/Secret.py")
        assert decorator_source(helpers.class_def(tree, "Secret")) == ["dataclass(kw_only=True)"]
        assert "value: str | None = None" in code
        assert "import strawberry" not in code

    def test_id_type(self, post_dmmf, make_config, output_dir, helpers):
        CodeGenerator(make_config(emit_id_as_id_type=True)).generate(post_dmmf)
        code, _ = helpers.read_module(output_dir, "models/Post.py")
        assert "id: strawberry.ID" in code
        assert "authorId: int" in code


class TestPipeline:
    """Driver states, auxiliary options and failures."""

    def test_states(self, post_dmmf, make_config):
        generator = CodeGenerator(make_config())
        assert generator.state is PipelineState.IDLE
        generator.generate(post_dmmf)
        assert generator.state is PipelineState.DONE

    def test_failure(self, post_dmmf, make_config):
        post_dmmf["mappings"]["modelOperations"].append({"model": "Ghost", "findMany": "findManyGhost"})
        generator = CodeGenerator(make_config())
        with pytest.raises(SchemaInconsistencyError):
            generator.generate(post_dmmf)
        assert generator.state is PipelineState.FAILED

    def test_output_directory_is_cleared(self, post_dmmf, make_config, output_dir):
        (output_dir / "stale").mkdir(parents=True)
        (output_dir / "stale" / "Old.py").write_text("x = 1\n")
        (output_dir / "notes.txt").write_text("old")

        generate_code(post_dmmf, make_config())

        assert not (output_dir / "stale").exists()
        assert not (output_dir / "notes.txt").exists()
        assert (output_dir / "models" / "Post.py").exists()

    def test_emit_dmmf(self, post_dmmf, make_config, output_dir):
        written = generate_code(post_dmmf, make_config(emit_dmmf=True))
        assert output_dir / "dmmf.json" in written
        assert json.loads((output_dir / "dmmf.json").read_text()) == post_dmmf

    def test_without_generation_comment(self, post_dmmf, make_config, output_dir):
        generate_code(post_dmmf, make_config(add_generation_comment=False))
        assert not (output_dir / "models" / "Post.py").read_text().startswith("#")

    def test_custom_client_settings(self, post_dmmf, make_config, output_dir):
        generate_code(post_dmmf, make_config(custom_prisma_import_path="app.db", context_prisma_key="db"))
        code = (output_dir / "helpers.py").read_text()
        assert "from app.db import Prisma" in code
        assert 'context.get("db")' in code

    def test_compiled_output(self, post_dmmf, make_config, output_dir):
        generate_code(post_dmmf, make_config(emit_compiled_code=True))
        assert list(output_dir.rglob("*.pyc"))

    def test_compiled_output_detection(self, make_config, tmp_path):
        assert not CodeGenerator(make_config(emit_compiled_code=None)).emit_compiled_code
        config = make_config(emit_compiled_code=None)
        config.output_dir = str(tmp_path / "site-packages" / "generated")
        assert CodeGenerator(config).emit_compiled_code

    def test_compile_formatter(self, post_dmmf, make_config):
        generator = CodeGenerator(make_config(formatter=FormatterKind.COMPILE))
        generator.generate(post_dmmf)
        assert generator.state is PipelineState.DONE

    def test_formatter_failure_is_not_fatal(self, post_dmmf, make_config, output_dir, monkeypatch, caplog):
        monkeypatch.setattr(RuffFormatter, "is_available", lambda self: False)
        generator = CodeGenerator(make_config(formatter=FormatterKind.RUFF))

        with caplog.at_level(logging.WARNING):
            written = generator.generate(post_dmmf)

        assert generator.state is PipelineState.DONE
        assert written
        assert "Code formatting failed" in caplog.text

    def test_black_internal_error_is_not_fatal(self, post_dmmf, make_config, monkeypatch, caplog):
        black = pytest.importorskip("black")

        def fail(code, mode):
            raise AssertionError("INTERNAL ERROR: Black produced code that is not equivalent to the source")

        monkeypatch.setattr(black, "format_str", fail)
        generator = CodeGenerator(make_config(formatter=FormatterKind.BLACK))

        with caplog.at_level(logging.WARNING):
            generator.generate(post_dmmf)

        assert generator.state is PipelineState.DONE
        assert "Code formatting failed: black failed: AssertionError" in caplog.text
