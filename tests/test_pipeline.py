"""Tests for the pipeline orchestrator and its built-in actions."""

import warnings

import pytest
from graphql import parse

from gql_schemaflow.core.actions import (
    FlattenExtensionTypes,
    GenerateRelayConnectionTypes,
    ImplementMissingBaseDeclarations,
    ImplementMissingInterfaceFields,
    NormalizeSchema,
    RunTransformers,
    SaveSchema,
    flatten_extension_types,
    generate_connection_types,
    implement_missing_base_declarations,
    implement_missing_interface_fields,
)
from gql_schemaflow.core.errors import (
    MissingBaseDefinitionError,
    PipelineConfigError,
    PipelineError,
    PipelineOrderingWarning,
    SchemaLoadError,
)
from gql_schemaflow.core.nodes import Document, ObjectTypeDefinition
from gql_schemaflow.core.parser import parse_sdl
from gql_schemaflow.core.pipeline import (
    BaseAction,
    Pipeline,
    PipelineAction,
    format_diagnostic,
)
from gql_schemaflow.core.printer import print_document


@pytest.fixture
def document():
    """A schema that needs every normalization pass."""
    return parse_sdl(
        """
        interface Node { id: ID! }
        extend type Query { users: UserConnection! @connection(for: "User") }
        type User implements Node { name: String }
        extend type User { email: String }
        """
    )


class RecordingAction(BaseAction):
    """Records validate/execute calls into a shared log."""

    def __init__(self, name, log):
        self.name = name
        self.log = log

    def validate(self, ctx):
        self.log.append(("validate", self.name, ctx.index))

    def execute(self, ctx):
        self.log.append(("execute", self.name, ctx.index))


class FailingAction(BaseAction):
    name = "Explode"

    def execute(self, ctx):
        raise ValueError("boom")


class TestPipelineRun:
    """Tests for Pipeline.run."""

    def test_validates_everything_before_executing(self):
        log = []
        pipeline = Pipeline([RecordingAction("a", log), RecordingAction("b", log)])

        pipeline.run(Document())

        assert log == [
            ("validate", "a", 0),
            ("validate", "b", 1),
            ("execute", "a", 0),
            ("execute", "b", 1),
        ]

    def test_add(self):
        log = []
        pipeline = Pipeline().add(RecordingAction("a", log)).add(RecordingAction("b", log))
        assert [a.name for a in pipeline.actions] == ["a", "b"]

    def test_execute_error_is_wrapped(self):
        with pytest.raises(PipelineError) as excinfo:
            Pipeline([FailingAction()]).run(Document())

        assert excinfo.value.stage == "Execution Error: Explode"
        assert isinstance(excinfo.value.error, ValueError)
        assert excinfo.value.__cause__ is excinfo.value.error

    def test_validate_error_stops_before_execute(self):
        log = []

        class BadValidate(BaseAction):
            name = "Bad"

            def validate(self, ctx):
                raise RuntimeError("nope")

        with pytest.raises(PipelineError) as excinfo:
            Pipeline([RecordingAction("a", log), BadValidate()]).run(Document())

        assert excinfo.value.stage == "Validation Error: Bad"
        assert log == [("validate", "a", 0)]

    def test_action_without_name(self):
        class Nameless(BaseAction):
            def execute(self, ctx):
                pass

        with pytest.raises(PipelineError) as excinfo:
            Pipeline([Nameless()]).run(Document())

        assert excinfo.value.stage == "Invalid Action Configuration"
        assert isinstance(excinfo.value.error, PipelineConfigError)

    def test_plain_object_action(self):
        """Actions only need a name and execute; validate is optional."""
        calls = []

        class Minimal:
            name = "Minimal"

            def execute(self, ctx):
                calls.append(ctx.document)

        document = Document()
        Pipeline([Minimal()]).run(document)
        assert calls == [document]

    def test_document_can_be_replaced(self):
        replacement = Document(definitions=[ObjectTypeDefinition(name="Query")])
        result = Pipeline([RunTransformers(lambda document: replacement)]).run(Document())
        assert result is replacement

    def test_schema_files_are_exposed(self):
        seen = []

        class Files(BaseAction):
            name = "Files"

            def execute(self, ctx):
                seen.extend(ctx.schema_files)

        Pipeline([Files()]).run(Document(), schema_files=["a.graphqls"])
        assert seen == ["a.graphqls"]


class TestRunSchema:
    """Tests for Pipeline.run_schema."""

    def test_loader_failure(self, tmp_path):
        with pytest.raises(PipelineError) as excinfo:
            Pipeline([NormalizeSchema()]).run_schema(str(tmp_path))

        assert excinfo.value.stage == "Schema Loader"
        assert isinstance(excinfo.value.error, SchemaLoadError)

    def test_full_pipeline(self, tmp_path):
        (tmp_path / "schema.graphqls").write_text(
            'extend type Query { users: UserConnection! @connection(for: "User") }\n'
            "type User { id: ID! }\n"
        )
        document = Pipeline(
            [NormalizeSchema(), GenerateRelayConnectionTypes()]
        ).run_schema(str(tmp_path))

        assert list(document.extensions()) == []
        assert document.find_object_type("UserConnection") is not None
        assert document.find_object_type("PageInfo") is not None


class TestOrdering:
    """Tests for action ordering and uniqueness checks."""

    def test_normalize_then_connections_does_not_warn(self, document):
        with warnings.catch_warnings():
            warnings.simplefilter("error", PipelineOrderingWarning)
            Pipeline([NormalizeSchema(), GenerateRelayConnectionTypes()]).run(document)

    def test_connections_before_normalize_warns(self):
        with pytest.warns(PipelineOrderingWarning, match="Generate Relay Connection Types"):
            Pipeline([GenerateRelayConnectionTypes()]).run(Document())

    def test_flatten_without_base_declarations_warns(self):
        with pytest.warns(PipelineOrderingWarning, match="Implement Missing Base Declarations"):
            Pipeline([FlattenExtensionTypes()]).run(Document())

    @pytest.mark.parametrize(
        "action_type",
        [NormalizeSchema, ImplementMissingInterfaceFields, GenerateRelayConnectionTypes],
    )
    def test_unique_actions(self, action_type):
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", PipelineOrderingWarning)
            with pytest.raises(PipelineError) as excinfo:
                Pipeline([action_type(), action_type()]).run(Document())

        assert excinfo.value.stage.startswith("Validation Error: ")
        assert isinstance(excinfo.value.error, PipelineConfigError)
        assert "found 2 times" in str(excinfo.value.error)

    def test_individual_passes_in_order(self, document):
        with warnings.catch_warnings():
            warnings.simplefilter("error", PipelineOrderingWarning)
            result = Pipeline(
                [
                    ImplementMissingBaseDeclarations(),
                    FlattenExtensionTypes(),
                    ImplementMissingInterfaceFields(),
                    GenerateRelayConnectionTypes(),
                ]
            ).run(document)

        user = result.find_object_type("User")
        assert sorted(f.name for f in user.fields) == ["email", "id", "name"]

    def test_flatten_without_bases_fails_on_missing_base(self, document):
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", PipelineOrderingWarning)
            with pytest.raises(PipelineError) as excinfo:
                Pipeline([FlattenExtensionTypes()]).run(document)

        assert excinfo.value.stage == "Execution Error: Flatten Extension Types"
        assert isinstance(excinfo.value.error, MissingBaseDefinitionError)


MIXED_SCHEMA = """
interface Node { id: ID! }
extend interface Node { friends: UserConnection! @connection(for: "User", via: "UserEdge") }
type User implements Node { name: String }
type UserEdge { cursor: String! node: User! }
extend type Query { users: UserConnection! @connection(for: "User") }
extend input UserFilter { name: String }
extend enum Role { ADMIN }
extend union SearchResult = User
extend scalar DateTime @specifiedBy(url: "https://example.com")
extend schema @link(url: "https://example.com/link") { query: Query }
"""


def run_all_passes(document):
    implement_missing_base_declarations(document)
    flatten_extension_types(document)
    implement_missing_interface_fields(document)
    generate_connection_types(document)


class TestFullPassSequence:
    """Tests for the four passes run back to back."""

    def test_second_run_prints_identically(self):
        document = parse_sdl(MIXED_SCHEMA)

        run_all_passes(document)
        first = print_document(document)
        run_all_passes(document)

        assert print_document(document) == first

    def test_reloaded_output_is_stable(self):
        document = parse_sdl(MIXED_SCHEMA)
        run_all_passes(document)
        first = print_document(document)

        reloaded = parse_sdl(first)
        run_all_passes(reloaded)

        assert print_document(reloaded) == first

    def test_copied_connection_fields_are_expanded(self):
        """Interface fields carrying @connection are expanded on implementers too."""
        document = parse_sdl(MIXED_SCHEMA)
        run_all_passes(document)

        printed = print_document(document)
        parse(printed)
        assert "@connection" not in printed
        assert list(document.extensions()) == []

        friends = document.find_object_type("User").find_field("friends")
        assert [a.name for a in friends.arguments] == ["first", "after"]
        connection = document.find_object_type("UserConnection")
        assert [f.name for f in connection.fields] == ["edges", "nodes", "pageInfo"]


class TestNormalizeSchema:
    """Tests for the combined normalization action."""

    def test_normalizes(self, document):
        result = Pipeline([NormalizeSchema()]).run(document)

        assert list(result.extensions()) == []
        query = result.find_object_type("Query")
        assert query.find_field("users") is not None
        user = result.find_object_type("User")
        assert [f.name for f in user.fields] == ["name", "email", "id"]


class TestSaveSchema:
    """Tests for SaveSchema."""

    def test_writes_sdl(self, tmp_path, document):
        output = tmp_path / "build" / "nested" / "schema.graphqls"
        Pipeline([NormalizeSchema(), SaveSchema(output)]).run(document)

        text = output.read_text()
        assert "type User implements Node" in text
        assert "extend" not in text


class TestRunTransformers:
    """Tests for RunTransformers."""

    def test_transforms_in_order(self):
        seen = []

        def first(document):
            seen.append("first")
            document.definitions.append(ObjectTypeDefinition(name="A"))

        def second(document):
            seen.append("second")
            assert document.find_object_type("A") is not None

        Pipeline([RunTransformers([first, second])]).run(Document())
        assert seen == ["first", "second"]


class TestProtocolCompliance:
    """Tests for protocol compliance."""

    def test_builtin_actions(self):
        for action in (
            NormalizeSchema(),
            GenerateRelayConnectionTypes(),
            SaveSchema("schema.graphqls"),
            RunTransformers([]),
        ):
            assert isinstance(action, PipelineAction)

    def test_custom_action(self):
        class Custom:
            name = "Custom"

            def execute(self, ctx):
                pass

        assert isinstance(Custom(), PipelineAction)


class TestFormatDiagnostic:
    """Tests for format_diagnostic."""

    def test_header_and_message(self):
        text = format_diagnostic("Schema Loader", "No schema files were found.")
        header, message = text.split("\n")
        assert header.startswith("-- Schema Loader ")
        assert len(header) == 80
        assert message == "No schema files were found."

    def test_wraps_long_messages(self):
        text = format_diagnostic("Stage", "word " * 40, width=40)
        assert all(len(line) <= 40 for line in text.splitlines())
