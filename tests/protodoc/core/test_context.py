"""Tests for protodoc.core.context."""

import json

import pytest
from google.protobuf.descriptor_pb2 import FileDescriptorProto

from protodoc.core.config import GeneratorOptions, ProtodocConfig
from protodoc.core.context import GeneratorContext
from protodoc.core.exceptions import RunStateError, SourceReadError, TemplateReadError


@pytest.fixture
def config(source_root) -> ProtodocConfig:
    return ProtodocConfig(source_roots=(str(source_root),))


@pytest.fixture
def context(config) -> GeneratorContext:
    return GeneratorContext.from_options(GeneratorOptions("json", "doc.json"), config)


class TestGeneratorContext:
    """Test accumulation and one-shot rendering."""

    def test_files_kept_in_host_order(self, context, make_file):
        """Files appear in the order they were added."""
        for name in ["b.proto", "a.proto", "c.proto"]:
            context.add_file(make_file(name=name).proto)

        data = json.loads(context.render())
        assert [f["file_name"] for f in data] == ["b.proto", "a.proto", "c.proto"]

    def test_excluded_file_skipped(self, context, make_file):
        """Excluded files are not appended."""
        hidden = make_file(name="hidden.proto", header="/// @exclude\n")
        shown = make_file(name="shown.proto")

        assert context.add_file(hidden.proto) is None
        assert context.add_file(shown.proto).file_name == "shown.proto"
        assert len(context.tree) == 1

    def test_no_exclude_option(self, config, make_file):
        """With no-exclude, excluded files are kept."""
        context = GeneratorContext.from_options(
            GeneratorOptions("json", "doc.json", no_exclude=True), config
        )
        hidden = make_file(name="hidden.proto", header="/// @exclude Internal\n")

        assert context.add_file(hidden.proto).file_description == "Internal"

    def test_render_only_once(self, context):
        """A second render is refused."""
        context.render()

        with pytest.raises(RunStateError):
            context.render()

    def test_add_after_render(self, context, make_file):
        """Files cannot be added once the output exists."""
        context.render()

        with pytest.raises(RunStateError):
            context.add_file(make_file().proto)

    def test_unreadable_source(self, context):
        """A missing schema source aborts the run."""
        with pytest.raises(SourceReadError):
            context.add_file(FileDescriptorProto(name="gone.proto"))

    def test_separate_runs_are_independent(self, config, make_file):
        """Each context owns its own tree."""
        options = GeneratorOptions("json", "doc.json")
        first = GeneratorContext.from_options(options, config)
        second = GeneratorContext.from_options(options, config)
        first.add_file(make_file().proto)

        assert json.loads(second.render()) == []

    def test_missing_template(self, config, tmp_path):
        """The template is resolved when the context is created."""
        options = GeneratorOptions(str(tmp_path / "missing.tmpl"), "out.txt")

        with pytest.raises(TemplateReadError):
            GeneratorContext.from_options(options, config)

    def test_configured_links(self, source_root, make_file):
        """Type link settings reach the rendered field types."""
        config = ProtodocConfig(
            source_roots=(str(source_root),), scalar_type_url="/docs/types.php"
        )
        context = GeneratorContext.from_options(GeneratorOptions("json", "doc.json"), config)
        builder = make_file()
        builder.field(builder.message("Order"), "id")

        node = context.add_file(builder.proto)
        assert node.file_messages[0].message_fields[0].field_type == (
            '<a href="/docs/types.php">string</a>'
        )
