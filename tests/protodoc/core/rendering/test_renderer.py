"""Tests for protodoc.core.rendering.renderer and template lookup."""

import json
from pathlib import Path

import pytest
from pydantic import TypeAdapter

from protodoc.core.docs.models import (
    DocumentTree,
    EnumDoc,
    EnumValueDoc,
    FieldDoc,
    MessageDoc,
    SchemaFileDoc,
)
from protodoc.core.exceptions import RenderError, TemplateReadError
from protodoc.core.rendering.loader import TemplateSource, builtin_formats, read_template
from protodoc.core.rendering.renderer import JsonRenderer, TemplateRenderer, create_renderer


@pytest.fixture
def tree() -> DocumentTree:
    tree = DocumentTree()
    tree.append(
        SchemaFileDoc(
            file_name="api.proto",
            file_package="acme.api",
            file_description="Order API\n\nSecond paragraph",
            file_messages=(
                MessageDoc(
                    message_name="Order",
                    message_description="An order.",
                    message_fields=(
                        FieldDoc(field_name="id", field_description="Id", field_type="int"),
                    ),
                ),
                MessageDoc(message_name="Empty"),
            ),
            file_enums=(
                EnumDoc(
                    enum_name="Status",
                    enum_values=(EnumValueDoc(value_name="OPEN", value_number=0),),
                ),
            ),
        )
    )
    tree.append(SchemaFileDoc(file_name="other.proto"))
    return tree


class TestJsonRenderer:
    """Test the raw JSON output."""

    def test_round_trip(self, tree):
        """The output parses back into the same tree."""
        output = JsonRenderer().render(tree)

        parsed = TypeAdapter(list[SchemaFileDoc]).validate_json(output)
        assert parsed == list(tree.files)

    def test_keys_and_layout(self, tree):
        """Model names are the JSON keys; text is left unfiltered."""
        output = JsonRenderer().render(tree)
        data = json.loads(output)

        assert output.endswith("}\n]\n")
        assert [f["file_name"] for f in data] == ["api.proto", "other.proto"]
        order, empty = data[0]["file_messages"]
        assert order["message_has_fields"] is True
        assert empty["message_has_fields"] is False
        assert data[0]["file_enums"][0]["enum_values"][0] == {
            "value_name": "OPEN",
            "value_number": 0,
            "value_description": "",
        }
        assert "<p>" not in output

    def test_empty_tree(self):
        """A run without files renders an empty list."""
        assert json.loads(JsonRenderer().render(DocumentTree())) == []


class TestTemplateRenderer:
    """Test template rendering and error reporting."""

    def test_renders_tree(self, tree):
        """Templates iterate over files and their members."""
        source = (
            "{% for file in files %}{{ file.file_name }}:"
            "{% for m in file.file_messages %}{{ m.message_name }},{% endfor %}"
            "{% endfor %}"
        )
        renderer = TemplateRenderer(TemplateSource("inline", source))
        assert renderer.render(tree) == "api.proto:Order,Empty,other.proto:"

    def test_no_autoescape(self, tree):
        """Type links reach the output as markup."""
        tree.append(
            SchemaFileDoc(
                file_name="links.proto",
                file_messages=(
                    MessageDoc(
                        message_name="M",
                        message_fields=(
                            FieldDoc(field_name="x", field_type='<a href="#Line">Line</a>'),
                        ),
                    ),
                ),
            )
        )
        source = "{{ files[2].file_messages[0].message_fields[0].field_type }}"
        output = TemplateRenderer(TemplateSource("inline", source)).render(tree)
        assert output == '<a href="#Line">Line</a>'

    def test_syntax_error_position(self, tree):
        """Syntax errors report the offset of the failing line."""
        renderer = TemplateRenderer(TemplateSource("inline", "line one\n{% if %}\n"))

        with pytest.raises(RenderError) as exc_info:
            renderer.render(tree)

        error = exc_info.value
        assert str(error).startswith("inline:9: ")
        assert error.partial is None
        assert "\n" not in str(error)

    def test_error_in_partial(self, tree, tmp_path: Path):
        """Errors inside an included template name the partial."""
        (tmp_path / "part.jinja").write_text("ok\n{{ missing.attr }}\n", encoding="utf-8")
        source = TemplateSource("main", "{% include 'part.jinja' %}", (tmp_path,))

        with pytest.raises(RenderError) as exc_info:
            TemplateRenderer(source).render(tree)

        assert str(exc_info.value) == "main in partial part.jinja:3: 'missing' is undefined"
        assert exc_info.value.partial == "part.jinja"

    def test_missing_partial(self, tree):
        """An include that cannot be found is a render error."""
        source = TemplateSource("main", "{% include 'nope.jinja' %}")

        with pytest.raises(RenderError) as exc_info:
            TemplateRenderer(source).render(tree)

        assert str(exc_info.value).endswith("template not found: nope.jinja")

    def test_builtin_partial(self, tree):
        """Built-in templates can be included by format name."""
        source = TemplateSource("main", "{% include 'markdown' %}")
        output = TemplateRenderer(source).render(tree)
        assert output.startswith("# Protocol Documentation")


class TestBuiltinFormats:
    """Test the templates shipped with the package."""

    def test_formats_listed(self):
        """html, markdown and docbook are built in."""
        assert {"docbook", "html", "markdown"} <= set(builtin_formats())

    @pytest.mark.parametrize("name", ["html", "markdown", "docbook"])
    def test_builtin_renders(self, tree, name):
        """Every built-in format renders the sample tree."""
        output = create_renderer(name).render(tree)
        assert "api.proto" in output
        assert "Order" in output
        assert "OPEN" in output

    def test_html_paragraphs(self, tree):
        """The HTML format splits descriptions into paragraphs."""
        output = create_renderer("html").render(tree)
        assert "<p>Order API</p><p>Second paragraph</p>" in output


class TestReadTemplate:
    """Test template resolution."""

    def test_template_file(self, tmp_path: Path):
        """A path is read and its directory becomes the include search path."""
        path = tmp_path / "custom.tmpl"
        path.write_text("{{ files | length }}", encoding="utf-8")

        template = read_template(str(path))
        assert template.source == "{{ files | length }}"
        assert template.search_dirs == (tmp_path,)

    def test_missing_template_file(self, tmp_path: Path):
        """Unreadable templates raise with the path."""
        missing = str(tmp_path / "missing.tmpl")

        with pytest.raises(TemplateReadError) as exc_info:
            read_template(missing)

        assert str(exc_info.value).startswith(f"{missing}: ")

    def test_json_format(self):
        """Raw JSON needs no template."""
        assert isinstance(create_renderer("json", raw_json=True), JsonRenderer)


class TestRenderFailures:
    """Test that every template failure surfaces as a render error."""

    def test_self_include(self, tree):
        """Unbounded recursion is reported instead of escaping."""
        renderer = TemplateRenderer(TemplateSource("main", "{% include 'main' %}"))

        with pytest.raises(RenderError) as exc_info:
            renderer.render(tree)

        assert str(exc_info.value).startswith("main:")
        assert "RecursionError" in str(exc_info.value)
        assert "\n" not in str(exc_info.value)


class TestMarkdownAnchors:
    """Test that markdown links and anchors agree."""

    def test_type_links_resolve(self, tree):
        """Anchors use the exact type name, like the default type links."""
        output = create_renderer("markdown").render(tree)

        assert '<a name="Order"></a>' in output
        assert '<a name="Status"></a>' in output
        assert '<a name="api.proto"></a>' in output
        assert "- [api.proto](#api.proto)" in output
        assert "  - [Order](#Order)" in output
        assert "  - [Status](#Status)" in output
