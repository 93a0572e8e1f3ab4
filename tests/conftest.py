"""Configuration file for pytest containing fixtures and configuration.

This module provides fixtures that can be used across multiple test files:
- make_file: Builds FileDescriptorProto objects with source comments and
  writes a matching schema source under a temporary source root
- source_root: The temporary source root those files are written to
"""

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest
from google.protobuf.descriptor_pb2 import (
    DescriptorProto,
    EnumDescriptorProto,
    FieldDescriptorProto,
    FileDescriptorProto,
)

from protodoc.core.config import clear_config_cache

Node = tuple[DescriptorProto, tuple[int, ...]]


class FileBuilder:
    """Small builder for FileDescriptorProto with SourceCodeInfo comments."""

    def __init__(self, name: str = "acme/api.proto", package: str = "acme.api") -> None:
        self.proto = FileDescriptorProto(name=name, package=package, syntax="proto2")

    def doc(self, path: Sequence[int], leading: str = "", trailing: str = "") -> None:
        self.proto.source_code_info.location.add(
            path=list(path), span=[0, 0, 0], leading_comments=leading, trailing_comments=trailing
        )

    def message(self, name: str, doc: str = "", parent: Node | None = None) -> Node:
        if parent is None:
            container, base, number = self.proto.message_type, (), 4
        else:
            container, base, number = parent[0].nested_type, parent[1], 3
        path = (*base, number, len(container))
        message = container.add(name=name)
        if doc:
            self.doc(path, doc)
        return message, path

    def field(
        self,
        parent: Node,
        name: str,
        type: int = FieldDescriptorProto.TYPE_STRING,
        label: int = FieldDescriptorProto.LABEL_REQUIRED,
        type_name: str = "",
        doc: str = "",
        trailing: str = "",
    ) -> FieldDescriptorProto:
        message, path = parent
        index = len(message.field)
        field = message.field.add(
            name=name, number=index + 1, type=type, label=label, type_name=type_name
        )
        if doc or trailing:
            self.doc((*path, 2, index), doc, trailing)
        return field

    def enum(
        self,
        name: str,
        values: Sequence[tuple[str, int] | tuple[str, int, str]] = (),
        doc: str = "",
        parent: Node | None = None,
    ) -> EnumDescriptorProto:
        if parent is None:
            container, base, number = self.proto.enum_type, (), 5
        else:
            container, base, number = parent[0].enum_type, parent[1], 4
        path = (*base, number, len(container))
        enum = container.add(name=name)
        if doc:
            self.doc(path, doc)
        for index, (value_name, value_number, *value_doc) in enumerate(values):
            enum.value.add(name=value_name, number=value_number)
            if value_doc:
                self.doc((*path, 2, index), value_doc[0])
        return enum


@pytest.fixture
def source_root(tmp_path: Path) -> Path:
    """Temporary directory schema sources are written to."""
    root = tmp_path / "proto"
    root.mkdir()
    return root


@pytest.fixture
def make_file(source_root: Path) -> Callable[..., FileBuilder]:
    """Factory creating a FileBuilder and its schema source on disk."""

    def factory(
        name: str = "acme/api.proto", package: str = "acme.api", header: str = ""
    ) -> FileBuilder:
        path = source_root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(header + 'syntax = "proto2";\n', encoding="utf-8")
        return FileBuilder(name, package)

    return factory


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep project settings of the working tree out of tests."""
    for name in (
        "PROTODOC_CONFIG_PATH",
        "PROTODOC_LOG_LEVEL",
        "PROTODOC_LOG_FORMAT",
        "PROTODOC_LOG_FILE",
        "PROTODOC_LOG_COLOR",
        "PROTODOC_LOG_RICH",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    clear_config_cache()
