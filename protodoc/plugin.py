"""protoc plugin entry point.

protoc runs ``protoc-gen-doc`` with a ``CodeGeneratorRequest`` on stdin and
reads a ``CodeGeneratorResponse`` from stdout::

    protoc --doc_out=html,index.html:docs api/*.proto

Files are processed in the order protoc lists them in ``file_to_generate``.
On any error the response carries the error text and no files.
"""

from __future__ import annotations

import sys

from google.protobuf.compiler.plugin_pb2 import CodeGeneratorRequest, CodeGeneratorResponse

from protodoc.core.config import ProtodocConfig, apply_logging_config, load_config, parse_parameter
from protodoc.core.context import GeneratorContext
from protodoc.core.exceptions import ConfigurationError, ProtodocError
from protodoc.core.logging import get_logger

logger = get_logger(__name__)


def _response() -> CodeGeneratorResponse:
    return CodeGeneratorResponse(
        supported_features=CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL
    )


def _error_response(message: str) -> CodeGeneratorResponse:
    response = _response()
    response.error = message
    return response


def generate(
    request: CodeGeneratorRequest, config: ProtodocConfig | None = None
) -> CodeGeneratorResponse:
    """Produce the plugin response for ``request``.

    Parameters
    ----------
    request : CodeGeneratorRequest
        Request as sent by protoc
    config : ProtodocConfig | None
        Project settings; defaults apply when None

    Returns
    -------
    CodeGeneratorResponse
        One output file, or an error and no files
    """
    files_by_name = {file.name: file for file in request.proto_file}
    try:
        options = parse_parameter(request.parameter)
        context = GeneratorContext.from_options(options, config)
        for name in request.file_to_generate:
            if name not in files_by_name:
                raise ConfigurationError(f"{name}: not included in the request")
            context.add_file(files_by_name[name])
        output = context.render()
    except ProtodocError as e:
        logger.error("Generation failed: {error}", error=str(e))
        return _error_response(str(e))

    response = _response()
    response.file.add(name=options.output_name, content=output)
    return response


def main() -> None:
    """Run as a protoc plugin over stdin/stdout."""
    request = CodeGeneratorRequest.FromString(sys.stdin.buffer.read())
    try:
        config = load_config()
    except ProtodocError as e:
        response = _error_response(str(e))
    else:
        apply_logging_config(config.logging)
        response = generate(request, config)
    sys.stdout.buffer.write(response.SerializeToString())
    sys.stdout.buffer.flush()


if __name__ == "__main__":
    main()
