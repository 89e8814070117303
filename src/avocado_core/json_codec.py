# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/avocado_core

from pathlib import Path
from typing import Any, TypeVar, get_args

from loguru import logger
from pydantic import PydanticSchemaGenerationError, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from avocado_core.config import AvocadoConfig
from avocado_core.exceptions import JsonCodecError, ResourceIOError
from avocado_core.loader import ContentLoader

T = TypeVar("T")

JSON_ENCODING = "utf-8"


def _shape_name(shape: Any) -> str:
    if isinstance(shape, type) and not get_args(shape):
        return shape.__name__
    return repr(shape)


class JsonCodec:
    """Reads and writes JSON files holding records, or lists, sets and maps of records.

    Structural mapping is delegated to pydantic. A shape is any type pydantic
    can validate, e.g. a model class, ``list[Model]``, ``set[FrozenModel]``
    or ``dict[int, Model]``.
    """

    def __init__(self, loader: ContentLoader | None = None, config: AvocadoConfig | None = None):
        """Initializes the JsonCodec.

        Args:
            loader: Optional ContentLoader used to read JSON documents.
            config: Optional configuration object. Defaults to the loader's
                configuration, or to a default one.
        """
        self.config = config or (loader.config if loader else AvocadoConfig())
        self.loader = loader or ContentLoader(config=self.config)

    def dumps(self, value: Any, shape: Any = None) -> str:
        """Returns the JSON text of a value.

        Args:
            value: The value to serialize.
            shape: The type to serialize the value as. Defaults to the value's own type.

        Raises:
            JsonCodecError: If the value cannot be represented as JSON.
        """
        try:
            adapter: TypeAdapter[Any] = TypeAdapter(shape if shape is not None else type(value))
            return adapter.dump_json(value, indent=self.config.json_indent).decode(JSON_ENCODING)
        except PydanticSerializationError as e:
            logger.error(f"Failed to serialize {type(value).__name__}: {e}")
            raise JsonCodecError(f"Cannot serialize {type(value).__name__} to JSON: {e}") from e
        except PydanticSchemaGenerationError as e:
            logger.error(f"No JSON mapping for {type(value).__name__}: {e}")
            raise JsonCodecError(f"Cannot serialize {type(value).__name__} to JSON: {e}") from e

    def loads(self, text: str | bytes, shape: type[T]) -> T:
        """Parses JSON text into a value of the given shape.

        Raises:
            JsonCodecError: If the text is not valid JSON or does not match the shape.
        """
        try:
            return TypeAdapter(shape).validate_json(text)
        except ValidationError as e:
            logger.error(f"Failed to read JSON as {_shape_name(shape)}: {e.error_count()} error(s)")
            raise JsonCodecError(f"Cannot read JSON as {_shape_name(shape)}: {e}") from e
        except PydanticSchemaGenerationError as e:
            logger.error(f"No JSON mapping for {_shape_name(shape)}: {e}")
            raise JsonCodecError(f"Cannot read JSON as {_shape_name(shape)}: {e}") from e

    def serialize(self, file: Path, value: Any, shape: Any = None) -> Path:
        """Writes a value as JSON to a file, creating parent directories.

        Args:
            file: The destination file. Overwritten if it exists.
            value: The value to serialize.
            shape: The type to serialize the value as. Defaults to the value's own type.

        Returns:
            Path: The written file.

        Raises:
            JsonCodecError: If the value cannot be represented as JSON.
            ResourceIOError: If the file cannot be written.
        """
        path = Path(file)
        text = self.dumps(value, shape)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding=JSON_ENCODING)
        except OSError as e:
            logger.error(f"Failed to write {path}: {e}")
            raise ResourceIOError(f"Failed to write {path}: {e}") from e

        logger.info(f"Serialized {type(value).__name__} to {path}")
        return path

    def deserialize(self, file: Path | str, shape: type[T]) -> T:
        """Reads a JSON file into a value of the given shape.

        Args:
            file: A local path, or a resource reference string resolved like
                ``FileLocator.resolve`` does (URLs, ``jar:`` entries, ``/name``).
            shape: The type to read, e.g. ``Model`` or ``dict[int, Model]``.

        Returns:
            The deserialized value.

        Raises:
            ResourceNotFoundError: If the file cannot be found.
            ResourceIOError: If the file cannot be read.
            JsonCodecError: If the content is not valid JSON or does not match the shape.
        """
        if isinstance(file, str):
            text = self.loader.load_file_content_as_string(file, JSON_ENCODING)
        else:
            text = self.loader.read_text(file, JSON_ENCODING)

        value = self.loads(text, shape)
        logger.info(f"Deserialized {_shape_name(shape)} from {file}")
        return value


def serialize(file: Path, value: Any, shape: Any = None) -> Path:
    """Writes a value as JSON with a default JsonCodec."""
    return JsonCodec().serialize(file, value, shape)


def deserialize(file: Path | str, shape: type[T]) -> T:
    """Reads a JSON file with a default JsonCodec."""
    codec = JsonCodec()
    try:
        return codec.deserialize(file, shape)
    finally:
        codec.loader.locator.close()
