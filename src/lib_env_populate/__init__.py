"""Public package surface for populating dataclasses from key/value sources.

``populate`` fills a mutable dataclass instance from the environment (or any
:class:`Source`), deriving keys through a :class:`Formatter`. Everything a
consumer needs is re-exported here; the submodules stay importable for
advanced wiring.
"""

from __future__ import annotations

from .adapters.dotenv.default import DotEnvSource
from .adapters.env.default import EnvironSource, env_prefix
from .adapters.formatters.uppercase import Uppercaser
from .adapters.mapping.default import ChainSource, MappingSource
from .application.ports import Formatter, Source
from .core import (
    PopulateContext,
    default_context,
    get_formatter,
    get_source,
    populate,
    reset_defaults,
    set_formatter,
    set_source,
)
from .domain.durations import parse_duration
from .domain.errors import CoercionError, InvalidArgument, InvalidFormat, NotFound, PopulateError, ProgrammingError
from .domain.fields import (
    FieldDescriptor,
    FieldKind,
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
    describe_fields,
    setting,
)
from .observability import bind_trace_id, get_logger

__all__ = [
    "populate",
    "PopulateContext",
    "default_context",
    "set_source",
    "set_formatter",
    "get_source",
    "get_formatter",
    "reset_defaults",
    "Source",
    "Formatter",
    "EnvironSource",
    "MappingSource",
    "ChainSource",
    "DotEnvSource",
    "Uppercaser",
    "env_prefix",
    "setting",
    "describe_fields",
    "FieldDescriptor",
    "FieldKind",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "Float32",
    "Float64",
    "parse_duration",
    "PopulateError",
    "InvalidArgument",
    "ProgrammingError",
    "CoercionError",
    "InvalidFormat",
    "NotFound",
    "get_logger",
    "bind_trace_id",
]
