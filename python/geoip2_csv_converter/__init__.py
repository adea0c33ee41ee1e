"""Convert GeoIP2/GeoLite2 block CSVs to alternative network representations."""

from .columns import (
    Representation,
    RepresentationRequest,
    build_header_transform,
    build_line_transform,
)
from .convert import (
    ConversionError,
    ConversionStats,
    FileConversionError,
    InputReadError,
    MissingHeaderError,
    NetworkParseError,
    OutputWriteError,
    RecordShapeError,
    convert,
    convert_file,
    convert_stream,
)
from .prefix import (
    AddressFamily,
    Prefix,
    PrefixParseError,
    first_address,
    last_address,
    parse_prefix,
    to_cidr_text,
    to_decimal,
    to_hex,
    to_text,
)

__all__ = [
    "AddressFamily",
    "Prefix",
    "PrefixParseError",
    "parse_prefix",
    "first_address",
    "last_address",
    "to_text",
    "to_decimal",
    "to_hex",
    "to_cidr_text",
    "Representation",
    "RepresentationRequest",
    "build_header_transform",
    "build_line_transform",
    "ConversionError",
    "InputReadError",
    "MissingHeaderError",
    "RecordShapeError",
    "NetworkParseError",
    "OutputWriteError",
    "FileConversionError",
    "ConversionStats",
    "convert",
    "convert_file",
    "convert_stream",
]
