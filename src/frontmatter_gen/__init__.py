"""Extract, parse, convert and validate document front matter."""

__version__ = "0.1.0"

from frontmatter_gen.config import ParseOptions
from frontmatter_gen.engine import FrontmatterEngine, emit, extract, parse, to_format
from frontmatter_gen.errors import (
    ConversionError,
    DepthLimitExceededError,
    ErrorCategory,
    ExtractionError,
    FrontmatterError,
    InputValidationError,
    InvalidBracedError,
    InvalidFormatError,
    NoFrontmatterError,
    ParseError,
    TooManyKeysError,
    UnsupportedFormatError,
)
from frontmatter_gen.types import (
    Array,
    Boolean,
    Format,
    Frontmatter,
    Null,
    Number,
    Object,
    String,
    Tagged,
    Value,
)

__all__ = [
    "__version__",
    "Array",
    "Boolean",
    "ConversionError",
    "DepthLimitExceededError",
    "ErrorCategory",
    "ExtractionError",
    "Format",
    "Frontmatter",
    "FrontmatterEngine",
    "FrontmatterError",
    "InputValidationError",
    "InvalidBracedError",
    "InvalidFormatError",
    "NoFrontmatterError",
    "Null",
    "Number",
    "Object",
    "ParseError",
    "ParseOptions",
    "String",
    "Tagged",
    "TooManyKeysError",
    "UnsupportedFormatError",
    "Value",
    "emit",
    "extract",
    "parse",
    "to_format",
]
