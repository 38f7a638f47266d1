"""
Decoder for the NORAD Two-Line Element set (TLE) format.

A TLE is three lines of text: a free-form object name followed by two
69-column element lines.  Two decoders are provided over the same record
type:

  - direct   : reads fixed byte ranges of each line (default)
  - grammar  : matches the input with anchored sub-parsers and requires
               the whole input to be consumed

Both raise :class:`TLEError` on the first invalid column; :func:`decode`
returns a :class:`DecodeResult` instead of raising.

References:
  - TLE format: CelesTrak NORAD two-line element set format
"""

from .core import (
    DEFAULT_STRATEGY,
    TLE,
    DecodeResult,
    ErrorKind,
    Strategy,
    TLEError,
    decode,
    decode_lines,
    from_lines,
    get_decoder,
    parse,
)

__version__ = "0.3.0"

__all__ = [
    "TLE",
    "DecodeResult",
    "ErrorKind",
    "TLEError",
    "Strategy",
    "DEFAULT_STRATEGY",
    "parse",
    "from_lines",
    "decode",
    "decode_lines",
    "get_decoder",
    "__version__",
]
