"""mtlint.source: raw literal decoding and decoded->raw position mapping."""

from .literal import RawLiteral, decode_literal, map_offset, map_range, span_in_literal

__all__ = ["RawLiteral", "decode_literal", "map_offset", "map_range", "span_in_literal"]
