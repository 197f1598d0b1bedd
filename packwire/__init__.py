"""Low-level MessagePack: wire-format markers, per-format writers and a whole-value decoder."""

__version__ = "0.1.0"

__all__ = ["marker", "encode", "encode_int", "value"]