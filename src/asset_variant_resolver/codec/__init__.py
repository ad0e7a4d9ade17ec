"""Binary codec for the modern asset manifest encoding."""

from .standard_message import CorruptMessageError, StandardMessageCodec

__all__ = ["CorruptMessageError", "StandardMessageCodec"]
