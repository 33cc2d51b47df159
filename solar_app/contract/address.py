"""Byte-string values and their process-wide hex rendering."""

import threading

_format_lock = threading.Lock()
_format_with_prefix = False


def set_format_bytes_with_prefix(with_prefix: bool) -> None:
    """Render byte values with a 0x prefix from now on."""
    global _format_with_prefix
    with _format_lock:
        _format_with_prefix = with_prefix


def format_bytes_with_prefix() -> bool:
    """Whether byte values are currently rendered with a 0x prefix."""
    return _format_with_prefix


class Bytes(bytes):
    """Raw bytes rendered as hex."""

    @classmethod
    def from_hex(cls, value: str) -> "Bytes":
        """Parse hex with or without a 0x prefix."""
        if value[:2] in ("0x", "0X"):
            value = value[2:]
        return cls(bytes.fromhex(value))

    def hex_string(self, with_prefix: bool) -> str:
        if with_prefix:
            return "0x" + self.hex()
        return self.hex()

    def __str__(self) -> str:
        return self.hex_string(format_bytes_with_prefix())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.hex_string(True)!r})"


class Address(Bytes):
    """Contract or account address."""
