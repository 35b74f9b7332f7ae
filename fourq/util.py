import re
import unicodedata

from fourq.exceptions import FormatError

KEY_LENGTH = 32  # Bytes in scalar and point encodings

HEX_RE = re.compile(f"[0-9A-Fa-f]{{{2 * KEY_LENGTH}}}")


def hex_decode(s: str, what: str = "input") -> bytes:
  """Exactly 64 hex digits to 32 bytes."""
  if len(s) != 2 * KEY_LENGTH:
    raise FormatError(f"Invalid {what} length: expected {2 * KEY_LENGTH}, got {len(s)}")
  if not HEX_RE.fullmatch(s):
    raise FormatError(f"Invalid {what}: not a hex string")
  return bytes.fromhex(s)


def hex_encode(b: bytes) -> str:
  return bytes(b).hex()


def reverse(b: bytes) -> bytes:
  """Byte order swap between raw point encoding and its wire (hex) form."""
  return bytes(b)[::-1]


def check_length(b, what: str = "input") -> bytes:
  b = bytes(b)
  if len(b) != KEY_LENGTH:
    raise FormatError(f"Invalid {what} length: expected {KEY_LENGTH} bytes, got {len(b)}")
  return b


def encode(s: str) -> bytes:
  """Unicode-normalizing UTF-8 encode."""
  return unicodedata.normalize("NFKC", s.lstrip("\uFEFF")).encode()
