import hashlib
from secrets import token_bytes


def toint(x) -> int:
  if isinstance(x, int): return x
  if len(x) != 32: raise ValueError("Should be exactly 32 bytes")
  return int.from_bytes(x, "little")

def tobytes(x: int) -> bytes:
  return x.to_bytes(32, "little")

def sha(s) -> int:
  """Return SHA-512 as 512 bit integer"""
  return int.from_bytes(shabytes(s), "little")

def shabytes(s) -> bytes:
  return hashlib.sha512(s).digest()

def random_bytes(n: int) -> bytes:
  """Cryptographically secure random bytes (only used for key generation)"""
  return token_bytes(n)
