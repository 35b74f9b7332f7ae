"""Arithmetic modulo the prime subgroup order N on 4-word little-endian scalars."""
from typing import Sequence, Tuple

# Prime order of the FourQ subgroup (the curve has 392 * N points)
N = 0x0029CBC14E5E0A72F05397829CBC14E5DFBD004DFE0F79992FB2540EC7768CE7

NWORDS_ORDER = 4
WORD_BITS = 64
WORD_MASK = (1 << WORD_BITS) - 1

Words = Tuple[int, int, int, int]

# Montgomery radix R = 2^256 and its constants
R_BITS = NWORDS_ORDER * WORD_BITS
R_MASK = (1 << R_BITS) - 1
Rprime = pow(2, 2 * R_BITS, N)  # R^2 mod N, converts into the Montgomery domain
rprime = -pow(N, -1, 1 << R_BITS) & R_MASK  # -1/N mod R, used by the reduction


def words_to_int(w: Sequence[int]) -> int:
  if len(w) != NWORDS_ORDER: raise ValueError(f"Should be exactly {NWORDS_ORDER} words")
  return sum(x << WORD_BITS * i for i, x in enumerate(w))

def int_to_words(x: int) -> Words:
  if not 0 <= x <= R_MASK: raise ValueError("Scalar does not fit in 256 bits")
  return tuple(x >> WORD_BITS * i & WORD_MASK for i in range(NWORDS_ORDER))  # type: ignore

def words_to_bytes(w: Sequence[int]) -> bytes:
  return words_to_int(w).to_bytes(32, "little")

def bytes_to_words(b: bytes) -> Words:
  if len(b) != 32: raise ValueError("Should be exactly 32 bytes")
  return int_to_words(int.from_bytes(b, "little"))

order = int_to_words(N)


def reduce_mod_order(a: Sequence[int]) -> Words:
  """Reduce any 256-bit value modulo N"""
  return int_to_words(words_to_int(a) % N)

def add_mod_order(a: Sequence[int], b: Sequence[int]) -> Words:
  return int_to_words((words_to_int(a) + words_to_int(b)) % N)

def sub_mod_order(a: Sequence[int], b: Sequence[int]) -> Words:
  return int_to_words((words_to_int(a) - words_to_int(b)) % N)


def _redc(t: int) -> int:
  # Montgomery reduction: t / R mod N for 0 <= t < N * R
  m = (t & R_MASK) * rprime & R_MASK
  u = (t + m * N) >> R_BITS
  return u - N if u >= N else u

def montgomery_multiply(ma: Sequence[int], mb: Sequence[int]) -> Words:
  """Montgomery product a * b / R mod N (operands below N, or one of them below N)"""
  return int_to_words(_redc(words_to_int(ma) * words_to_int(mb)))

def to_montgomery(a: Sequence[int]) -> Words:
  """a * R mod N"""
  return montgomery_multiply(a, int_to_words(Rprime))

def from_montgomery(ma: Sequence[int]) -> Words:
  """a / R mod N"""
  return montgomery_multiply(ma, (1, 0, 0, 0))

def montgomery_invert(ma: Sequence[int]) -> Words:
  """Inverse within the Montgomery domain, by Fermat: (a R)^(N-2) -> a^-1 R. Zero maps to zero."""
  a = words_to_int(ma)
  acc = (1 << R_BITS) % N  # One in Montgomery domain
  e = N - 2
  for i in reversed(range(e.bit_length())):
    acc = _redc(acc * acc)
    if e >> i & 1: acc = _redc(acc * a)
  return int_to_words(acc)
