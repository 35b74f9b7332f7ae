from __future__ import annotations

import logging
import threading
from typing import List, NamedTuple, Optional, Sequence

from .fp2 import fp2, one, p, zero
from .order import N, order, words_to_int

log = logging.getLogger(__name__)

# Twisted Edwards curve FourQ over GF(p^2): -x2 + y2 = 1 + d x2 y2
d = fp2(0x00000000000000E40000000000000142, 0x5E472F846657E0FCB3821488F1FC0C8D)
d2 = d + d

# Fixed window width (bits) for all scalar multiplications
WINDOW = 4


class AffinePoint(NamedTuple):
  x: fp2
  y: fp2

class ExtPoint(NamedTuple):
  """Extended coordinates (R1): x = X/Z, y = Y/Z, x*y = Ta*Tb/Z"""
  X: fp2
  Y: fp2
  Z: fp2
  Ta: fp2
  Tb: fp2

class PrecompPoint(NamedTuple):
  """Addition-ready form (R2): (X+Y, Y-X, 2Z, 2dT)"""
  xy: fp2
  yx: fp2
  z2: fp2
  t2: fp2


IDENTITY = AffinePoint(zero, one)

GENERATOR = AffinePoint(
  fp2(0x1A3472237C2FB305286592AD7B3833AA, 0x1E1F553F2878AA9C96869FB360AC77F6),
  fp2(0x0E3FEE9BA120785AB924A2462BCBB287, 0x6E1C4AF8630E024249A7C344844C8B5C),
)


def point_setup(P: AffinePoint) -> ExtPoint:
  """Affine to extended coordinates"""
  return ExtPoint(P.x, P.y, one, P.x, P.y)

def point_normalize(P: ExtPoint) -> AffinePoint:
  """Extended to affine coordinates (Z = 1)"""
  zinv = P.Z.inv
  return AffinePoint(P.X * zinv, P.Y * zinv)

def point_precompute(P: ExtPoint) -> PrecompPoint:
  """R1 to R2 conversion, done once per addend"""
  return PrecompPoint(P.X + P.Y, P.Y - P.X, P.Z + P.Z, d2 * P.Ta * P.Tb)

def point_add(Q: PrecompPoint, P: ExtPoint) -> ExtPoint:
  """P + Q with the complete a = -1 formulas (also valid for doubling and the identity)"""
  A = (P.Y - P.X) * Q.yx
  B = (P.Y + P.X) * Q.xy
  C = P.Ta * P.Tb * Q.t2
  D = P.Z * Q.z2
  E, F, G, H = B - A, D - C, D + C, B + A
  return ExtPoint(E * F, G * H, F * G, E, H)

def point_double(P: ExtPoint) -> ExtPoint:
  A = P.X.sq
  B = P.Y.sq
  C = P.Z.sq
  C = C + C
  D = -A
  E = (P.X + P.Y).sq - A - B
  G = D + B
  F = G - C
  H = D - B
  return ExtPoint(E * F, G * H, F * G, E, H)

def point_validate(P: ExtPoint) -> bool:
  """Check the curve equation. Prime subgroup membership is not checked."""
  x, y = point_normalize(P)
  x2, y2 = x.sq, y.sq
  return y2 - x2 == one + d * x2 * y2


def point_encode(P: AffinePoint) -> bytes:
  """32 bytes: y (two 16 byte halves, little endian) with the sign of x on bit 255"""
  y = P.y.a | P.y.b << 128 | P.x.sign << 255
  return y.to_bytes(32, "little")

def point_decode(b: bytes) -> AffinePoint:
  """Recover the affine point from its encoding. Raises ValueError on invalid input."""
  if len(b) != 32: raise ValueError("Should be exactly 32 bytes")
  val = int.from_bytes(b, "little")
  sign = val >> 255
  y0, y1 = val & (1 << 128) - 1, val >> 128 & (1 << 127) - 1
  if y0 >= p or y1 >= p: raise ValueError("Non-canonical y coordinate")
  y = fp2(y0, y1)
  x = ((y.sq - one) / (d * y.sq + one)).sqrt
  if x.sign != sign:
    if not x: raise ValueError("Invalid sign for x = 0")
    x = -x
  return AffinePoint(x, y)


def _window_digits(k: int) -> List[int]:
  """Base 2^WINDOW digits of a 256-bit scalar, most significant first"""
  mask = (1 << WINDOW) - 1
  return [k >> i & mask for i in reversed(range(0, 256, WINDOW))]

def _multiples(P: ExtPoint) -> List[PrecompPoint]:
  """[0 P, 1 P, ..., (2^WINDOW - 1) P] in R2 form"""
  Pr = point_precompute(P)
  table = [point_precompute(point_setup(IDENTITY)), Pr]
  Q = P
  for _ in range(2, 1 << WINDOW):
    Q = point_add(Pr, Q)
    table.append(point_precompute(Q))
  return table


def scalar_mul_variable_base(P: AffinePoint, k: Sequence[int]) -> Optional[AffinePoint]:
  """k P for an arbitrary point, or None if P is not on the curve"""
  Pe = point_setup(P)
  if not point_validate(Pe): return None
  table = _multiples(Pe)
  Q = point_setup(IDENTITY)
  for digit in _window_digits(words_to_int(k)):
    for _ in range(WINDOW): Q = point_double(Q)
    Q = point_add(table[digit], Q)
  return point_normalize(Q)

def point_in_subgroup(P: AffinePoint) -> bool:
  """N P == O. False for points off the curve and for anything with a low order component"""
  return scalar_mul_variable_base(P, order) == IDENTITY


_fixed_table: Optional[List[List[PrecompPoint]]] = None
_fixed_lock = threading.Lock()

def _fixed_base_table() -> List[List[PrecompPoint]]:
  """Rows i = 0..63 of j 16^i G for j = 0..15, built once per process"""
  global _fixed_table
  with _fixed_lock:
    if _fixed_table is None:
      rows = []
      B = point_setup(GENERATOR)
      for _ in range(256 // WINDOW):
        rows.append(_multiples(B))
        for _ in range(WINDOW): B = point_double(B)
      _fixed_table = rows
      log.debug("Fixed-base table built with %d rows", len(rows))
  return _fixed_table

def scalar_mul_fixed_base(k: Sequence[int]) -> AffinePoint:
  """k G using the precomputed generator table (additions only)"""
  table = _fixed_base_table()
  digits = _window_digits(words_to_int(k) % N)
  Q = point_setup(IDENTITY)
  for row, digit in zip(reversed(table), digits):
    Q = point_add(row[digit], Q)
  return point_normalize(Q)

def scalar_mul_double_base(k: Sequence[int], P: AffinePoint, l: Sequence[int]) -> Optional[AffinePoint]:
  """k G + l P by interleaved windows (Straus), or None if P is not on the curve"""
  Pe = point_setup(P)
  if not point_validate(Pe): return None
  gtable = _fixed_base_table()[0]
  ptable = _multiples(Pe)
  Q = point_setup(IDENTITY)
  for kd, ld in zip(_window_digits(words_to_int(k) % N), _window_digits(words_to_int(l))):
    for _ in range(WINDOW): Q = point_double(Q)
    Q = point_add(gtable[kd], Q)
    Q = point_add(ptable[ld], Q)
  return point_normalize(Q)
