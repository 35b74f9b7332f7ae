"""
Scalars modulo the FourQ group order and points of the prime order group.

Both are value types over the raw backend. Scalars are immutable and always
reduced modulo N. Points hold extended coordinates internally but are only
ever compared, hashed and serialized through their canonical 32 byte encoding.
The two classes live in one module because Point reads the words of a Scalar.
"""
from __future__ import annotations

from functools import total_ordering
from typing import List, Union

from fourq import backend
from fourq.exceptions import CurveArithmeticError, FormatError, ValidationError
from fourq.util import check_length, hex_decode, hex_encode, reverse


@total_ordering
class Scalar:
  """An integer modulo the group order N, stored as four little-endian 64-bit words."""

  def __init__(self, value: Union[int, bytes, bytearray, str, Scalar] = 0):
    if isinstance(value, Scalar):
      self._words = value._words
    elif isinstance(value, str):
      self._words = Scalar.from_string(value)._words
    elif isinstance(value, (bytes, bytearray, memoryview)):
      b = check_length(value, "scalar")
      self._words = backend.reduce_mod_order(backend.bytes_to_words(b))
    elif isinstance(value, int) and not isinstance(value, bool):
      # Small literals are below the order and are stored as they are
      if not 0 <= value < 1 << 32:
        raise FormatError(f"Scalar literal must be a 32-bit unsigned integer, got {value}")
      self._words = (value, 0, 0, 0)
    else:
      raise TypeError(f"Cannot make a Scalar of {type(value).__name__}")

  @classmethod
  def _from_words(cls, words: backend.Words) -> Scalar:
    s = cls.__new__(cls)
    s._words = tuple(words)
    return s

  @classmethod
  def from_string(cls, text: str) -> Scalar:
    """
    Parse 64 hex digits of the little-endian encoding (no byte reversal).

    Note:
      Values at or above the group order are reduced, not rejected, so that
      from_string(N + 1) == Scalar(1). Check the range first if it matters.
    """
    b = hex_decode(text, "scalar")
    return cls._from_words(backend.reduce_mod_order(backend.bytes_to_words(b)))

  def get_raw(self) -> bytes:
    return backend.words_to_bytes(self._words)

  def to_string(self) -> str:
    return hex_encode(self.get_raw())

  def is_zero(self) -> bool:
    return not any(self._words)

  def sanitize(self) -> Scalar:
    """The same value reduced modulo N. Only Point.get_order() is ever unreduced."""
    return Scalar._from_words(backend.reduce_mod_order(self._words))

  def __bytes__(self): return self.get_raw()
  def __str__(self): return self.to_string()
  def __repr__(self): return f"Scalar({self.to_string()!r})"
  def __hash__(self): return hash(self._words)

  def __eq__(self, other):
    if not isinstance(other, Scalar): return NotImplemented
    return self._words == other._words

  def __lt__(self, other):
    # Byte pattern order of the stored words, not numeric order
    if not isinstance(other, Scalar): return NotImplemented
    return self.get_raw() < other.get_raw()

  def __add__(self, other: Scalar) -> Scalar:
    if not isinstance(other, Scalar): return NotImplemented
    return Scalar._from_words(backend.add_mod_order(self._words, other._words))

  def __sub__(self, other: Scalar) -> Scalar:
    if not isinstance(other, Scalar): return NotImplemented
    return Scalar._from_words(backend.sub_mod_order(self._words, other._words))

  def __mul__(self, other: Scalar) -> Scalar:
    # Scalar * Point is handled by Point.__rmul__
    if not isinstance(other, Scalar): return NotImplemented
    ma = backend.to_montgomery(self._words)
    mb = backend.to_montgomery(other._words)
    return Scalar._from_words(backend.from_montgomery(backend.montgomery_multiply(ma, mb)))

  def __truediv__(self, other: Scalar) -> Scalar:
    if not isinstance(other, Scalar): return NotImplemented
    if other.is_zero(): raise CurveArithmeticError("Scalar division by zero")
    ma = backend.to_montgomery(self._words)
    minv = backend.montgomery_invert(backend.to_montgomery(other._words))
    return Scalar._from_words(backend.from_montgomery(backend.montgomery_multiply(ma, minv)))

  def __neg__(self) -> Scalar:
    return Scalar.negate(self)

  @staticmethod
  def invert(b: Scalar) -> Scalar:
    if b.is_zero(): raise CurveArithmeticError("Cannot invert zero scalar")
    minv = backend.montgomery_invert(backend.to_montgomery(b._words))
    return Scalar._from_words(backend.from_montgomery(minv))

  @staticmethod
  def negate(b: Scalar) -> Scalar:
    """N - b, with zero mapping to zero."""
    if b.is_zero(): return Scalar()
    return Scalar._from_words(backend.sub_mod_order(backend.order, b._words))

  @staticmethod
  def get_zero() -> Scalar:
    return Scalar()


@total_ordering
class Point:
  """An element of the FourQ prime order group. Compound operators modify the point in place."""

  def __init__(self, value: Union[None, bytes, bytearray, str, Point] = None):
    if value is None:
      self._pe = backend.point_setup(backend.IDENTITY)
    elif isinstance(value, Point):
      # Extended points are immutable tuples, so sharing one is a copy
      self._pe = value._pe
    elif isinstance(value, str):
      self._pe = Point.from_string(value)._pe
    elif isinstance(value, (bytes, bytearray, memoryview)):
      self._pe = _decode(check_length(value, "point"))
    else:
      raise TypeError(f"Cannot make a Point of {type(value).__name__}")

  @classmethod
  def _from_affine(cls, P: backend.AffinePoint) -> Point:
    pt = cls.__new__(cls)
    pt._pe = backend.point_setup(P)
    return pt

  @classmethod
  def from_string(cls, text: str) -> Point:
    """Parse the wire form: hex of the byte-reversed raw encoding."""
    pt = cls.__new__(cls)
    pt._pe = _decode(reverse(hex_decode(text, "point")))
    return pt

  def get_raw(self) -> bytes:
    return backend.point_encode(backend.point_normalize(self._pe))

  def to_string(self) -> str:
    return hex_encode(reverse(self.get_raw()))

  def is_zero(self) -> bool:
    return backend.point_normalize(self._pe) == backend.IDENTITY

  def __bytes__(self): return self.get_raw()
  def __str__(self): return self.to_string()
  def __repr__(self): return f"Point({self.to_string()!r})"
  def __copy__(self): return Point(self)

  # Points are mutable, so a point must not be modified while it is a dict key or in a set
  def __hash__(self): return hash(self.get_raw())

  def __eq__(self, other):
    if not isinstance(other, Point): return NotImplemented
    return self.get_raw() == other.get_raw()

  def __lt__(self, other):
    # Encoding order for sorted containers, meaningless in the group
    if not isinstance(other, Point): return NotImplemented
    return self.get_raw() < other.get_raw()

  def __iadd__(self, other: Point) -> Point:
    if not isinstance(other, Point): return NotImplemented
    self._pe = backend.point_add(backend.point_precompute(other._pe), self._pe)
    return self

  def __isub__(self, other: Point) -> Point:
    if not isinstance(other, Point): return NotImplemented
    self += Point.negate(other)
    return self

  def __imul__(self, b: Scalar) -> Point:
    if not isinstance(b, Scalar): return NotImplemented
    Q = backend.scalar_mul_variable_base(backend.point_normalize(self._pe), b._words)
    if Q is None: raise CurveArithmeticError("Variable base scalar multiplication failed")
    self._pe = backend.point_setup(Q)
    return self

  def __add__(self, other: Point) -> Point:
    if not isinstance(other, Point): return NotImplemented
    ret = Point(self)
    ret += other
    return ret

  def __sub__(self, other: Point) -> Point:
    if not isinstance(other, Point): return NotImplemented
    ret = Point(self)
    ret -= other
    return ret

  def __mul__(self, b: Scalar) -> Point:
    if not isinstance(b, Scalar): return NotImplemented
    ret = Point(self)
    ret *= b
    return ret

  def __rmul__(self, b: Scalar) -> Point:
    return self * b

  def __neg__(self) -> Point:
    return Point.negate(self)

  def mul_add(self, mG: Scalar, mP: Scalar) -> Point:
    """mG * G + mP * self in a single double-base multiplication."""
    Q = backend.scalar_mul_double_base(mG._words, backend.point_normalize(self._pe), mP._words)
    if Q is None: raise CurveArithmeticError("Double base scalar multiplication failed")
    return Point._from_affine(Q)

  @staticmethod
  def mul_base(b: Scalar) -> Point:
    """b * G using the precomputed generator table."""
    return Point._from_affine(backend.scalar_mul_fixed_base(b._words))

  @staticmethod
  def negate(P: Point) -> Point:
    """(N - 1) * P, or the identity for the identity."""
    if P.is_zero(): return Point.get_zero()
    minus_one = Scalar._from_words(backend.sub_mod_order(backend.order, Scalar(1)._words))
    return minus_one * P

  @staticmethod
  def get_order() -> Scalar:
    """
    The group order N itself, the only Scalar that is not reduced.

    Note:
      N is zero modulo N, yet get_order() != Scalar(0), and Scalar.invert(get_order())
      or division by it returns zero instead of raising. Use get_order().sanitize()
      where the reduced value is meant.
    """
    return Scalar._from_words(backend.order)

  @staticmethod
  def get_base() -> Point:
    return Point._from_affine(backend.GENERATOR)

  @staticmethod
  def get_zero() -> Point:
    return Point()


def _decode(raw: bytes) -> backend.ExtPoint:
  try:
    P = backend.point_decode(raw)
  except ValueError as exc:
    raise ValidationError("Point decoding failed") from exc
  pe = backend.point_setup(P)
  if not backend.point_validate(pe):
    raise ValidationError("Point validation failed: not on the curve")
  # Cofactor 392: low order and mixed order points are on the curve but not in the group
  if not backend.point_in_subgroup(P):
    raise ValidationError("Point validation failed: not in the prime order subgroup")
  return pe


Scalars = List[Scalar]
Points = List[Point]
