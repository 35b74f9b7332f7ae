from __future__ import annotations

from functools import cached_property

# Mersenne prime of the base field
p = 2**127 - 1

# Precalculated exponents (p is congruent to 3 modulo 4)
p14 = (p + 1) // 4
half = (p + 1) // 2


def fp_sqrt(a: int):
  """Square root in GF(p), or None if a is not a square."""
  r = pow(a, p14, p)
  return r if r * r % p == a % p else None


class fp2:
  """An element a + b*i of GF(p^2) = GF(p)[i] / (i^2 + 1), p = 2^127 - 1"""
  def __init__(self, a: int, b: int = 0):
    self.a = a % p
    self.b = b % p

  def __hash__(self): return hash((self.a, self.b))
  def __repr__(self): return f"fp2({self.a:#x}, {self.b:#x})"
  def __bytes__(self): return self.a.to_bytes(16, "little") + self.b.to_bytes(16, "little")
  def __bool__(self): return bool(self.a or self.b)

  def __eq__(self, other):
    if not isinstance(other, fp2): raise TypeError(f"Cannot compare fp2 with {other!r}")
    return self.a == other.a and self.b == other.b

  def __neg__(self): return fp2(-self.a, -self.b)
  def __add__(self, o: fp2): return fp2(self.a + o.a, self.b + o.b)
  def __sub__(self, o: fp2): return fp2(self.a - o.a, self.b - o.b)

  def __mul__(self, o: fp2):
    a, b, c, d = self.a, self.b, o.a, o.b
    return fp2(a * c - b * d, a * d + b * c)

  def __truediv__(self, o: fp2) -> fp2:
    return self * o.inv

  @property
  def sq(self) -> fp2:
    """Squared"""
    a, b = self.a, self.b
    return fp2((a + b) * (a - b), 2 * a * b)

  @property
  def conj(self) -> fp2: return fp2(self.a, -self.b)

  @property
  def norm(self) -> int: return (self.a * self.a + self.b * self.b) % p

  @cached_property
  def inv(self) -> fp2:
    """Multiplicative inverse, (a - b*i) / (a^2 + b^2)"""
    n = self.norm
    if n == 0: raise ZeroDivisionError("Inverse of zero in GF(p^2)")
    ninv = pow(n, p - 2, p)
    return fp2(self.a * ninv, -self.b * ninv)

  @property
  def sign(self) -> int:
    """Bit 126 of the first nonzero component, flipped by negation of any nonzero value."""
    return (self.a if self.a else self.b) >> 126 & 1

  @cached_property
  def sqrt(self) -> fp2:
    """A square root (either one). Raises ValueError if there is none."""
    a, b = self.a, self.b
    if b == 0:
      # Either a or -a is a square in GF(p) because -1 is not
      r = fp_sqrt(a)
      if r is not None: return fp2(r)
      return fp2(0, fp_sqrt(-a))
    n = fp_sqrt(self.norm)
    if n is None: raise ValueError("Not a square in GF(p^2)")
    # Exactly one of (a + n) / 2 and (a - n) / 2 is a square in GF(p)
    x0 = fp_sqrt((a + n) * half % p)
    if x0 is None: x0 = fp_sqrt((a - n) * half % p)
    root = fp2(x0, b * pow(2 * x0, p - 2, p))
    if root.sq != self: raise ValueError("Not a square in GF(p^2)")
    return root


zero, one = fp2(0), fp2(1)
