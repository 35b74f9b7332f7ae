import logging
import threading
from secrets import token_bytes

import pytest

from fourq.backend import *
from fourq.backend import curve


def rand_fp2():
  return fp2(int.from_bytes(token_bytes(16), "little"), int.from_bytes(token_bytes(16), "little"))

def rand_words():
  return int_to_words(int.from_bytes(token_bytes(32), "little") % N)


def test_fp2():
  i = fp2(0, 1)
  assert i * i == -one
  assert one + zero == one
  assert zero - one == fp2(p - 1)
  assert fp2(p) == zero
  assert repr(fp2(1, 2)) == "fp2(0x1, 0x2)"
  assert bytes(one) == b"\x01" + bytes(31)
  assert not zero and one

  x = rand_fp2()
  assert x * x.inv == one
  assert x / x == one
  assert x.sq == x * x
  assert x.sq.sqrt in (x, -x)
  assert x.conj * x == fp2(x.norm)

  with pytest.raises(ZeroDivisionError):
    zero.inv

  with pytest.raises(TypeError):
    one == 1


def test_fp2_sqrt_special():
  # -1 is not a square in GF(p) but is one in GF(p^2)
  assert fp2(-1).sqrt.sq == fp2(-1)
  assert fp2(4).sqrt in (fp2(2), fp2(-2))
  assert zero.sqrt == zero
  # The curve is complete because d is not a square
  with pytest.raises(ValueError):
    d.sqrt


def test_fp2_sign():
  assert zero.sign == 0
  assert fp2(1).sign == 0
  assert fp2(-1).sign == 1
  assert fp2(0, 1).sign == 0
  assert fp2(0, -1).sign == 1
  for _ in range(10):
    x = rand_fp2()
    assert x.sign != (-x).sign


def test_order_words():
  assert words_to_int(order) == N
  assert int_to_words(1) == (1, 0, 0, 0)
  assert words_to_bytes(order) == N.to_bytes(32, "little")
  assert bytes_to_words(N.to_bytes(32, "little")) == order
  assert reduce_mod_order(order) == (0, 0, 0, 0)
  assert reduce_mod_order(int_to_words(2**256 - 1)) == int_to_words((2**256 - 1) % N)
  with pytest.raises(ValueError):
    int_to_words(2**256)
  with pytest.raises(ValueError):
    words_to_int((1, 2, 3))


def test_order_arithmetic():
  a, b = rand_words(), rand_words()
  A, B = words_to_int(a), words_to_int(b)
  assert add_mod_order(a, b) == int_to_words((A + B) % N)
  assert sub_mod_order(a, b) == int_to_words((A - B) % N)
  assert sub_mod_order(order, int_to_words(1)) == int_to_words(N - 1)


def test_montgomery():
  from fourq.backend.order import R_BITS, Rprime, rprime
  assert N * rprime % 2**R_BITS == 2**R_BITS - 1
  assert Rprime == 2**(2 * R_BITS) % N

  a, b = rand_words(), rand_words()
  A, B = words_to_int(a), words_to_int(b)
  ma, mb = to_montgomery(a), to_montgomery(b)
  assert words_to_int(ma) == A * 2**256 % N
  assert from_montgomery(ma) == a
  assert from_montgomery(montgomery_multiply(ma, mb)) == int_to_words(A * B % N)
  assert from_montgomery(montgomery_invert(ma)) == int_to_words(pow(A, -1, N))
  assert montgomery_invert(to_montgomery((0, 0, 0, 0))) == (0, 0, 0, 0)


def test_curve_constants():
  assert point_validate(point_setup(GENERATOR))
  assert point_validate(point_setup(IDENTITY))
  # G has order N
  assert scalar_mul_variable_base(GENERATOR, order) == IDENTITY
  assert scalar_mul_variable_base(GENERATOR, int_to_words(1)) == GENERATOR


def test_group_law():
  G = point_setup(GENERATOR)
  Gr = point_precompute(G)
  two = point_normalize(point_add(Gr, G))
  assert point_normalize(point_double(G)) == two
  three = point_normalize(point_add(Gr, point_setup(two)))
  assert scalar_mul_variable_base(GENERATOR, int_to_words(3)) == three
  # Identity is neutral without special cases
  assert point_normalize(point_add(Gr, point_setup(IDENTITY))) == GENERATOR
  assert point_normalize(point_double(point_setup(IDENTITY))) == IDENTITY
  # P + (-P) with -P = (-x, y)
  minus = point_precompute(point_setup(AffinePoint(-GENERATOR.x, GENERATOR.y)))
  assert point_normalize(point_add(minus, G)) == IDENTITY


def test_encode_decode():
  assert point_encode(IDENTITY) == b"\x01" + bytes(31)
  assert point_decode(point_encode(IDENTITY)) == IDENTITY
  assert point_decode(point_encode(GENERATOR)) == GENERATOR
  for _ in range(5):
    P = scalar_mul_fixed_base(rand_words())
    b = point_encode(P)
    assert point_decode(b) == P
    # The negated point differs only in the sign bit
    nb = point_encode(AffinePoint(-P.x, P.y))
    assert nb[:31] == b[:31] and nb[31] ^ b[31] == 0x80


def test_decode_errors():
  with pytest.raises(ValueError):
    point_decode(bytes(31))
  # Bit 127 belongs to y0 and is never set in a canonical encoding
  with pytest.raises(ValueError) as exc:
    point_decode(bytes(15) + b"\x80" + bytes(16))
  assert "Non-canonical" in str(exc.value)
  with pytest.raises(ValueError):
    point_decode(tobytes(p))
  # Identity with the sign set (x = 0 cannot be negative)
  with pytest.raises(ValueError) as exc:
    point_decode(tobytes(1 | 1 << 255))
  assert "x = 0" in str(exc.value)
  # Roughly half of all y values have no x on the curve
  failures = 0
  for y in range(2, 40):
    try:
      point_decode(tobytes(y))
    except ValueError:
      failures += 1
  assert failures > 0


def test_low_order_point():
  # All-zero encoding is (i, 0), on the curve but of order 4
  P = point_decode(bytes(32))
  assert P == AffinePoint(fp2(0, 1), zero)
  assert point_validate(point_setup(P))
  assert scalar_mul_variable_base(P, int_to_words(4)) == IDENTITY
  assert scalar_mul_variable_base(P, int_to_words(2)) != IDENTITY
  assert point_encode(P) != point_encode(GENERATOR)
  assert not point_in_subgroup(P)
  # G plus a point of order 4 has order 4N
  mixed = point_normalize(point_add(point_precompute(point_setup(P)), point_setup(GENERATOR)))
  assert point_validate(point_setup(mixed))
  assert not point_in_subgroup(mixed)
  assert point_in_subgroup(GENERATOR) and point_in_subgroup(IDENTITY)
  assert point_in_subgroup(scalar_mul_fixed_base(rand_words()))
  assert not point_in_subgroup(AffinePoint(one, one))


def test_scalar_mul_variants():
  k, l = rand_words(), rand_words()
  kG = scalar_mul_fixed_base(k)
  assert kG == scalar_mul_variable_base(GENERATOR, k)
  assert scalar_mul_fixed_base((0, 0, 0, 0)) == IDENTITY
  assert scalar_mul_fixed_base(order) == IDENTITY

  P = scalar_mul_fixed_base(rand_words())
  lP = scalar_mul_variable_base(P, l)
  expected = point_normalize(point_add(point_precompute(point_setup(kG)), point_setup(lP)))
  assert scalar_mul_double_base(k, P, l) == expected
  assert scalar_mul_double_base((0, 0, 0, 0), P, l) == lP
  assert scalar_mul_double_base(k, P, (0, 0, 0, 0)) == kG


def test_scalar_mul_invalid_point():
  bad = AffinePoint(one, one)
  assert not point_validate(point_setup(bad))
  assert scalar_mul_variable_base(bad, int_to_words(5)) is None
  assert scalar_mul_double_base(int_to_words(1), bad, int_to_words(5)) is None


def test_fixed_table_built_once(monkeypatch, caplog):
  monkeypatch.setattr(curve, "_fixed_table", None)
  caplog.set_level(logging.DEBUG, logger="fourq.backend.curve")
  tables = []
  threads = [threading.Thread(target=lambda: tables.append(curve._fixed_base_table())) for _ in range(4)]
  for t in threads: t.start()
  for t in threads: t.join()
  assert len(tables) == 4
  assert all(t is tables[0] for t in tables)
  assert len(tables[0]) == 256 // curve.WINDOW
  assert caplog.text.count("Fixed-base table built") == 1


def test_schnorr_primitives():
  sk = tobytes(toint(token_bytes(32)) % N)
  pk = point_encode(scalar_mul_fixed_base(bytes_to_words(sk)))
  msg = b"primitive"
  sig = schnorr_sign(sk, pk, msg)
  assert len(sig) == 64
  assert sig == schnorr_sign(sk, pk, msg)  # Deterministic
  assert schnorr_verify(pk, msg, sig) is True
  assert schnorr_verify(pk, msg + b"!", sig) is False

  with pytest.raises(ValueError):
    schnorr_sign(sk[:31], pk, msg)
  with pytest.raises(ValueError) as exc:
    schnorr_verify(pk, msg, sig[:63])
  assert "Invalid signature length" == str(exc.value)
  with pytest.raises(ValueError) as exc:
    schnorr_verify(pk, msg, sig[:32] + tobytes(N))
  assert "Invalid s value on signature" == str(exc.value)
  with pytest.raises(ValueError) as exc:
    schnorr_verify(bytes(15) + b"\x80" + bytes(16), msg, sig)
  assert "Invalid public key provided" == str(exc.value)
