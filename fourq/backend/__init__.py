# A plain Python submodule for FourQ curve arithmetic and SchnorrQ signatures

# Curve and constants from "FourQ: four-dimensional decompositions on a Q-curve
# over the Mersenne prime" (Costello, Longa) and the FourQlib reference library.
# https://eprint.iacr.org/2015/565

# Not constant time, not zeroing buffers after use. The endomorphism-accelerated
# algorithms of FourQlib are not used, only plain windowed multiplication.
# Callers should go through fourq.Scalar and fourq.Point rather than these
# functions, which work with raw words, tuples and bytes.

from .curve import (
  GENERATOR, IDENTITY, AffinePoint, ExtPoint, PrecompPoint, d, point_add, point_decode, point_double, point_encode,
  point_in_subgroup, point_normalize, point_precompute, point_setup, point_validate, scalar_mul_double_base,
  scalar_mul_fixed_base, scalar_mul_variable_base
)
from .fp2 import fp2, one, p, zero
from .order import (
  NWORDS_ORDER, N, Words, add_mod_order, bytes_to_words, from_montgomery, int_to_words, montgomery_invert,
  montgomery_multiply, order, reduce_mod_order, sub_mod_order, to_montgomery, words_to_bytes, words_to_int
)
from .schnorrq import schnorr_sign, schnorr_verify
from .util import random_bytes, sha, tobytes, toint
