# FourQ scalars, points and SchnorrQ signatures as Python values.
#
#   sk, pk = generate_keypair()
#   sig = sign(sk, b"message")
#   assert verify(pk, b"message", sig)
#
# Scalar and Point convert to/from 32 bytes and 64 hex characters. Point hex
# strings are byte-reversed relative to the raw encoding; scalar hex is not.

from .exceptions import CurveArithmeticError, FormatError, SignatureError, ValidationError
from .group import Point, Points, Scalar, Scalars
from .schnorrq import MAX_MESSAGE_LENGTH, SIGNATURE_LENGTH, generate_keypair, sign, verify
from .text import sign_text, verify_text
from .util import KEY_LENGTH
