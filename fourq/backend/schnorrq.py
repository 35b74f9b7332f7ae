from nacl.bindings import sodium_memcmp

from .curve import point_decode, point_encode, scalar_mul_double_base, scalar_mul_fixed_base
from .order import N, int_to_words
from .util import sha, shabytes, tobytes, toint

# Deterministic Schnorr signatures over FourQ with SHA-512 (SchnorrQ layout: R || s).
# The secret key is the scalar itself, so the public key is simply a * G.


def schnorr_sign(secret_key: bytes, public_key: bytes, message: bytes) -> bytes:
  if len(secret_key) != 32: raise ValueError("Invalid secret key length")
  if len(public_key) != 32: raise ValueError("Invalid public key length")
  a = toint(secret_key) % N
  prefix = shabytes(secret_key)[32:]
  r = sha(prefix + message) % N
  Rs = point_encode(scalar_mul_fixed_base(int_to_words(r)))
  h = sha(Rs + public_key + message) % N
  s = (r - h * a) % N
  return Rs + tobytes(s)

def schnorr_verify(public_key: bytes, message: bytes, signature: bytes) -> bool:
  """Return the validity of a signature. Raises ValueError on malformed input."""
  if len(public_key) != 32: raise ValueError("Invalid public key length")
  if len(signature) != 64: raise ValueError("Invalid signature length")
  Rs = bytes(signature[:32])
  if public_key[15] & 0x80: raise ValueError("Invalid public key provided")
  if Rs[15] & 0x80: raise ValueError("Invalid R point on signature")
  s = toint(signature[32:])
  if s >= N: raise ValueError("Invalid s value on signature")
  A = point_decode(public_key)
  point_decode(Rs)
  h = sha(Rs + public_key + message) % N
  # s G + h A == (r - h a) G + h a G == R
  Q = scalar_mul_double_base(int_to_words(s), A, int_to_words(h))
  if Q is None: raise ValueError("Invalid public key provided")
  return sodium_memcmp(point_encode(Q), Rs)
