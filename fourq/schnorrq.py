"""
SchnorrQ signatures with fourq.Scalar secret keys and fourq.Point public keys.

A signature is 64 opaque bytes. Signing always derives the public key from the
secret key. Verification never raises for a bad signature, it returns False.
"""
import logging
from typing import Tuple

from fourq import backend
from fourq.exceptions import SignatureError
from fourq.group import Point, Scalar

log = logging.getLogger(__name__)

SIGNATURE_LENGTH = 64

# Message sizes are 32-bit counts in the signing primitive; hash longer data first
MAX_MESSAGE_LENGTH = 2**32 - 2


def generate_keypair() -> Tuple[Scalar, Point]:
  """A fresh random secret key and its public key."""
  sk = Scalar(backend.random_bytes(32))
  return sk, Point.mul_base(sk)


def sign(secret_key: Scalar, message: bytes) -> bytes:
  pk = Point.mul_base(secret_key)
  if not message:
    raise SignatureError("Cannot sign an empty message")
  if len(message) > MAX_MESSAGE_LENGTH:
    raise SignatureError(f"Message too long to sign: {len(message)} bytes")
  try:
    sig = backend.schnorr_sign(secret_key.get_raw(), pk.get_raw(), bytes(message))
  except ValueError as exc:
    raise SignatureError(f"Signing failed: {exc}") from exc
  assert len(sig) == SIGNATURE_LENGTH
  return sig


def verify(public_key: Point, message: bytes, signature: bytes) -> bool:
  if len(signature) != SIGNATURE_LENGTH:
    log.debug("Signature rejected: length %d", len(signature))
    return False
  if len(message) > MAX_MESSAGE_LENGTH:
    log.debug("Signature rejected: message of %d bytes is too long", len(message))
    return False
  try:
    valid = backend.schnorr_verify(public_key.get_raw(), bytes(message), bytes(signature))
  except ValueError as exc:
    log.debug("Signature rejected: %s", exc)
    return False
  if not valid:
    log.debug("Signature rejected: mismatch")
  return bool(valid)
