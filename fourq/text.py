"""Sign and verify text messages (NFKC normalized UTF-8) with the byte-oriented SchnorrQ API."""
from fourq import schnorrq
from fourq.group import Point, Scalar
from fourq.util import encode


def sign_text(secret_key: Scalar, text: str) -> bytes:
  return schnorrq.sign(secret_key, encode(text))


def verify_text(public_key: Point, text: str, signature: bytes) -> bool:
  return schnorrq.verify(public_key, encode(text), signature)
