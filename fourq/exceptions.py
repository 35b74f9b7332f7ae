class FormatError(ValueError):
  """Input string or buffer has the wrong length or is not hex"""

class ValidationError(ValueError):
  """Bytes do not decode to a valid curve point"""

class CurveArithmeticError(ArithmeticError):
  """Division or inversion by zero, or a failed scalar multiplication"""

class SignatureError(ValueError):
  """Signing failed or the message cannot be signed"""
