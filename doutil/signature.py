"""RSA PKCS#1 v1.5 signing with SHA-256."""

import base64

from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa


class Signer:
    """Signs data with a base64-encoded PKCS#8 DER RSA private key."""

    def __init__(self, secret: str) -> None:
        self._secret = secret

    def sign(self, raw: bytes) -> str:
        """Return the base64-encoded signature of raw.

        Raises ValueError for a key that cannot be decoded and TypeError for a
        key that is not RSA.
        """
        der = base64.b64decode(self._secret, validate=True)
        key = serialization.load_der_private_key(der, None)
        if not isinstance(key, rsa.RSAPrivateKey):
            raise TypeError(f"expected an RSA private key, got {type(key).__name__}")
        signature = key.sign(bytes(raw), padding.PKCS1v15(), hashes.SHA256())
        return base64.b64encode(signature).decode("ascii")