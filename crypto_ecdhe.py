# ------------------------------------------------------------------------------
# Ephemeral Elliptic Curve Diffie-Hellman over Curve25519
#   - RFC 7748 #section-6.1 (Curve25519)
#     * https://datatracker.ietf.org/doc/html/rfc7748#section-6.1
# ------------------------------------------------------------------------------

# Usage:
#
#   alice = KeyPair.generate()
#   bob = KeyPair.generate()
#
#   # Their shared secret
#   alice_shared_secret = alice.exchange(bob.public)
#   bob_shared_secret = bob.exchange(alice.public)
#   assert alice_shared_secret == bob_shared_secret
#
#   # Deterministic secrets (tests) inject their own byte source
#   sec = random_secret(lambda n: bytes(range(n)))
#

import sys
import dataclasses

from Crypto.Random import get_random_bytes # pip install pycryptodome

from crypto_x25519 import KEY_SIZE, F25519, CURVE25519, BASE_XZ, \
    check_length, clamp, decodeScalar25519, decodeUCoordinate, \
    encodeLittleEndian, scalar_mult
from crypto_xz import xz


class InvalidPublicKey(ValueError):
    pass


def _as_bytes(name: str, v) -> bytes:
    # Integers are accepted at the boundary as little-endian 32-byte values.
    if isinstance(v, int):
        return encodeLittleEndian(v)
    return check_length(name, v)

def random_secret(random_bytes=get_random_bytes) -> bytes:
    return clamp(random_bytes(KEY_SIZE))

def public_key(secret) -> bytes:
    k = decodeScalar25519(_as_bytes('secret', secret))
    return scalar_mult(k, BASE_XZ)

def is_valid_public_key(peer_public) -> bool:
    # u must be the x-coordinate of a point on the curve, not on its twist.
    u = decodeUCoordinate(_as_bytes('public key', peer_public))
    return len(CURVE25519.lift_x(u)) > 0

def shared_secret(peer_public, secret, validate=False) -> bytes:
    """
    X25519 shared secret. With validate=True, peers that are not on the curve
    or that force the all-zero result are rejected with InvalidPublicKey.
    """
    peer_public = _as_bytes('public key', peer_public)
    if validate and not is_valid_public_key(peer_public):
        print('[-] shared_secret: public key is not on the curve:',
              peer_public.hex(), file=sys.stderr)
        raise InvalidPublicKey('public key is not a Curve25519 point')

    k = decodeScalar25519(_as_bytes('secret', secret))
    u = decodeUCoordinate(peer_public)
    res = scalar_mult(k, xz(F25519[u], F25519.one()))

    if validate and res == bytes(KEY_SIZE):
        print('[-] shared_secret: all-zero result for public key:',
              peer_public.hex(), file=sys.stderr)
        raise InvalidPublicKey('public key has small order')
    return res


@dataclasses.dataclass(frozen=True, repr=False)
class KeyPair:
    secret: bytes
    public: bytes

    @classmethod
    def generate(cls, random_bytes=get_random_bytes):
        return cls.from_secret(random_secret(random_bytes))

    @classmethod
    def from_secret(cls, secret):
        secret = clamp(_as_bytes('secret', secret))
        return cls(secret=secret, public=public_key(secret))

    def exchange(self, peer_public, validate=False) -> bytes:
        return shared_secret(peer_public, self.secret, validate=validate)

    def __repr__(self):
        # The secret is never printed.
        return 'KeyPair(public=%s)' % self.public.hex()
