# RFC 7748
# Elliptic Curves for Security
#
# https://tools.ietf.org/html/rfc7748
# https://www.rfc-editor.org/errata_search.php?rfc=7748

# Usage:
#
#   # Secret key
#   alice_sec = bytes.fromhex(
#       '77076d0a7318a57d3c16c17251b26645df4c2f87ebc0992ab177fba51db92c2a')
#   bob_sec = bytes.fromhex(
#       '5dab087e624a8a4b79e17f8b83800ee66f3bb1292618b6fd1c2f8b27ff88e0eb')
#
#   # Create public key
#   alice_pub = x25519(alice_sec)
#   bob_pub = x25519(bob_sec)
#
#   # Their shared secret
#   alice_shared_secret = x25519(alice_sec, bob_pub)
#   bob_shared_secret = x25519(bob_sec, alice_pub)
#   assert alice_shared_secret == bob_shared_secret
#

import sys

from crypto_ffield import FField
from crypto_montgomery import MontgomeryCurve
from crypto_xz import XZLadder, xz, is_infinity

# 4.1.  Curve25519

P = 2**255 - 19
A = 486662
KEY_SIZE = 32

F25519 = FField(P)
CURVE25519 = MontgomeryCurve(F25519, a=A, b=1)
LADDER = XZLadder(CURVE25519)

BASE_X = F25519[9]
BASE_XZ = xz(BASE_X, F25519.one())
BASE_POINT = CURVE25519.point(
    9, 14781619447589544791020593568409986887264606134616475288964881837755586237401)

# 5.  The X25519 and X448 Functions

def check_length(name: str, b, size=KEY_SIZE) -> bytes:
    if not isinstance(b, (bytes, bytearray)) or len(b) != size:
        print('[-] %s: expected %d bytes, got %s of length %s' % \
              (name, size, type(b).__name__, len(b) if hasattr(b, '__len__') else '?'),
              file=sys.stderr)
        raise ValueError('%s must be %d bytes' % (name, size))
    return bytes(b)

def decodeLittleEndian(b, bits=256) -> int:
    return int.from_bytes(bytes(b[:(bits+7)//8]), byteorder='little')

def encodeLittleEndian(n: int, bits=256) -> bytes:
    if not 0 <= n < (1 << ((bits+7)//8*8)):
        raise ValueError('%d does not fit in %d bytes' % (n, (bits+7)//8))
    return n.to_bytes((bits+7)//8, byteorder='little')

def decodeUCoordinate(u, bits=255) -> int:
    u_list = [b for b in u]
    # Ignore any unused bits.
    if bits % 8:
        u_list[-1] &= (1 << (bits % 8)) - 1
    return decodeLittleEndian(u_list, bits)

def encodeUCoordinate(u, bits=255) -> bytes:
    return encodeLittleEndian(int(u) % P, bits)

def clamp(k) -> bytes:
    k_list = [b for b in check_length('secret', k)]
    k_list[0] &= 248
    k_list[31] &= 127
    k_list[31] |= 64
    return bytes(k_list)

def decodeScalar25519(k) -> int:
    return decodeLittleEndian(clamp(k), 255)

def scalar_mult(k: int, pt) -> bytes:
    # x-coordinate of k * pt through the ladder; the identity encodes as zero.
    res = LADDER.scale(k, pt)
    if is_infinity(res):
        return bytes(KEY_SIZE)
    return encodeUCoordinate(LADDER.to_x(res))

# scalar k (bytes) and u-coordinate of the base point u (bytes)
def x25519(k: bytes, u: bytes = encodeUCoordinate(9)) -> bytes:
    # Curve25519 for the ~128-bit security level.
    # Computes u := k * u where k is the scalar and u is the u-coordinate.
    k = decodeScalar25519(k)
    u = decodeUCoordinate(check_length('u-coordinate', u))
    return scalar_mult(k, xz(F25519[u], F25519.one()))
