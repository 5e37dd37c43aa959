# ------------------------------------------------------------------------------
# x-only Montgomery Ladder in XZ (projective) Coordinates
#   - RFC 7748 #section-5
#     * https://datatracker.ietf.org/doc/html/rfc7748#section-5
#   - "mdbl-1987-m" and "mladd-1987-m"
#     * https://hyperelliptic.org/EFD/g1p/auto-montgom-xz.html
# ------------------------------------------------------------------------------

# Usage:
#
#   curve = MontgomeryCurve(FField(47), a=3, b=1)
#   ladder = XZLadder(curve)
#   G = ladder.to_projective(curve.point(5, 8))
#   print(ladder.to_x(ladder.scale(43, G)))         # F47(5)
#   print(ladder.to_affine(ladder.scale(43, G)))    # ((5, 8), (5, 39))
#   print(ladder.scale(44, G))                      # Infinity
#
# Only the x-coordinate is tracked, so a result converted back to affine
# coordinates is known up to the sign of y.

from typing import NamedTuple

from crypto_ffield import FFieldValue
from crypto_montgomery import MontgomeryCurve, Infinity


class XZPoint(NamedTuple):
    X: FFieldValue
    Z: FFieldValue

    def __repr__(self):
        return 'XZ(%d : %d)' % (int(self.X), int(self.Z))


def xz(X: FFieldValue, Z: FFieldValue):
    # Z == 0 is the point at infinity, never an XZPoint.
    if Z.is_zero():
        return Infinity
    return XZPoint(X, Z)


def is_infinity(pt) -> bool:
    # An XZPoint built directly with Z == 0 is infinity as well.
    return pt is Infinity or (isinstance(pt, XZPoint) and pt.Z.is_zero())


class XZLadder:
    def __init__(self, curve: MontgomeryCurve):
        self.curve = curve
        self.field = curve.field
        self.p = curve.field.p
        self.a24 = int(curve.a24)

    def to_projective(self, pt):
        if pt is Infinity:
            return Infinity
        return xz(self.field.elem(pt[0]), self.field.one())

    def to_x(self, pt):
        # Affine x = X / Z, or None for the point at infinity.
        if is_infinity(pt):
            return None
        return pt.X / pt.Z

    def to_affine(self, pt):
        """
        Both affine points sharing x = X/Z (a single point when y = 0, none
        when x is not the x-coordinate of a curve point).
        """
        if is_infinity(pt):
            return Infinity
        return self.curve.lift_x(self.to_x(pt))

    # The ladder steps run on canonical ints; (X, 0) stands for infinity.

    def _double(self, X, Z):
        p = self.p
        c = (X - Z) * (X - Z) % p
        d = 4 * X * Z % p
        return (X + Z) * (X + Z) * c % p, d * (c + self.a24 * d) % p

    def _diff_add(self, X0, Z0, X1, Z1, x_base):
        if Z0 == 0:
            return X1, Z1
        if Z1 == 0:
            return X0, Z0
        p = self.p
        da = (X0 - Z0) * (X1 + Z1)
        cb = (X0 + Z0) * (X1 - Z1)
        return (da + cb) * (da + cb) % p, x_base * (da - cb) * (da - cb) % p

    def _point(self, X, Z):
        return xz(self.field[X], self.field[Z])

    def double(self, pt):
        if is_infinity(pt):
            return Infinity
        return self._point(*self._double(int(pt.X), int(pt.Z)))

    def diff_add(self, p0, p1, x_base: FFieldValue):
        # p0 + p1, given that p1 - p0 has affine x-coordinate x_base.
        if is_infinity(p0):
            return Infinity if is_infinity(p1) else p1
        if is_infinity(p1):
            return p0
        return self._point(*self._diff_add(int(p0.X), int(p0.Z),
                                           int(p1.X), int(p1.Z), int(x_base)))

    def scale(self, k: int, pt):
        """
        Montgomery ladder: k * pt, scanning the bits of k from the top.
        r1 - r0 == pt holds after every step, which is why the additions only
        need the x-coordinate of pt.
        """
        if k < 0:
            raise ValueError('scalar must not be negative: %d' % k)
        if is_infinity(pt) or k == 0:
            return Infinity

        x_base = int(self.to_x(pt))
        r0 = (1, 0)
        r1 = (int(pt.X), int(pt.Z))
        for bit in range(k.bit_length() - 1, -1, -1):
            if (k >> bit) & 1 == 0:
                r1 = self._diff_add(*r0, *r1, x_base)
                r0 = self._double(*r0)
            else:
                r0 = self._diff_add(*r0, *r1, x_base)
                r1 = self._double(*r1)
        return self._point(*r0)
