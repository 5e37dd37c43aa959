# ------------------------------------------------------------------------------
# Montgomery Curves in Affine Coordinates
#   B * y^2 = x^3 + A * x^2 + x
#   - RFC 7748 #section-4.1 (Curve25519)
#     * https://datatracker.ietf.org/doc/html/rfc7748#section-4.1
#   - Explicit-Formulas Database, Montgomery curves
#     * https://hyperelliptic.org/EFD/g1p/auto-montgom.html
# ------------------------------------------------------------------------------

# Usage:
#
#   F = FField(47)
#   curve = MontgomeryCurve(F, a=3, b=1)
#   G = curve.point(5, 8)
#   print(curve.point_add(G, curve.point(7, 11)))  # (46, 1)
#   print(curve.scale_double_add(43, G))           # (5, 39)
#   print(curve.scale_double_add(44, G))           # Infinity
#
# The affine scalar multiplications are reference implementations used to
# check the x-only ladder (crypto_xz.py). They are not constant time.

from typing import NamedTuple

from crypto_ffield import FField, FFieldValue


class _Infinity:
    # Point at infinity, the identity of the curve group.
    # The same singleton is used by the affine and the XZ code.
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return 'Infinity'

    def __reduce__(self):
        return (_Infinity, ())

Infinity = _Infinity()


class AffinePoint(NamedTuple):
    x: FFieldValue
    y: FFieldValue

    def __repr__(self):
        return '(%d, %d)' % (int(self.x), int(self.y))


class MontgomeryCurve:
    def __init__(self, field: FField, a=486662, b=1):
        self.field = field
        self.a = field.elem(a)
        self.b = field.elem(b)
        if self.b.is_zero() or self.a * self.a == field[4]:
            raise ValueError('singular Montgomery curve: A=%d, B=%d' % \
                             (int(self.a), int(self.b)))
        # (A + 2) / 4, used by the x-only doubling
        self.a24 = (self.a + field[2]) / field[4]

    def __repr__(self):
        return 'MontgomeryCurve(p=%d, A=%d, B=%d)' % \
            (self.field.p, int(self.a), int(self.b))

    def point(self, x, y):
        pt = AffinePoint(self.field.elem(x), self.field.elem(y))
        if not self.on_curve(pt):
            raise ValueError('%r is not on %r' % (pt, self))
        return pt

    def rhs(self, x: FFieldValue) -> FFieldValue:
        # y^2 for a given x
        return (x ** 3 + self.a * x * x + x) / self.b

    def on_curve(self, *args) -> bool:
        # on_curve(point) or on_curve(x, y)
        if len(args) == 1:
            if args[0] is Infinity:
                return True
            x, y = args[0]
        else:
            x, y = args
        x, y = self.field.elem(x), self.field.elem(y)
        return self.b * y * y == x ** 3 + self.a * x * x + x

    def lift_x(self, x):
        """All affine points with the given x-coordinate, sorted by y."""
        x = self.field.elem(x)
        y2 = self.rhs(x)
        if y2.is_zero():
            return (AffinePoint(x, y2),)
        roots = y2.sqrt()
        if roots is None:
            return ()
        return tuple(AffinePoint(x, y) for y in roots)

    def naive_points(self) -> list:
        # Brute force over every (x, y). Only meant for toy curves.
        F = self.field
        points = [Infinity]
        for x in range(F.p):
            for y in range(F.p):
                pt = AffinePoint(F[x], F[y])
                if self.on_curve(pt):
                    points.append(pt)
        return points

    def neg(self, pt):
        if pt is Infinity:
            return Infinity
        return AffinePoint(pt.x, -pt.y)

    def point_add(self, pa, pb):
        if pa is Infinity:
            return pb
        if pb is Infinity:
            return pa

        xa, ya = pa
        xb, yb = pb
        if xa == xb and ya == -yb:
            return Infinity
        if xa == xb and ya == yb:
            return self.double_point(pa)

        l = (yb - ya) / (xb - xa)
        xc = self.b * l * l - self.a - xa - xb
        yc = (2 * xa + xb + self.a) * l - self.b * l ** 3 - ya
        return AffinePoint(xc, yc)

    def double_point(self, pa):
        if pa is Infinity:
            return Infinity
        x, y = pa
        if y.is_zero():
            # points of order two
            return Infinity

        l = (3 * x * x + 2 * self.a * x + self.field.one()) / (2 * self.b * y)
        xc = self.b * l * l - self.a - 2 * x
        yc = (3 * x + self.a) * l - self.b * l ** 3 - y
        return AffinePoint(xc, yc)

    def scale_naive(self, k: int, pa):
        # k-1 additions. Test-only.
        if k < 0:
            return self.scale_naive(-k, self.neg(pa))
        if k == 0:
            return Infinity
        point = pa
        for _ in range(k - 1):
            point = self.point_add(point, pa)
        return point

    def scale_double_add(self, k: int, pa):
        if k < 0:
            return self.scale_double_add(-k, self.neg(pa))
        if k == 0:
            return Infinity
        t = pa
        for bit in range(k.bit_length() - 2, -1, -1):
            t = self.double_point(t)
            if (k >> bit) & 1:
                t = self.point_add(t, pa)
        return t
