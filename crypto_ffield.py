# ------------------------------------------------------------------------------
# Prime Field Arithmetic
#   - Extended Euclidean algorithm, square-and-multiply, Fermat test
#   - Tonelli-Shanks square root
#     * https://en.wikipedia.org/wiki/Tonelli%E2%80%93Shanks_algorithm
# ------------------------------------------------------------------------------

# Usage:
#
#   F = FField(47)
#   a, b = F[5], F[8]
#   print(a + b, a * b, a / b, a ** 3)
#   print(F[5].sqrt())   # None (5 is not a square mod 47)
#   print(F[2].sqrt())   # (F47(7), F47(40))
#

import sys


class InvalidModulus(ValueError):
    pass

class NegativeExponent(ValueError):
    pass

class InverseOfZero(ZeroDivisionError):
    pass


# --- Integer helpers ----------------------------------------------------------

def mod_exp(b: int, e: int, m: int) -> int:
    """Square-and-multiply: b^e mod m."""
    if e < 0:
        raise NegativeExponent('negative exponent: %d' % e)
    prod = 1
    base = b % m
    while e:
        if e & 1:
            prod = (prod * base) % m
        e >>= 1
        base = (base * base) % m
    return prod % m

def extended_euclid(a: int, b: int):
    """Returns (g, x, y) such that a*x + b*y == g == gcd(a, b)."""
    s, t, u, v = 1, 0, 0, 1
    while b != 0:
        q, r = divmod(a, b)
        s, t, u, v = u, v, s - q * u, t - q * v
        a, b = b, r
    return a, s, t

def factor_two_adic(n: int):
    """Splits n > 0 as q * 2^s with q odd."""
    assert n > 0
    q, s = n, 0
    while q % 2 == 0:
        q //= 2
        s += 1
    return q, s

def _sieve(limit: int) -> list:
    marks = bytearray([1]) * (limit + 1)
    marks[0:2] = b'\x00\x00'
    for i in range(2, int(limit ** 0.5) + 1):
        if marks[i]:
            marks[i*i::i] = bytearray(len(marks[i*i::i]))
    return [i for i, m in enumerate(marks) if m]

# The first 200 primes (the 200th is 1223).
SMALL_PRIMES = frozenset(_sieve(1223))

def is_prime(n: int) -> bool:
    # Table lookup below 2^10, Fermat test with base 2 above.
    if n.bit_length() < 10:
        return n in SMALL_PRIMES
    return mod_exp(2, n - 1, n) == 1


# --- Field --------------------------------------------------------------------

class FField:
    def __init__(self, p: int):
        if not isinstance(p, int) or p < 3 or not is_prime(p):
            print('[-] FField: modulus is not an odd prime:', p, file=sys.stderr)
            raise InvalidModulus('field modulus must be an odd prime, got %r' % (p,))
        self.p = p
        self._non_residue = None

    def __getitem__(self, v):
        return self.elem(v)

    def __eq__(self, other):
        return isinstance(other, FField) and self.p == other.p

    def __hash__(self):
        return hash(('FField', self.p))

    def __repr__(self):
        return 'FField(%d)' % self.p

    def elem(self, v):
        if isinstance(v, FFieldValue):
            if v.field != self:
                raise TypeError('%r is not an element of %r' % (v, self))
            return v
        return FFieldValue(self, v)

    def zero(self):
        return FFieldValue(self, 0)

    def one(self):
        return FFieldValue(self, 1)

    # Integer level operations. Inputs may be ints or elements of this field,
    # results are ints in [0, p).

    def _int(self, v) -> int:
        if isinstance(v, FFieldValue):
            return self.elem(v).val
        if not isinstance(v, int):
            raise TypeError('expected int or element of %r, got %s' % \
                            (self, type(v).__name__))
        return v

    def add(self, a, b) -> int:
        nv = self._int(a) % self.p + self._int(b) % self.p
        if nv >= self.p:
            nv -= self.p
        return nv

    def sub(self, a, b) -> int:
        nv = self._int(a) % self.p - self._int(b) % self.p
        if nv < 0:
            nv += self.p
        return nv

    def mul(self, a, b) -> int:
        return (self._int(a) * self._int(b)) % self.p

    def inverse(self, v) -> int:
        v = self._int(v) % self.p
        if v == 0:
            raise InverseOfZero('0 has no inverse mod %d' % self.p)
        _, _, coeff = extended_euclid(self.p, v)
        return coeff % self.p

    def div(self, a, b) -> int:
        return self.mul(a, self.inverse(b))

    def pow(self, b, e: int) -> int:
        return mod_exp(self._int(b), e, self.p)

    def is_square(self, n) -> bool:
        # Euler's criterion. Zero is not counted as a residue.
        return self.pow(n, (self.p - 1) // 2) == 1

    def non_residue(self) -> int:
        # Least z with z^((p-1)/2) != 1.
        if self._non_residue is None:
            z = 2
            while self.is_square(z):
                z += 1
            self._non_residue = z
        return self._non_residue

    def sqrt(self, n):
        """
        Both square roots of n as a sorted pair of ints, or None when n is zero
        or not a quadratic residue.
        """
        n = self._int(n) % self.p
        if not self.is_square(n):
            return None
        p = self.p

        if p % 4 == 3:
            r = self.pow(n, (p + 1) // 4)
            return tuple(sorted((r, p - r)))

        # Tonelli-Shanks
        q, s = factor_two_adic(p - 1)
        c = self.pow(self.non_residue(), q)
        r = self.pow(n, (q + 1) // 2)
        t = self.pow(n, q)
        m = s
        while t != 1:
            # least i in (0, m) with t^(2^i) == 1
            i, t2 = 1, self.mul(t, t)
            while t2 != 1:
                t2 = self.mul(t2, t2)
                i += 1
            assert i < m
            b = self.pow(c, 1 << (m - i - 1))
            r = self.mul(r, b)
            c = self.mul(b, b)
            t = self.mul(t, c)
            m = i
        return tuple(sorted((r, p - r)))


class FFieldValue:
    __slots__ = ('field', 'val')

    def __init__(self, field: FField, v: int):
        if not isinstance(v, int):
            raise TypeError('field elements are built from int, got %s' % type(v).__name__)
        object.__setattr__(self, 'field', field)
        object.__setattr__(self, 'val', v % field.p)

    def __setattr__(self, name, value):
        raise AttributeError('FFieldValue is immutable')

    def _c(self, other):
        # Operands must come from the same field.
        if isinstance(other, FFieldValue) and other.field == self.field:
            return other
        raise TypeError('expected element of %r, got %r' % (self.field, other))

    def __add__(self, other):
        return FFieldValue(self.field, self.field.add(self.val, self._c(other).val))

    def __sub__(self, other):
        return FFieldValue(self.field, self.field.sub(self.val, self._c(other).val))

    def __mul__(self, other):
        return FFieldValue(self.field, self.field.mul(self.val, self._c(other).val))

    def __rmul__(self, n: int):
        if not isinstance(n, int):
            return NotImplemented
        return FFieldValue(self.field, self.field.mul(n, self.val))

    def __truediv__(self, other):
        return FFieldValue(self.field, self.field.div(self.val, self._c(other).val))

    def __pow__(self, e: int):
        return FFieldValue(self.field, self.field.pow(self.val, e))

    def __neg__(self):
        return FFieldValue(self.field, self.field.sub(0, self.val))

    def inv(self):
        return FFieldValue(self.field, self.field.inverse(self.val))

    def is_square(self) -> bool:
        return self.field.is_square(self.val)

    def sqrt(self):
        roots = self.field.sqrt(self.val)
        if roots is None:
            return None
        return tuple(FFieldValue(self.field, r) for r in roots)

    def is_zero(self) -> bool:
        return self.val == 0

    def __eq__(self, other):
        if isinstance(other, FFieldValue):
            return self.field == other.field and self.val == other.val
        if isinstance(other, int):
            # Only the canonical representative in [0, p).
            return self.val == other
        return NotImplemented

    def __hash__(self):
        return hash(self.val)

    def __int__(self):
        return self.val

    def __repr__(self):
        return 'F%d(%d)' % (self.field.p, self.val) if self.field.p < 1 << 32 \
            else 'FFieldValue(%s)' % hex(self.val)
