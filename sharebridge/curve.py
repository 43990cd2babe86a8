"""
Affine arithmetic on secp256k1 for the share bridge.

    1. Point validity and negation
    2. EC point addition and summation
    3. EC scalar multiplication (double and add)
    4. Scalar inverse mod order and mod field size

Domain parameters come from the ecdsa package so the hand written
arithmetic below always agrees with the reference implementation.

Point addition follows:
https://en.wikipedia.org/wiki/Elliptic_curve_point_multiplication#Point_addition
"""

from collections import namedtuple

from ecdsa import SECP256k1

# The point at infinity. generator * order = O
O = 'Origin'

# SECP256K1 domain params
p = int(SECP256k1.curve.p())
a = int(SECP256k1.curve.a())
b = int(SECP256k1.curve.b())
order = int(SECP256k1.order)
# byte width of a serialized scalar / x coordinate
SCALAR_BYTES = SECP256k1.baselen


class Point(namedtuple("Point", "x y")):
    __slots__ = ()

    def __repr__(self):
        """Uncompressed"""
        return f"04{self.x:0>64x}{self.y:0>64x}"

    def __eq__(self, other):
        if isinstance(other, str):
            return False
        return tuple.__eq__(self, other)

    def __ne__(self, other):
        return not self == other

    __hash__ = tuple.__hash__


generator = Point(int(SECP256k1.generator.x()), int(SECP256k1.generator.y()))


def valid(P):
    """
    wiestrass curve: y^2 = x^3 + ax + b
    Coordinates are always kept reduced modulo p, so two points
    compare equal with a plain ==.
    """
    if P == O:
        return True
    return (
        isinstance(P, Point) and
        0 <= P.x < p and 0 <= P.y < p and
        (P.y**2 - (P.x**3 + a*P.x + b)) % p == 0)


def scalar_inv_mod_p(x):
    if x % p == 0:
        raise ZeroDivisionError("Impossible inverse")
    return pow(x, -1, p)


def scalar_inv_mod_order(x):
    if x % order == 0:
        raise ZeroDivisionError("Impossible inverse")
    return pow(x, -1, order)


def ec_inv(P):
    if P == O:
        return P
    return Point(P.x, (-P.y) % p)


def ec_add(P, Q):
    """
    Sum of the points P and Q on the elliptic curve y^2 = x^3 + ax + b.
    """
    if not (valid(P) and valid(Q)):
        raise ValueError("Invalid inputs")

    if P == O:
        return Q
    if Q == O:
        return P
    # P + (-P) would divide by zero below
    if Q == ec_inv(P):
        return O

    if P == Q:
        lambdA = (3 * P.x**2 + a) * scalar_inv_mod_p(2 * P.y)
    else:
        lambdA = (Q.y - P.y) * scalar_inv_mod_p(Q.x - P.x)
    x = (lambdA**2 - P.x - Q.x) % p
    y = (lambdA * (P.x - x) - P.y) % p
    return Point(x, y)


def ec_scalar_mul(P, scalar):
    scalar %= order
    if not valid(P):
        raise ValueError("Invalid input point")
    cache = P
    ret = O
    # keep on doubling and only add for binary 1.
    while scalar:
        if scalar & 1:
            ret = ec_add(ret, cache)
        cache = ec_add(cache, cache)
        scalar >>= 1
    return ret


def ec_sum(points):
    total = O
    for P in points:
        total = ec_add(total, P)
    return total


def pub_key_from_priv(private):
    return ec_scalar_mul(generator, private)


def compressed_hex(point) -> str:
    """SEC1 compressed form, lowercase. The identity encodes as a single 00 byte."""
    if point == O:
        return "00"
    prefix = "02" if point.y % 2 == 0 else "03"
    return f"{prefix}{point.x:0>64x}"
