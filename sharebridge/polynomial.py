"""
Shamir polynomials over the scalar field.

A t-of-n sharing of a secret s is a random polynomial of degree t - 1
    f(x) = s + a_1 x + ... + a_{t-1} x^{t-1}   (mod order)
and party i (0-based) holds f(i + 1).
"""

from typing import List

from .curve import O, ec_add, ec_scalar_mul, pub_key_from_priv
from .curve import order as ORDER
from .lagrange import evaluation_point
from .rand import field_sample


class Polynomial:
    def __init__(self, coef: List[int], order: int = ORDER):
        if not coef:
            raise ValueError("A polynomial needs at least its constant term")
        self.order = order
        # coef[0] is the secret, coef[k] multiplies x^k
        self.coef = [c % order for c in coef]

    @classmethod
    def random(cls, secret: int, threshold: int, order: int = ORDER) -> "Polynomial":
        degree = max(threshold, 1) - 1
        return cls([secret] + [field_sample(order) for _ in range(degree)], order)

    @property
    def secret(self) -> int:
        return self.coef[0]

    @property
    def degree(self) -> int:
        return len(self.coef) - 1

    def evaluate(self, x: int) -> int:
        # Horner: for y = ax^2 + bx + c with coef = [c, b, a]
        #   y = a
        #   y = a*x + b
        #   y = (a*x + b)*x + c
        y = self.coef[-1]
        for c in reversed(self.coef[:-1]):
            y = (y * x + c) % self.order
        return y

    def shares(self, n: int) -> List[int]:
        return [self.evaluate(evaluation_point(i)) for i in range(n)]

    def commitments(self):
        """VSS commitments C_k = a_k * G. Only meaningful over the curve order."""
        return [pub_key_from_priv(c) for c in self.coef]

    def __repr__(self):
        return f"Polynomial(degree={self.degree}, order={self.order:#x})"


def generate_shares(secret: int, t: int, n: int, order: int = ORDER) -> List[int]:
    """
    Split secret into n evaluations of a fresh degree max(t,1)-1 polynomial.
    t == 0 degrades to the constant polynomial: every share equals the secret.
    """
    return Polynomial.random(secret, t, order).shares(n)


def vss_point(commitments, index: int):
    """
    sum_k C_k * (index+1)^k, the public share a commitment set implies for party index.
    Section 2.8 in https://eprint.iacr.org/2020/540.pdf
    """
    x = evaluation_point(index)
    final_point = O
    power = 1
    for c in commitments:
        final_point = ec_add(final_point, ec_scalar_mul(c, power))
        power = power * x % ORDER
    return final_point
