"""
Oblique spherical triangle solutions.

Given two sides ``b, c`` and the angle ``C`` opposite ``c``, solve for the
remaining side ``a`` and angles ``A, B``::

        .
        |.
        | .
     b  |A .
        |   . c
        | C  .
        |  . a
        .

Inputs outside a valid triangle are not checked and may produce NaN.
"""

import math

import numpy as np

from .models import SphericalTriangle


def asin_clamp(value: float) -> float:
    """Inverse sine with the argument clamped to [-1, 1]."""
    if value > 1.0:
        value = 1.0
    elif value < -1.0:
        value = -1.0
    return math.asin(value)


def acot(value: float) -> float:
    """Inverse cotangent in (-pi/2, pi/2], taking cot = 0 to pi/2."""
    if value == 0.0:
        return math.pi / 2
    return math.atan(1.0 / value)


def solve_bcC(b: float, c: float, C: float) -> SphericalTriangle:
    """Solve an oblique spherical triangle from ``b, c, C``.

    When ``b > c`` and ``C`` is acute there are two candidate values of ``B``;
    the one giving a positive ``A`` wins, otherwise its supplement is used.

    Args:
        b: Side adjacent to ``C``
        c: Side opposite ``C``
        C: Angle between ``a`` and ``b``

    Returns:
        Fully populated triangle
    """
    st = SphericalTriangle(b=b, c=c, C=C)

    if b > c and C < math.pi / 2:
        B = asin_clamp(math.sin(C) * math.sin(b) / math.sin(c))
        B2 = math.pi - B
        ratio = math.sin((c + b) / 2.0) / math.sin((c - b) / 2.0)

        # Napier: cot(A/2) = tan((C - B)/2) sin((c + b)/2) / sin((c - b)/2)
        A = acot(math.tan((C - B) / 2.0) * ratio) * 2.0
        A2 = acot(math.tan((C - B2) / 2.0) * ratio) * 2.0

        if A < 0:
            A = A2
            B = B2

        st.A = A
        st.B = B
        st.a = asin_clamp(math.sin(A) * math.sin(b) / math.sin(B))
    else:
        B = asin_clamp(math.sin(b) * math.sin(C) / math.sin(c))
        # Napier's analogies
        a = 2.0 * math.atan(
            math.tan((b + c) / 2.0) * math.cos((B + C) / 2.0) / math.cos((B - C) / 2.0)
        )
        st.B = B
        st.a = a
        cos_A = (math.cos(a) - math.cos(b) * math.cos(c)) / (math.sin(b) * math.sin(c))
        with np.errstate(invalid='ignore'):
            st.A = float(np.arccos(cos_A))

    return st
