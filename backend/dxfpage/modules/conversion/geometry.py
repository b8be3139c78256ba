from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

DEFAULT_TOLERANCE = 1e-10
DEGREES_TO_RADIANS = math.pi / 180.0

Matrix = Tuple[float, float, float, float, float, float]


def is_close_to(value: float, target: float, tol: float = DEFAULT_TOLERANCE) -> bool:
    return abs(value - target) <= tol


@dataclass(frozen=True, slots=True)
class Vector:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: "Vector") -> "Vector":
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector") -> "Vector":
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, factor: float) -> "Vector":
        return Vector(self.x * factor, self.y * factor, self.z * factor)

    __rmul__ = __mul__

    def __truediv__(self, factor: float) -> "Vector":
        return Vector(self.x / factor, self.y / factor, self.z / factor)

    def __neg__(self) -> "Vector":
        return Vector(-self.x, -self.y, -self.z)

    @property
    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    @property
    def angle(self) -> float:
        """Ángulo en radianes del vector proyectado sobre el plano XY."""
        return math.atan2(self.y, self.x)

    def dot(self, other: "Vector") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def normalize(self) -> "Vector":
        length = self.length
        if length == 0.0:
            return self
        return self / length

    def perpendicular(self) -> "Vector":
        """Normal a la izquierda en el plano XY."""
        return Vector(-self.y, self.x, 0.0)

    def midpoint(self, other: "Vector") -> "Vector":
        return Vector((self.x + other.x) / 2.0, (self.y + other.y) / 2.0, (self.z + other.z) / 2.0)

    def is_close_to(self, other: "Vector", tol: float = 1e-9) -> bool:
        return (
            is_close_to(self.x, other.x, tol)
            and is_close_to(self.y, other.y, tol)
            and is_close_to(self.z, other.z, tol)
        )


@dataclass(frozen=True, slots=True)
class AffineTransform:
    """Transformación afín en el plano XY con escala independiente en Z.

    La matriz se guarda como ``(a, b, c, d, e, f)``::

        x' = a*x + c*y + e
        y' = b*x + d*y + f

    La composición ``t1 @ t2`` aplica primero ``t2`` y luego ``t1``.
    """

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0
    z_scale: float = 1.0

    @classmethod
    def identity(cls) -> "AffineTransform":
        return cls()

    @classmethod
    def translation(cls, dx: float, dy: float) -> "AffineTransform":
        return cls(e=dx, f=dy)

    @classmethod
    def scaling(cls, sx: float, sy: float, sz: float = 1.0) -> "AffineTransform":
        return cls(a=sx, d=sy, z_scale=sz)

    @classmethod
    def rotation_z(cls, degrees: float) -> "AffineTransform":
        radians = degrees * DEGREES_TO_RADIANS
        cos = math.cos(radians)
        sin = math.sin(radians)
        return cls(a=cos, b=sin, c=-sin, d=cos)

    def __matmul__(self, other: "AffineTransform") -> "AffineTransform":
        return AffineTransform(
            a=self.a * other.a + self.c * other.b,
            b=self.b * other.a + self.d * other.b,
            c=self.a * other.c + self.c * other.d,
            d=self.b * other.c + self.d * other.d,
            e=self.a * other.e + self.c * other.f + self.e,
            f=self.b * other.e + self.d * other.f + self.f,
            z_scale=self.z_scale * other.z_scale,
        )

    def transform(self, point: Vector) -> Vector:
        return Vector(
            self.a * point.x + self.c * point.y + self.e,
            self.b * point.x + self.d * point.y + self.f,
            point.z * self.z_scale,
        )

    def transform_scale(self, magnitude: Vector) -> Vector:
        """Transforma longitudes relativas (radios, alturas) sin traslación."""
        return Vector(
            self.a * magnitude.x + self.c * magnitude.y,
            self.b * magnitude.x + self.d * magnitude.y,
            magnitude.z * self.z_scale,
        )

    def as_matrix(self) -> Matrix:
        return (self.a, self.b, self.c, self.d, self.e, self.f)


__all__ = [
    "AffineTransform",
    "DEFAULT_TOLERANCE",
    "DEGREES_TO_RADIANS",
    "Matrix",
    "Vector",
    "is_close_to",
]
