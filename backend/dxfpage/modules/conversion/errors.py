from __future__ import annotations


class ConversionError(RuntimeError):
    """Error base del motor de conversión DXF -> página."""


class InvalidUnitEnumerationError(ConversionError):
    """El encabezado trae unidades o formato de unidades fuera del rango conocido."""

    def __init__(self, field: str, value: object) -> None:
        super().__init__(f"Valor no reconocido para {field}: {value!r}")
        self.field = field
        self.value = value


class DxfLoadError(ConversionError):
    """No fue posible leer el archivo DXF de entrada."""


__all__ = ["ConversionError", "DxfLoadError", "InvalidUnitEnumerationError"]
