"""Convierte un DXF en la página vectorial intermedia y muestra un resumen.

Run:
    python -m scripts.convert_dxf plano.dxf --scale 0.5 --json salida.json
"""

from __future__ import annotations

import argparse
import json
from collections import Counter
from pathlib import Path

from dxfpage.modules.conversion import ConverterOptions
from dxfpage.services.conversion_service import (
    convert_dxf_file,
    directory_resolver,
    page_payload,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("dxf", type=Path, help="Archivo DXF de entrada")
    parser.add_argument("--scale", type=float, default=1.0, help="Escala del usuario (1 unidad = 72 pt)")
    parser.add_argument("--width", type=float, default=None, help="Ancho de página en puntos")
    parser.add_argument("--height", type=float, default=None, help="Alto de página en puntos")
    parser.add_argument("--json", type=Path, default=None, help="Guardar la página serializada")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    overrides = {key: value for key, value in (("page_width", args.width), ("page_height", args.height)) if value}
    options = ConverterOptions(
        scale=args.scale,
        content_resolver=directory_resolver(args.dxf.parent),
        **overrides,
    )
    result = convert_dxf_file(args.dxf, options)
    kinds = Counter(type(item).__name__ for item in result.page.iter_drawables())
    print(f"Página {result.page.width:.1f} x {result.page.height:.1f} pt")
    print(f"Entidades: {result.entity_count}  Elementos: {result.item_count}")
    for kind, count in sorted(kinds.items()):
        print(f"  {kind:<18} {count}")

    if args.json:
        args.json.write_text(json.dumps(page_payload(result), indent=2), encoding="utf-8")
        print(f"Página guardada en: {args.json}")


if __name__ == "__main__":
    main()
