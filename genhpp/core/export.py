"""
CSV export of a single HPP calculation.

Layout (Indonesian labels):
    report title
    component costs
    material lines with per-line totals
    total material cost
    final summary
"""

import csv
import io
from typing import Any, Iterable, Mapping
from urllib.parse import quote

from genhpp.core.hpp import total_material_cost


def export_filename(product_name: str) -> str:
    return f"HPP_{product_name.replace(' ', '_')}.csv"


def content_disposition(product_name: str) -> str:
    """
    Attachment header for the export.

    Header values go out as latin-1, so the plain ``filename`` is an ASCII
    fallback (non-ASCII, quotes and backslashes become ``_``) and the real
    name travels percent-encoded in ``filename*``.
    """
    filename = export_filename(product_name)
    fallback = "".join(
        "_" if ord(ch) > 126 or ord(ch) < 32 or ch in '"\\' else ch for ch in filename
    )
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


def calculation_to_csv(
    product_name: str,
    materials: Iterable[Mapping[str, Any]],
    labor_cost: float,
    overhead: float,
    packaging: float,
    total_hpp: float,
    margin: float,
    suggested_price: float,
) -> str:
    """Render a calculation as CSV text."""
    materials = list(materials)
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")

    writer.writerow([f"Laporan Perhitungan HPP untuk {product_name}"])
    writer.writerow([])
    writer.writerow(["Komponen", "Biaya"])
    writer.writerow(["Biaya Tenaga Kerja", labor_cost])
    writer.writerow(["Biaya Overhead", overhead])
    writer.writerow(["Biaya Kemasan", packaging])
    writer.writerow([])
    writer.writerow(["Rincian Bahan Baku"])
    writer.writerow(["Nama Bahan", "Biaya Satuan", "Jumlah", "Total Biaya Bahan"])
    for m in materials:
        writer.writerow([m["name"], m["cost"], m["qty"], float(m["cost"]) * float(m["qty"])])
    writer.writerow(["Total Biaya Bahan Baku", "", "", total_material_cost(materials)])
    writer.writerow([])
    writer.writerow(["Ringkasan Final"])
    writer.writerow(["Total HPP", total_hpp])
    writer.writerow(["Margin Profit (%)", margin])
    writer.writerow(["Saran Harga Jual", suggested_price])
    return buffer.getvalue()
