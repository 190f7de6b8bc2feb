"""
Test suite for the CSV export.
"""

import csv
import io

from genhpp.core.export import calculation_to_csv, content_disposition, export_filename


MATERIALS = [
    {"name": "Tepung, protein tinggi", "cost": 14000, "qty": 2},
    {"name": "Ragi", "cost": 5000, "qty": 1},
]


def _rows():
    text = calculation_to_csv(
        product_name="Roti Tawar",
        materials=MATERIALS,
        labor_cost=25000,
        overhead=5000,
        packaging=2000,
        total_hpp=65000,
        margin=40,
        suggested_price=91000,
    )
    return list(csv.reader(io.StringIO(text)))


def test_export_filename():
    assert export_filename("Roti Tawar Gandum") == "HPP_Roti_Tawar_Gandum.csv"


def test_content_disposition_ascii_name():
    assert content_disposition("Roti Tawar") == (
        "attachment; filename=\"HPP_Roti_Tawar.csv\"; filename*=UTF-8''HPP_Roti_Tawar.csv"
    )


def test_content_disposition_non_latin1_name():
    """Test emoji names fall back to underscores and travel in filename*."""
    header = content_disposition("Kopi Susu ☕")
    header.encode("latin-1")
    assert 'filename="HPP_Kopi_Susu__.csv"' in header
    assert "filename*=UTF-8''HPP_Kopi_Susu_%E2%98%95.csv" in header


def test_content_disposition_strips_quotes():
    header = content_disposition('Roti "Spesial"')
    assert header.count('"') == 2
    assert 'filename="HPP_Roti__Spesial_.csv"' in header
    assert "filename*=UTF-8''HPP_Roti_%22Spesial%22.csv" in header


def test_sections_in_order():
    rows = _rows()
    assert rows[0] == ["Laporan Perhitungan HPP untuk Roti Tawar"]
    assert rows[1] == []
    assert rows[2] == ["Komponen", "Biaya"]
    assert rows[3] == ["Biaya Tenaga Kerja", "25000"]
    assert rows[4] == ["Biaya Overhead", "5000"]
    assert rows[5] == ["Biaya Kemasan", "2000"]
    assert rows[7] == ["Rincian Bahan Baku"]
    assert rows[8] == ["Nama Bahan", "Biaya Satuan", "Jumlah", "Total Biaya Bahan"]


def test_material_lines_and_total():
    """Test commas inside names are quoted and line totals are cost * qty."""
    rows = _rows()
    assert rows[9] == ["Tepung, protein tinggi", "14000", "2", "28000.0"]
    assert rows[10] == ["Ragi", "5000", "1", "5000.0"]
    assert rows[11] == ["Total Biaya Bahan Baku", "", "", "33000.0"]


def test_final_summary():
    rows = _rows()
    assert rows[-4] == ["Ringkasan Final"]
    assert rows[-3] == ["Total HPP", "65000"]
    assert rows[-2] == ["Margin Profit (%)", "40"]
    assert rows[-1] == ["Saran Harga Jual", "91000"]
