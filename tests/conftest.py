"""
Shared fixtures: small synthetic news CSVs in the training file layout
"""

from pathlib import Path

import pandas as pd
import pytest

CSV_COLUMNS = ["ID", "label", "tanggal", "judul", "narasi", "nama file gambar"]

HOAX_TEXTS = [
    ("Vaksin mengandung chip", "Beredar pesan berantai bahwa vaksin berisi chip pelacak rahasia."),
    ("Air garam sembuhkan virus", "Klaim tanpa bukti menyebut air garam hangat membunuh virus."),
    ("Konspirasi sinyal 5G", "Pesan viral mengklaim sinyal 5G menyebarkan penyakit misterius."),
    ("Uang gratis dari bank", "Tautan palsu menjanjikan hadiah uang tunai tanpa syarat."),
]

FACT_TEXTS = [
    ("Pemerintah umumkan anggaran", "Kementerian keuangan merilis laporan anggaran resmi tahun ini."),
    ("Jadwal kereta diperbarui", "Operator kereta mengumumkan jadwal baru sesuai keputusan resmi."),
    ("Hasil rapat dewan kota", "Dewan kota menyetujui rencana perbaikan jalan dan drainase."),
    ("Data inflasi terbaru", "Badan statistik menerbitkan data inflasi bulanan secara resmi."),
]

SATIRE_TEXTS = [
    ("Kucing jadi walikota", "Dalam tulisan satir, seekor kucing terpilih memimpin kota lucu."),
    ("Macet dijadikan wisata", "Parodi menyebut kemacetan kini paket wisata berbayar lucu."),
    ("Rapat tanpa akhir", "Kolom humor tentang rapat yang berlangsung selama sepuluh tahun lucu."),
]


def make_rows(groups):
    """groups: list of (label, texts, count)"""
    rows = []
    for label, texts, count in groups:
        for i in range(count):
            title, narrative = texts[i % len(texts)]
            rows.append({
                "label": label,
                "judul": f"{title} {i}",
                "narasi": narrative,
            })
    for idx, row in enumerate(rows):
        row["ID"] = idx + 1
        row["tanggal"] = "17-08-2020"
        row["nama file gambar"] = f"{idx + 1}.jpg"
    return rows


def write_csv(path: Path, rows) -> Path:
    pd.DataFrame(rows, columns=CSV_COLUMNS).to_csv(path, index=False)
    return path


@pytest.fixture
def binary_csv(tmp_path):
    """100 rows with labels {0, 1}"""
    rows = make_rows([(1, HOAX_TEXTS, 50), (0, FACT_TEXTS, 50)])
    return write_csv(tmp_path / "binary.csv", rows)


@pytest.fixture
def multiclass_csv(tmp_path):
    """90 rows with three numeric category codes"""
    rows = make_rows([(0, FACT_TEXTS, 30), (1, HOAX_TEXTS, 30), (2, SATIRE_TEXTS, 30)])
    return write_csv(tmp_path / "multiclass.csv", rows)


@pytest.fixture
def single_label_csv(tmp_path):
    """20 rows all carrying the same label"""
    rows = make_rows([(1, HOAX_TEXTS, 20)])
    return write_csv(tmp_path / "single.csv", rows)


@pytest.fixture
def binary_frame(binary_csv):
    from hoax_detector.data_io import DataLoader
    return DataLoader(binary_csv).load_data()


@pytest.fixture
def multiclass_frame(multiclass_csv):
    from hoax_detector.data_io import DataLoader
    return DataLoader(multiclass_csv).load_data()
