"""
Tests for dataset loading and splitting
"""

import pandas as pd
import pytest

from hoax_detector.data_io import DataLoader, records_to_frame
from hoax_detector.exceptions import DataError, DataFileNotFoundError
from hoax_detector.schema import Record

from conftest import CSV_COLUMNS, write_csv


class TestLoadData:
    """Tests for DataLoader.load_data"""

    def test_binds_columns_by_position(self, binary_csv):
        """Test only label, title and narrative are kept"""
        df = DataLoader(binary_csv).load_data()
        assert list(df.columns) == ["label", "title", "narrative"]
        assert len(df) == 100
        assert df["label"].dtype == float
        assert set(df["label"]) == {0.0, 1.0}

    def test_header_names_ignored(self, tmp_path):
        """Test columns are bound by position, not by header name"""
        rows = [[1, 1, "2020-01-01", "Judul", "Narasi", "a.jpg"]]
        path = tmp_path / "renamed.csv"
        pd.DataFrame(rows, columns=["a", "b", "c", "d", "e", "f"]).to_csv(path, index=False)
        df = DataLoader(path).load_data()
        assert df.loc[0, "title"] == "Judul"
        assert df.loc[0, "narrative"] == "Narasi"

    def test_missing_text_becomes_none(self, tmp_path):
        """Test empty title/narrative cells load as None"""
        path = write_csv(tmp_path / "gaps.csv", [
            {"ID": 1, "label": 1, "tanggal": "x", "judul": None, "narasi": "isi", "nama file gambar": ""},
            {"ID": 2, "label": 0, "tanggal": "x", "judul": "judul", "narasi": None, "nama file gambar": ""},
        ])
        df = DataLoader(path).load_data()
        assert df.loc[0, "title"] is None
        assert df.loc[1, "narrative"] is None
        assert df["title"].dtype == object

    def test_unparseable_labels_dropped(self, tmp_path):
        """Test rows with non-numeric labels are excluded"""
        path = write_csv(tmp_path / "bad.csv", [
            {"ID": 1, "label": "1", "tanggal": "x", "judul": "a", "narasi": "b", "nama file gambar": ""},
            {"ID": 2, "label": "hoax", "tanggal": "x", "judul": "a", "narasi": "b", "nama file gambar": ""},
            {"ID": 3, "label": "", "tanggal": "x", "judul": "a", "narasi": "b", "nama file gambar": ""},
            {"ID": 4, "label": "0", "tanggal": "x", "judul": "a", "narasi": "b", "nama file gambar": ""},
        ])
        df = DataLoader(path).load_data()
        assert df["label"].tolist() == [1.0, 0.0]

    def test_infinite_labels_dropped(self, tmp_path):
        """Test inf and -inf are not accepted as label codes"""
        path = write_csv(tmp_path / "inf.csv", [
            {"ID": 1, "label": "inf", "tanggal": "x", "judul": "a", "narasi": "b", "nama file gambar": ""},
            {"ID": 2, "label": "-inf", "tanggal": "x", "judul": "a", "narasi": "b", "nama file gambar": ""},
            {"ID": 3, "label": "1", "tanggal": "x", "judul": "a", "narasi": "b", "nama file gambar": ""},
        ])
        df = DataLoader(path).load_data()
        assert df["label"].tolist() == [1.0]

    def test_all_labels_unparseable(self, tmp_path):
        """Test a dataset without usable rows is a data error"""
        path = write_csv(tmp_path / "bad.csv", [
            {"ID": 1, "label": "hoax", "tanggal": "x", "judul": "a", "narasi": "b", "nama file gambar": ""},
        ])
        with pytest.raises(DataError):
            DataLoader(path).load_data()

    def test_header_only(self, tmp_path):
        """Test a file with only a header is a data error"""
        path = write_csv(tmp_path / "empty.csv", [])
        with pytest.raises(DataError):
            DataLoader(path).load_data()

    def test_zero_byte_file(self, tmp_path):
        """Test a zero-byte file is a data error"""
        path = tmp_path / "zero.csv"
        path.write_text("")
        with pytest.raises(DataError):
            DataLoader(path).load_data()

    def test_invalid_encoding(self, tmp_path):
        """Test bytes that are not UTF-8 are reported as an encoding problem"""
        path = tmp_path / "latin.csv"
        path.write_bytes(b"ID,label,tanggal,judul,narasi,gambar\n1,1,x,Caf\xe9,isi,c\n")
        with pytest.raises(DataError, match="not valid utf-8"):
            DataLoader(path).load_data()

    def test_missing_file(self, tmp_path):
        """Test a missing file raises DataFileNotFoundError"""
        with pytest.raises(DataFileNotFoundError) as excinfo:
            DataLoader(tmp_path / "nope.csv").load_data()
        assert isinstance(excinfo.value, FileNotFoundError)


class TestCreateSplits:
    """Tests for DataLoader.create_splits"""

    def test_fractions(self, binary_csv):
        """Test 80/20 split of 100 rows"""
        loader = DataLoader(binary_csv)
        train_df, test_df = loader.create_splits(loader.load_data(), test_fraction=0.2, seed=0)
        assert len(train_df) == 80
        assert len(test_df) == 20
        assert set(train_df.index).isdisjoint(test_df.index)

    def test_deterministic(self, binary_csv):
        """Test the same seed yields the same partition"""
        loader = DataLoader(binary_csv)
        df = loader.load_data()
        first = loader.create_splits(df, seed=0)
        second = loader.create_splits(df, seed=0)
        assert first[0].index.tolist() == second[0].index.tolist()
        assert first[1].index.tolist() == second[1].index.tolist()

    def test_too_small(self, binary_csv):
        """Test a single row cannot be split"""
        loader = DataLoader(binary_csv)
        with pytest.raises(DataError):
            loader.create_splits(loader.load_data().head(1))


class TestRecordsToFrame:
    """Tests for records_to_frame"""

    def test_shape(self):
        """Test records convert to loader-shaped frame"""
        df = records_to_frame([Record(1.0, "a", "b"), Record(title="c")])
        assert list(df.columns) == ["label", "title", "narrative"]
        assert len(df) == 2
        assert df.loc[1, "title"] == "c"
