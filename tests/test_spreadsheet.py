import io

import pandas as pd
import pytest

from core.errors import UnsupportedFileType
from core.spreadsheet import file_extension, read_rows


def _xlsx_bytes(df: pd.DataFrame) -> bytes:
    buf = io.BytesIO()
    df.to_excel(buf, index=False)
    return buf.getvalue()


class TestReadRows:
    def test_csv_rows_keep_header_order(self):
        rows = read_rows("stock.csv", b"name,quantity,price\nBear,3,9.99\nFox,1,4.50\n")

        assert rows == [
            {"name": "Bear", "quantity": "3", "price": "9.99"},
            {"name": "Fox", "quantity": "1", "price": "4.50"},
        ]
        assert list(rows[0].keys()) == ["name", "quantity", "price"]

    def test_csv_blank_cells_are_empty_strings(self):
        rows = read_rows("stock.csv", b"name,quantity,price\nBear,,9.99\n")
        assert rows == [{"name": "Bear", "quantity": "", "price": "9.99"}]

    def test_empty_csv(self):
        assert read_rows("stock.csv", b"") == []

    def test_xlsx_first_sheet(self):
        df = pd.DataFrame({"Name": ["Owl", "Hare"], "Qty": [2, None], "Price": [3.5, 1]})
        rows = read_rows("stock.xlsx", _xlsx_bytes(df))

        assert len(rows) == 2
        assert rows[0]["Name"] == "Owl"
        assert rows[1]["Qty"] == ""

    def test_extension_is_case_insensitive(self):
        assert file_extension("STOCK.XLSX") == "xlsx"
        assert read_rows("STOCK.CSV", b"name\nBee\n") == [{"name": "Bee"}]

    @pytest.mark.parametrize("filename", ["stock.txt", "stock.json", "stock", ""])
    def test_unsupported_extension(self, filename):
        with pytest.raises(UnsupportedFileType):
            read_rows(filename, b"name\nBee\n")
