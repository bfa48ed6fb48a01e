"""
Tests for the check_hbl_import command line script.
"""

import pytest

import check_hbl_import


@pytest.mark.integration
class TestCheckHblImport:

    def test_valid_file(self, tmp_path, capsys, make_workbook_bytes, hbl_sheet_rows):
        path = tmp_path / "hbl.xlsx"
        path.write_bytes(make_workbook_bytes({"Sheet1": hbl_sheet_rows}))
        assert check_hbl_import.main([str(path)]) == 0
        assert "OK: 3 rows in sheet 'Sheet1'" in capsys.readouterr().out

    def test_invalid_rows(self, tmp_path, capsys, make_workbook_bytes, hbl_sheet_rows):
        sheet = list(hbl_sheet_rows)
        sheet[8] = ["HLBU2941860", None] + sheet[8][2:]
        path = tmp_path / "hbl.xlsx"
        path.write_bytes(make_workbook_bytes({"Sheet1": sheet}))
        assert check_hbl_import.main([str(path)]) == 1
        out = capsys.readouterr().out
        assert "B9: House bill is required" in out
        assert "1 error(s)" in out

    def test_wrong_extension(self, tmp_path, capsys):
        path = tmp_path / "hbl.csv"
        path.write_text("a,b\n")
        assert check_hbl_import.main([str(path)]) == 2
        assert "Invalid file format" in capsys.readouterr().out

    def test_missing_sheet(self, tmp_path, capsys, make_workbook_bytes, hbl_sheet_rows):
        path = tmp_path / "hbl.xlsx"
        path.write_bytes(make_workbook_bytes({"Sheet1": hbl_sheet_rows}))
        assert check_hbl_import.main([str(path), "--sheet", "Other"]) == 2
        assert "Sheet not found: Other" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys):
        assert check_hbl_import.main([str(tmp_path / "nope.xlsx")]) == 2
