"""
Tests for spreadsheet decoding and the monthly record parser.
"""
import datetime as dt

import pytest

from academy_analytics.data.errors import DecodeError, IngestError, NoDataFound
from academy_analytics.data.normalize import month_from_name, split_year_month, to_number
from academy_analytics.data.parser import (
    RowAction, classify_row, find_header, parse_sheet, parse_sheets, parse_workbook,
)
from academy_analytics.data.schemas import ColumnMap, Field

from conftest import HEADER, data_row, make_workbook


class TestCellNormalization:
    def test_full_month_names_any_case(self):
        assert month_from_name("January") == "Jan"
        assert month_from_name("SEPTEMBER") == "Sep"

    def test_abbreviation_fallback_capitalizes_first_three(self):
        assert month_from_name("mar") == "Mar"
        assert month_from_name("Sept.") == "Sep"

    def test_numeric_month_cell(self):
        assert month_from_name(4) == "Apr"
        assert month_from_name(13) is None

    def test_combined_key(self):
        assert split_year_month("2024-03") == ("2024", "Mar")
        assert split_year_month("2024-13") == ("2024", None)
        assert split_year_month("March 2024") == (None, None)

    def test_date_cell_in_combined_column(self):
        assert split_year_month(dt.datetime(2022, 11, 1)) == ("2022", "Nov")

    def test_currency_text(self):
        assert to_number("₹1,25,000") == 125000.0
        assert to_number(" $2,500.50 ") == 2500.5
        assert to_number("n/a") is None
        assert to_number(None) is None


class TestHeaderDetection:
    def test_header_found_below_title_rows(self, sample_rows):
        assert find_header(sample_rows) == 2

    def test_header_beyond_scan_window_is_ignored(self):
        rows = [["filler"]] * 12 + [HEADER, data_row(2023, "Jan", 10)]
        assert find_header(rows) is None
        assert parse_sheet(rows) == []

    def test_header_cells_are_trimmed(self):
        rows = [["Year", "Month", "  Total Students  "], [2023, "Jan", 5]]
        assert find_header(rows) == 0
        assert len(parse_sheet(rows)) == 1

    def test_column_map_uses_exact_labels(self):
        columns = ColumnMap.from_header(["Year", "Month", "Total Students", "total paid", "Total Paid (₹)"])
        assert columns.has("total_students")
        assert columns.indices["total_paid"] == 4
        assert not columns.has("year_month")
        assert not columns.has("male")


class TestRowClassification:
    @pytest.fixture
    def columns(self):
        return ColumnMap.from_header(HEADER)

    @pytest.mark.parametrize("first", ["TOTAL", " total ", "Annual Summary", "ANNUAL", "", None, "NaN"])
    def test_stop_markers(self, columns, first):
        assert classify_row([first, "Jan", 10], columns).action == RowAction.STOP

    def test_repeated_header_is_skipped(self, columns):
        assert classify_row(HEADER, columns).action == RowAction.SKIP

    def test_zero_students_rejected(self, columns):
        result = classify_row(data_row(2023, "Jan", 0), columns)
        assert result.action == RowAction.REJECT

    def test_zero_students_as_text_rejected(self, columns):
        row = data_row(2023, "Jan", 10)
        row[2] = "0"
        assert classify_row(row, columns).action == RowAction.REJECT

    def test_bad_year_rejected(self, columns):
        assert classify_row(data_row("23", "Jan", 10), columns).action == RowAction.REJECT

    def test_unknown_month_rejected(self, columns):
        assert classify_row(data_row(2023, "Smarch", 10), columns).action == RowAction.REJECT

    def test_missing_optional_numbers_default_to_zero(self, columns):
        row = [2023, "Jan", 12, None, "abc", -3]
        result = classify_row(row, columns)
        assert result.action == RowAction.ACCEPT
        r = result.record
        assert (r.male, r.female, r.interested, r.total_paid) == (0, 0, 0, 0.0)

    def test_float_year_cell(self, columns):
        result = classify_row(data_row(2023.0, "Feb", 10), columns)
        assert result.record.year == "2023"
        assert result.record.year_month == "2023-Feb"


class TestParseSheets:
    def test_scenario_header_rows_and_total_block(self, sample_rows):
        ts = parse_sheets([("Monthly", sample_rows)])
        assert len(ts) == 3
        assert ts.keys() == ["2023-Jan", "2023-Feb", "2023-Mar"]
        assert 999 not in ts.values(Field.TOTAL_STUDENTS)
        assert ts.source == "Monthly"

    def test_stray_header_row_does_not_stop_scan(self):
        rows = [HEADER, data_row(2023, "Jan", 10), ["Year", "Month", "Total Students"], data_row(2023, "Feb", 11)]
        ts = parse_sheets([("S", rows)])
        assert ts.keys() == ["2023-Jan", "2023-Feb"]

    def test_rows_after_blank_row_are_ignored(self):
        rows = [HEADER, data_row(2023, "Jan", 10), [None, None, None], data_row(2023, "Feb", 11)]
        assert parse_sheets([("S", rows)]).keys() == ["2023-Jan"]

    def test_invalid_rows_dropped_without_stopping(self):
        rows = [HEADER, data_row(2023, "Jan", 0), data_row(2023, "Feb", 11), data_row(2023, "Mar", 12)]
        assert parse_sheets([("S", rows)]).keys() == ["2023-Feb", "2023-Mar"]

    def test_first_matching_sheet_wins(self):
        no_header = [["Notes"], ["nothing to see here"]]
        second = [HEADER] + [data_row(2023, m, 10 + i) for i, m in enumerate(["Jan", "Feb", "Mar", "Apr", "May"])]
        third = [HEADER] + [data_row(2024, m, 50) for m in ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul"]]

        consumed = []

        def sheets():
            for sheet in [("Intro", no_header), ("2023", second), ("2024", third)]:
                consumed.append(sheet[0])
                yield sheet

        ts = parse_sheets(sheets())
        assert len(ts) == 5
        assert ts.source == "2023"
        assert consumed == ["Intro", "2023"]

    def test_sheet_with_header_but_no_valid_rows_is_passed_over(self):
        empty = [HEADER, data_row(2023, "Jan", 0)]
        good = [HEADER, data_row(2023, "Jan", 4)]
        assert parse_sheets([("A", empty), ("B", good)]).source == "B"

    def test_chronological_sort_uses_month_order(self):
        rows = [HEADER] + [data_row(y, m, 10) for y, m in [
            (2024, "Feb"), (2023, "Dec"), (2024, "Jan"), (2023, "Apr"), (2023, "Aug"),
        ]]
        ts = parse_sheets([("S", rows)])
        assert ts.keys() == ["2023-Apr", "2023-Aug", "2023-Dec", "2024-Jan", "2024-Feb"]
        assert [r.sort_key for r in ts] == sorted(r.sort_key for r in ts)

    def test_duplicate_months_are_kept_in_source_order(self):
        rows = [HEADER, data_row(2023, "Jan", 10), data_row(2023, "Jan", 15)]
        ts = parse_sheets([("S", rows)])
        assert ts.keys() == ["2023-Jan", "2023-Jan"]
        assert list(ts.values(Field.TOTAL_STUDENTS)) == [10, 15]

    def test_combined_year_month_column(self):
        rows = [
            ["Year-Month", "Total Students", "Total Paid"],
            ["2023-11", 10, "₹5,000"],
            ["2023-02", 12, 6000],
            ["2023-10", 14, None],
        ]
        ts = parse_sheets([("S", rows)])
        assert ts.keys() == ["2023-Feb", "2023-Oct", "2023-Nov"]
        assert list(ts.values(Field.TOTAL_PAID)) == [6000.0, 0.0, 5000.0]

    def test_combined_column_falls_back_to_split_columns(self):
        rows = [
            ["Year", "Month", "Year-Month", "Total Students"],
            [2023, "June", None, 10],
        ]
        assert parse_sheets([("S", rows)]).keys() == ["2023-Jun"]

    def test_no_data_found(self):
        with pytest.raises(NoDataFound):
            parse_sheets([("A", [["nothing"]]), ("B", [])])


class TestParseWorkbook:
    def test_xlsx_round_trip(self, sample_workbook):
        ts = parse_workbook(sample_workbook, "records.xlsx")
        assert ts.keys() == ["2023-Jan", "2023-Feb", "2023-Mar"]
        jan = ts[0]
        assert jan.total_students == 10
        assert jan.total_paid == 10000.0
        assert jan.offered == 3

    def test_second_sheet_used_when_first_has_no_header(self):
        data = make_workbook([
            ("Cover", [["Academy"], ["Records"]]),
            ("Data", [HEADER, data_row(2024, "January", 7), data_row(2024, "February", 9)]),
        ])
        ts = parse_workbook(data, "records.xlsx")
        assert ts.source == "Data"
        assert len(ts) == 2

    def test_csv_upload(self):
        text = "Year,Month,Total Students,Total Paid (₹)\n2023,Jan,10,\"1,000\"\n2023,Feb,12,2000\nTOTAL,,22,3000\n"
        ts = parse_workbook(text.encode("utf-8"), "records.csv")
        assert ts.keys() == ["2023-Jan", "2023-Feb"]
        assert list(ts.values(Field.TOTAL_PAID)) == [1000.0, 2000.0]

    def test_csv_with_title_lines_above_header(self):
        text = (
            "Institute Monthly Report\n"
            "Generated for admissions\n"
            "Year,Month,Total Students\n"
            "2023,Mar,14\n"
            "2023,Jan,10\n"
            "2023,Feb,12\n"
            "TOTAL,,36\n"
            "2023,Apr,999\n"
        )
        ts = parse_workbook(text.encode("utf-8"), "records.csv")
        assert ts.source == "CSV"
        assert ts.keys() == ["2023-Jan", "2023-Feb", "2023-Mar"]
        assert 999 not in ts.values(Field.TOTAL_STUDENTS)

    def test_garbage_bytes_raise_decode_error(self):
        with pytest.raises(DecodeError):
            parse_workbook(b"this is not a workbook", "records.xlsx")

    def test_empty_upload_raises_decode_error(self):
        with pytest.raises(DecodeError):
            parse_workbook(b"", "records.xlsx")

    def test_decodable_without_data_raises_no_data_found(self):
        data = make_workbook([("Sheet1", [["Name", "Score"], ["A", 1]])])
        with pytest.raises(NoDataFound) as excinfo:
            parse_workbook(data, "records.xlsx")
        assert isinstance(excinfo.value, IngestError)
        assert not isinstance(excinfo.value, DecodeError)
