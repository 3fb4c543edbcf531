"""
Tests for the commute CSV loader.
"""

import datetime
import warnings

import pytest

from commute_stats.csv_parser import _locale_float, durations_of, load_commute_csv


class TestLoadCommuteCsv:

    def test_header_and_rows(self, write_csv):
        path = write_csv(
            "ID,Date,Time,Duration (s)\n"
            "1,2025-11-03,08:15,1200\n"
            "2,2025-11-03,17:40:10,1830.5\n"
        )
        records = load_commute_csv(path)
        assert len(records) == 2
        assert records[0].id == 1
        assert records[0].date == datetime.datetime(2025, 11, 3, 8, 15)
        assert records[1].date == datetime.datetime(2025, 11, 3, 17, 40, 10)
        assert durations_of(records) == [1200.0, 1830.5]

    def test_headerless(self, write_csv):
        records = load_commute_csv(write_csv("7,2025-11-03,08:15,900\n"))
        assert records[0].id == 7

    def test_semicolon_with_decimal_comma(self, write_csv):
        path = write_csv(
            "ID;Date;Time;Duration (s)\n"
            "1;03.11.2025;08:15;1200,5\n"
        )
        records = load_commute_csv(path)
        assert records[0].duration == pytest.approx(1200.5)
        assert records[0].date.date() == datetime.date(2025, 11, 3)

    def test_us_date_format(self, write_csv):
        records = load_commute_csv(write_csv("1,11/03/2025,08:15,1200\n"))
        assert records[0].date.date() == datetime.date(2025, 11, 3)

    def test_blank_time_is_midnight(self, write_csv):
        records = load_commute_csv(write_csv("1,2025-11-03,,1200\n"))
        assert records[0].date == datetime.datetime(2025, 11, 3)

    def test_bom_comments_and_blank_lines(self, write_csv):
        path = write_csv(
            "\ufeff# exported commutes\n"
            "\n"
            "ID,Date,Time,Duration (s)\n"
            "1,2025-11-03,08:15,1200\n"
            "\n"
        )
        assert len(load_commute_csv(path)) == 1

    def test_sorted_by_date(self, write_csv):
        path = write_csv(
            "1,2025-11-05,08:15,1500\n"
            "2,2025-11-03,17:00,2400\n"
            "3,2025-11-03,08:15,1200\n"
        )
        assert [r.id for r in load_commute_csv(path)] == [3, 2, 1]

    def test_bad_rows_skipped_with_warning(self, write_csv):
        path = write_csv(
            "ID,Date,Time,Duration (s)\n"
            "1,2025-11-03,08:15,1200\n"
            "2,not-a-date,08:15,1300\n"
            "3,2025-11-04,08:15,-5\n"
            "4,2025-11-05,08:15,1400\n"
        )
        with pytest.warns(UserWarning, match="Unparseable rows"):
            records = load_commute_csv(path)
        assert [r.id for r in records] == [1, 4]

    def test_short_row_skipped_with_warning(self, write_csv):
        path = write_csv(
            "1,2025-11-03,08:15,1200\n"
            "2,2025-11-04\n"
        )
        with pytest.warns(UserWarning, match="columns"):
            records = load_commute_csv(path)
        assert len(records) == 1

    def test_clean_file_does_not_warn(self, write_csv):
        path = write_csv("1,2025-11-03,08:15,1200\n")
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            load_commute_csv(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_commute_csv(str(tmp_path / "absent.csv"))

    def test_empty_file(self, write_csv):
        with pytest.raises(ValueError, match="empty"):
            load_commute_csv(write_csv("# nothing here\n"))

    def test_no_valid_rows(self, write_csv):
        path = write_csv("ID,Date,Time,Duration (s)\n1,bad,08:15,1200\n")
        with pytest.warns(UserWarning):
            with pytest.raises(ValueError, match="No valid data rows"):
                load_commute_csv(path)


class TestLocaleFloat:

    @pytest.mark.parametrize("text, expected", [
        ("3.14", 3.14), ("3,14", 3.14), ("1,234.5", 1234.5), ("1.234,5", 1234.5), (" 42 ", 42.0),
    ])
    def test_parses(self, text, expected):
        assert _locale_float(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text", ["", "abc", "inf", "nan"])
    def test_rejects(self, text):
        with pytest.raises(ValueError):
            _locale_float(text)
