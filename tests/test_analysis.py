"""
Tests for the combined analysis, text report and command-line entry point.
"""

import datetime
import sys
import warnings

import pytest

from commute_stats.__main__ import _exception_hook, _show_warning, build_parser, main
from commute_stats.analysis import (
    analyze_durations, format_clock, format_duration, render_histogram, render_text_report,
)
from commute_stats.breakdown import histogram_bins


def _csv_text(durations):
    start = datetime.date(2025, 1, 1)
    lines = ["ID,Date,Time,Duration (s)"]
    for i, d in enumerate(durations):
        day = start + datetime.timedelta(days=i)
        lines.append(f"{i + 1},{day.isoformat()},08:{i % 60:02d},{d:g}")
    return "\n".join(lines) + "\n"


class TestFormatting:

    @pytest.mark.parametrize("seconds, text", [
        (725, "12m 5s"), (0, "0m 0s"), (59.9, "0m 59s"), (-1, "N/A"), (float("nan"), "N/A"),
    ])
    def test_format_duration(self, seconds, text):
        assert format_duration(seconds) == text

    @pytest.mark.parametrize("seconds, text", [
        (3725, "01:02:05"), (0, "00:00:00"), (86399, "23:59:59"), (-5, "N/A"),
    ])
    def test_format_clock(self, seconds, text):
        assert format_clock(seconds) == text


class TestAnalyzeDurations:

    def test_empty(self):
        analysis = analyze_durations([])
        assert analysis.summary is None
        assert analysis.interval is None
        assert analysis.normality is None
        assert analysis.qq_points == []
        assert analysis.qq_rating is None
        assert analysis.trend is None
        assert analysis.pattern is None
        assert analysis.notes == ["No commutes recorded yet."]

    def test_small_sample_notes(self):
        analysis = analyze_durations([1200, 1300, 1250])
        assert analysis.summary.n == 3
        assert analysis.interval is None
        assert analysis.normality is not None
        joined = " ".join(analysis.notes)
        assert "Only 3" in joined
        assert "approximate" in joined
        assert "at least 10" in joined

    def test_full_sample(self, normal_sample):
        analysis = analyze_durations(normal_sample)
        assert analysis.summary.n == 200
        assert analysis.interval.low < analysis.summary.median < analysis.interval.high
        assert analysis.interval_rank.low in normal_sample
        assert len(analysis.qq_points) == 200
        assert analysis.qq_rating.color == "green"
        assert analysis.trend is not None
        assert analysis.pattern is not None

    def test_trend_and_streak_notes(self, minute_durations):
        analysis = analyze_durations(minute_durations)
        assert analysis.trend.trend == "increasing"
        assert analysis.pattern.pattern == "clustered"
        joined = " ".join(analysis.notes)
        assert "increasing" in joined
        assert "streaks" in joined

    def test_non_normal_note(self, two_clusters):
        notes = analyze_durations(two_clusters).notes
        assert any("not normally distributed" in n for n in notes)


class TestReport:

    def test_sections(self, normal_sample):
        text = render_text_report(analyze_durations(normal_sample), title="Morning commutes")
        assert text.startswith("Morning commutes")
        for section in ("Summary", "90% confidence interval", "Distribution", "Time series"):
            assert section in text
        assert "Total trips" in text and "200" in text
        assert "Shapiro-Wilk" in text
        assert "Mann-Kendall" in text

    def test_empty_report(self):
        text = render_text_report(analyze_durations([]))
        assert text.startswith("Commute Statistics")
        assert "not enough data" in text
        assert "No commutes recorded yet." in text


class TestHistogramRendering:

    def test_bars_scaled_to_top_tick(self):
        bins = histogram_bins([180, 420, 720, 780], 5)
        lines = render_histogram(bins, width=40).splitlines()
        assert len(lines) == 4
        assert lines[0].count("#") == 20
        assert lines[1].count("#") == 20
        assert lines[2].count("#") == 40
        assert lines[2].endswith(" 2")
        assert lines[-1].split() == ["0", "1", "2"]

    def test_axis_zero_aligned_with_bars(self):
        lines = render_histogram(histogram_bins([180, 420], 5), width=10).splitlines()
        assert lines[-1].index("0") == lines[0].index("#")

    def test_no_bins(self):
        assert render_histogram([]) == "  no commutes"


class TestMain:

    @pytest.fixture(autouse=True)
    def _restore_hooks(self, monkeypatch):
        monkeypatch.setattr(sys, "excepthook", sys.excepthook)
        monkeypatch.setattr(warnings, "showwarning", warnings.showwarning)

    def test_installs_hooks(self, write_csv, capsys):
        path = write_csv(_csv_text([1200, 1500, 1800]))
        main([path])
        assert sys.excepthook is _exception_hook
        assert warnings.showwarning is _show_warning

    def test_report_and_challenge(self, write_csv, minute_durations, capsys):
        path = write_csv(_csv_text(minute_durations))
        code = main([path, "--low", "6", "--high", "96", "--confidence", "9"])
        out = capsys.readouterr().out
        assert code == 0
        assert "Commute Statistics" in out
        assert "Histogram (5-minute bins)" in out
        assert "08:00" in out
        assert "Score      3464" in out
        assert "6,96,9,100,3464,2A31B28A" in out

    def test_report_only(self, write_csv, capsys):
        path = write_csv(_csv_text([1200, 1500, 1800]))
        assert main([path]) == 0
        out = capsys.readouterr().out
        assert "challenge" not in out

    def test_unscoreable_forecast(self, write_csv, capsys):
        path = write_csv(_csv_text([1200, 1500, 1800]))
        assert main([path, "--low", "20", "--high", "30"]) == 1
        assert "not scoreable" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "absent.csv")]) == 1
        assert "error:" in capsys.readouterr().err

    def test_parser_defaults(self):
        args = build_parser().parse_args(["x.csv"])
        assert args.confidence == 9
        assert args.bin_size == 5
        assert args.low is None and args.high is None
