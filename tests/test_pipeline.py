"""Smoke tests for vector_gallery/pipeline.py."""

import warnings

import pytest

from vector_gallery.pipeline import GalleryReport, build_gallery, load_text

BLOB = 'header\n"10,20,30",TypeA\n"1,2,3",Has,Comma,Label\n'


def _row(values, label: str) -> str:
    return '"' + ",".join(str(v) for v in values) + '",' + label


class TestBuildGallery:
    def test_returns_report(self):
        report = build_gallery(BLOB)
        assert isinstance(report, GalleryReport)
        assert report.rows_parsed == 2
        assert [s.label for s in report.samples] == ["TypeA", "Has,Comma,Label"]

    def test_ids_dense_and_ordered(self):
        lines = ["image_vector,label"] + [_row(range(i, i + 9), f"L{i}") for i in range(3)]
        report = build_gallery("\n".join(lines), limit=5)
        assert [s.id for s in report.samples] == [0, 1, 2]
        assert [s.label for s in report.samples] == ["L0", "L1", "L2"]

    def test_limit_applied(self):
        lines = ["h"] + [_row([1] * 4, f"L{i}") for i in range(10)]
        report = build_gallery("\n".join(lines), limit=3)
        assert len(report.samples) == 3

    def test_default_limit_from_config(self):
        lines = ["h"] + [_row([1] * 4, f"L{i}") for i in range(10)]
        report = build_gallery("\n".join(lines))
        assert len(report.samples) == 5

    def test_accepts_utf8_bytes(self):
        report = build_gallery(BLOB.encode("utf-8"))
        assert report.rows_parsed == 2

    def test_non_text_input_is_fatal(self):
        with pytest.raises(TypeError):
            build_gallery(12345)

    def test_empty_blob(self):
        report = build_gallery("")
        assert report.samples == []
        assert report.rows_parsed == 0

    def test_bad_rows_skipped_and_recorded(self):
        blob = "h\n" + _row([5] * 4, "A") + "\nnonsense\n" + _row([6] * 4, "B")
        report = build_gallery(blob)
        assert report.rows_skipped == 1
        assert report.row_errors[0].line_number == 3
        assert [s.label for s in report.samples] == ["A", "B"]

    def test_warnings_counted_not_raised(self):
        blob = "h\n" + _row(["abc"] + [1] * 3, "A") + "\n" + _row(range(24), "B")
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            report = build_gallery(blob)
        assert report.numeric_warnings == 1
        assert report.dimension_warnings == 1
        assert report.rendered == 2

    def test_failed_sample_placeholder(self):
        blob = 'h\n"",Empty\n' + _row([9] * 4, "B")
        report = build_gallery(blob, on_error="placeholder")
        assert len(report.samples) == 2
        assert report.failed == 1
        assert report.samples[0].image is None

    def test_failed_sample_omitted(self):
        blob = 'h\n"",Empty\n' + _row([9] * 4, "B")
        report = build_gallery(blob, on_error="omit")
        assert [(s.id, s.label) for s in report.samples] == [(0, "B")]
        assert report.failed == 1

    def test_very_long_token_does_not_abort_batch(self):
        blob = "h\n" + _row(["9" * 5000, 1, 1, 1], "A") + "\n" + _row([1, 2, 3, 4], "B")
        report = build_gallery(blob)
        assert report.rendered == 2
        assert report.samples[0].image.pixels[0] == 255

    def test_unterminated_quote_becomes_placeholder(self):
        report = build_gallery('h\n"1,2,3\n' + _row([1, 2, 3, 4], "B"))
        assert report.rows_skipped == 0
        assert [s.ok for s in report.samples] == [False, True]

    def test_blank_line_counted_as_skipped(self):
        blob = "h\n" + _row([1] * 4, "A") + "\n   \n" + _row([2] * 4, "B")
        report = build_gallery(blob)
        assert report.rows_skipped == 1
        assert [s.label for s in report.samples] == ["A", "B"]

    def test_parallel_decode(self):
        lines = ["h"] + [_row([i] * 16, f"L{i}") for i in range(6)]
        report = build_gallery("\n".join(lines), limit=6, max_workers=3)
        assert [s.label for s in report.samples] == [f"L{i}" for i in range(6)]

    def test_summary_mentions_failures(self):
        report = build_gallery('h\n"",Empty\nbroken')
        text = report.summary()
        assert "GALLERY SUMMARY" in text
        assert "Skipped rows" in text
        assert "Failed samples" in text


class TestLoadText:
    def test_reads_file(self, tmp_path):
        path = tmp_path / "data.csv"
        path.write_text(BLOB, encoding="utf-8")
        assert load_text(str(path)) == BLOB

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_text(str(tmp_path / "missing.csv"))
