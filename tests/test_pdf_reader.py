"""Tests for loading, page counting and rasterizing."""

import fitz
import pytest

from pdfstamp.config import RasterizerConfig
from pdfstamp.core.document import PageRasterizer, load_document, page_count, read_pdf_bytes
from pdfstamp.core.errors import InvalidDocument, RenderFailure

from conftest import make_pdf


class TestLoader:
    def test_page_count(self, two_page_pdf):
        assert page_count(two_page_pdf) == 2

    @pytest.mark.parametrize("data", [b"", b"hello world, not a pdf"])
    def test_invalid_bytes(self, data):
        with pytest.raises(InvalidDocument):
            load_document(data)
        with pytest.raises(InvalidDocument):
            page_count(data)

    def test_handle_page_size(self, two_page_pdf):
        with load_document(two_page_pdf) as handle:
            assert handle.page_size(0).height == 792
            assert handle.page_size(1).width == 400
            assert handle.has_page(1)
            assert not handle.has_page(2)
            assert not handle.has_page(-1)

    def test_handle_draw_text_uses_bottom_left_origin(self, letter_pdf):
        with load_document(letter_pdf) as handle:
            handle.draw_text(0, "Corner", 72, 72, 12, (0, 0, 0))
            data = handle.serialize()

        doc = fitz.open(stream=data, filetype="pdf")
        words = doc[0].get_text("words")
        doc.close()

        assert [w[4] for w in words] == ["Corner"]
        # Near the bottom of the page in PyMuPDF's top-left system
        assert words[0][3] == pytest.approx(792 - 72, abs=5)

    def test_read_pdf_bytes(self, tmp_path, letter_pdf):
        path = tmp_path / "doc.pdf"
        path.write_bytes(letter_pdf)
        assert read_pdf_bytes(path) == letter_pdf

    def test_read_pdf_bytes_rejects_other_files(self, tmp_path):
        path = tmp_path / "notes.pdf"
        path.write_text("just text")
        with pytest.raises(InvalidDocument):
            read_pdf_bytes(path)


class TestRasterizer:
    def test_sizes(self, letter_pdf):
        rendered = PageRasterizer().rasterize(letter_pdf, 0, 1.5)

        assert rendered.intrinsic_width == 612
        assert rendered.intrinsic_height == 792
        assert rendered.display_width == pytest.approx(918)
        assert rendered.display_height == pytest.approx(1188)
        assert rendered.pixmap.width == pytest.approx(918, abs=1)
        assert rendered.pixmap.height == pytest.approx(1188, abs=1)

    def test_zero_based_page_index(self, two_page_pdf):
        rendered = PageRasterizer().rasterize(two_page_pdf, 1, 1.0)
        assert (rendered.intrinsic_width, rendered.intrinsic_height) == (400, 600)

    def test_alpha_from_config(self, letter_pdf):
        rendered = PageRasterizer(RasterizerConfig(alpha=True)).rasterize(letter_pdf, 0, 0.5)
        assert rendered.pixmap.alpha

    def test_dark_mode_inverts_white_page(self, letter_pdf):
        light = PageRasterizer().rasterize(letter_pdf, 0, 0.5)
        dark = PageRasterizer(RasterizerConfig(dark_mode=True)).rasterize(letter_pdf, 0, 0.5)

        assert light.pixmap.pixel(0, 0) == (255, 255, 255)
        assert dark.pixmap.pixel(0, 0) == (0, 0, 0)

    @pytest.mark.parametrize("page_index", [1, -1])
    def test_out_of_range_page(self, letter_pdf, page_index):
        with pytest.raises(RenderFailure) as excinfo:
            PageRasterizer().rasterize(letter_pdf, page_index, 1.0)
        assert excinfo.value.page_index == page_index

    def test_unparseable_document(self):
        with pytest.raises(RenderFailure):
            PageRasterizer().rasterize(b"garbage", 0, 1.0)

    def test_bad_scale(self, letter_pdf):
        with pytest.raises(RenderFailure):
            PageRasterizer().rasterize(letter_pdf, 0, 0)

    def test_cache_reuses_render(self, letter_pdf):
        rasterizer = PageRasterizer()
        first = rasterizer.rasterize(letter_pdf, 0, 1.0)
        assert rasterizer.rasterize(letter_pdf, 0, 1.0) is first

    def test_cache_is_bounded(self, letter_pdf):
        rasterizer = PageRasterizer(RasterizerConfig(cache_size=2))
        first = rasterizer.rasterize(letter_pdf, 0, 0.5)
        rasterizer.rasterize(letter_pdf, 0, 0.6)
        rasterizer.rasterize(letter_pdf, 0, 0.7)

        assert rasterizer.rasterize(letter_pdf, 0, 0.5) is not first

    def test_new_document_replaces_old(self, letter_pdf):
        rasterizer = PageRasterizer()
        rasterizer.rasterize(letter_pdf, 0, 1.0)

        other = make_pdf((300, 300), (300, 300), (300, 300))
        assert rasterizer.page_count(other) == 3
        assert rasterizer.rasterize(other, 2, 1.0).intrinsic_height == 300

    def test_page_count_invalid(self):
        with pytest.raises(InvalidDocument):
            PageRasterizer().page_count(b"garbage")

    def test_close_clears_cache(self, letter_pdf):
        rasterizer = PageRasterizer()
        first = rasterizer.rasterize(letter_pdf, 0, 1.0)
        rasterizer.close()
        assert rasterizer.rasterize(letter_pdf, 0, 1.0) is not first

    def test_set_dark_mode_drops_cached_renders(self, letter_pdf):
        rasterizer = PageRasterizer()
        light = rasterizer.rasterize(letter_pdf, 0, 0.5)

        rasterizer.set_dark_mode(True)
        dark = rasterizer.rasterize(letter_pdf, 0, 0.5)

        assert dark is not light
        assert dark.pixmap.pixel(0, 0) == (0, 0, 0)
        assert rasterizer.config.dark_mode

    def test_set_dark_mode_unchanged_keeps_cache(self, letter_pdf):
        rasterizer = PageRasterizer()
        first = rasterizer.rasterize(letter_pdf, 0, 0.5)

        rasterizer.set_dark_mode(False)

        assert rasterizer.rasterize(letter_pdf, 0, 0.5) is first
