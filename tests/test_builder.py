"""
End-to-end layout tests against the recording surface.
"""

from collections import defaultdict
from dataclasses import replace

import pytest

from contracts.fields import ContractRecord, contract_fields
from contracts.pdf.builder import (
    BuilderState,
    BuilderStateError,
    DocumentBuilder,
    EmptyDocumentError,
    build_contract_pdf,
    encode_pdf_base64,
)
from contracts.pdf.pdf_assets import DocumentAssets
from contracts.pdf.pdf_settings import LayoutConfigError
from contracts.template import fill_template, load_contract_template

from conftest import RecordingSurface


def build(text, config, surface, assets):
    return DocumentBuilder(config, surface=surface, assets=assets).build(text)


def body_ops(surface, config, assets):
    return [
        op
        for op in surface.texts(size=config.font_size)
        if op.font in {assets.regular_font, assets.bold_font}
    ]


def width(text, size):
    return RecordingSurface().measure_width(text, "Body", size)


def lines_by_baseline(ops):
    grouped = defaultdict(list)
    for op in ops:
        grouped[(op.page, op.y)].append(op)
    return grouped


# --------------------------------------------------------------------------- #
# Concrete scenarios
# --------------------------------------------------------------------------- #

class TestScenarios:
    def test_two_line_paragraph_justified_then_ragged(self, surface, config, assets):
        # Body width of 120pt holds 24 characters at 5pt each.
        narrow = replace(config, page_width=160)
        build("The quick brown fox jumps over the lazy dog", narrow, surface, assets)
        lines = lines_by_baseline(body_ops(surface, narrow, assets))
        first, second = [lines[key] for key in sorted(lines)]
        assert [op.text for op in first] == ["The", "quick", "brown", "fox"]
        end = first[-1].x + width(first[-1].text, narrow.font_size)
        assert end == pytest.approx(narrow.margin + narrow.body_width)
        assert [op.text for op in second] == ["jumps over the lazy dog"]
        assert width(second[0].text, narrow.font_size) < narrow.body_width

    def test_subtitle_is_bold_underlined_at_margin(self, surface, config, assets):
        build("PRIMERA:\nEl apoderado declara conocer el reglamento.", config, surface, assets)
        subtitle, body = body_ops(surface, config, assets)
        assert subtitle.text == "PRIMERA:"
        assert subtitle.font == assets.bold_font
        assert subtitle.x == config.margin
        underline = [op for op in surface.ops if op.kind == "line" and op.y > config.rule_y]
        assert len(underline) == 1
        assert underline[0].y == subtitle.y + 2
        assert underline[0].x2 - underline[0].x == width("PRIMERA:", config.font_size)
        assert body.font == assets.regular_font

    def test_subtitle_wider_than_body_is_not_wrapped(self, surface, config, assets):
        heading = "UNO DOS TRES CUATRO CINCO SEIS SIETE OCHENTAYOCHOCHOCHO"
        assert width(heading, config.font_size) > config.body_width
        build(heading, config, surface, assets)
        (subtitle,) = body_ops(surface, config, assets)
        assert subtitle.text == heading
        assert subtitle.font == assets.bold_font
        assert subtitle.x == config.margin
        underline = [op for op in surface.ops if op.kind == "line" and op.y > config.rule_y]
        assert len(underline) == 1
        assert underline[0].y == subtitle.y + 2

    def test_many_paragraphs_paginate_with_sequential_footers(self, surface, config, assets):
        text = "\n".join(f"Parrafo numero {i} del contrato." for i in range(80))
        build(text, config, surface, assets)
        footers = surface.texts(size=config.footer_font_size)
        assert surface.page >= 2
        assert [op.text for op in footers] == [f"Page {n}" for n in range(1, surface.page + 1)]
        assert [op.page for op in footers] == list(range(1, surface.page + 1))

    def test_consecutive_blank_lines_make_one_small_gap(self, surface, config, assets):
        build("Primer parrafo.\n\n\nSegundo parrafo.", config, surface, assets)
        first, second = body_ops(surface, config, assets)
        blank_gap = round(config.line_height * 0.55)
        assert second.y - first.y == config.line_height + config.paragraph_gap + blank_gap

    def test_overflowing_word_renders_alone(self, surface, config, assets):
        word = "x" * 200
        build(word, config, surface, assets)
        (op,) = body_ops(surface, config, assets)
        assert op.text == word
        assert op.x == config.margin


# --------------------------------------------------------------------------- #
# Layout properties
# --------------------------------------------------------------------------- #

@pytest.fixture
def contract_text():
    record = ContractRecord.from_mapping(
        {
            "nombre_apoderado": "María Pérez",
            "rut_apoderado": "12345678",
            "nombre_jugador": "Tomás Pérez",
            "rut_jugador": "23456789",
            "fecha_nacimiento": "2015-04-02",
            "dirección": "Av. Los Pajaritos 123",
            "comuna": "Maipú",
        }
    )
    return fill_template(load_contract_template(), contract_fields(record))


class TestProperties:
    def test_justified_lines_reach_right_margin(self, surface, config, assets, contract_text):
        build(contract_text, config, surface, assets)
        right = config.margin + config.body_width
        justified = [ops for ops in lines_by_baseline(body_ops(surface, config, assets)).values() if len(ops) > 1]
        assert justified
        for ops in justified:
            last = ops[-1]
            assert last.x + width(last.text, config.font_size) == pytest.approx(right)

    def test_nothing_drawn_below_body_limit(self, surface, config, assets, contract_text):
        build(contract_text, config, surface, assets)
        for op in body_ops(surface, config, assets):
            assert config.top_offset <= op.y < config.body_limit

    def test_pages_are_sequential_without_gaps(self, surface, config, assets, contract_text):
        build(contract_text, config, surface, assets)
        pages = sorted({op.page for op in surface.ops})
        assert pages == list(range(1, surface.page + 1))
        footers = [op.text for op in surface.texts(size=config.footer_font_size)]
        assert footers == [f"Page {n}" for n in pages]

    def test_every_page_gets_header(self, surface, config, assets, contract_text):
        build(contract_text, config, surface, assets)
        titles = surface.texts(size=config.title_font_size)
        assert sorted({op.page for op in titles}) == list(range(1, surface.page + 1))

    def test_repeated_title_is_dropped(self, surface, config, assets):
        build("\nTITLE\n\nCuerpo del contrato.", config, surface, assets)
        assert [op.text for op in body_ops(surface, config, assets)] == ["Cuerpo del contrato."]

    def test_watermark_on_every_page(self, surface, config, contract_text):
        assets = DocumentAssets(regular_font="Body", bold_font="Body-Bold", watermark=object())
        build(contract_text, config, surface, assets)
        images = [op.page for op in surface.ops if op.kind == "image"]
        assert images == list(range(1, surface.page + 1))


# --------------------------------------------------------------------------- #
# Degenerate inputs and lifecycle
# --------------------------------------------------------------------------- #

class TestLifecycle:
    def test_empty_text_single_page_with_header_and_footer(self, surface, config, assets):
        data = build("", config, surface, assets)
        assert data == b"%PDF-recorded"
        assert surface.page == 1
        assert body_ops(surface, config, assets) == []
        assert [op.text for op in surface.texts(size=config.footer_font_size)] == ["Page 1"]
        assert [op.text for op in surface.texts(size=config.title_font_size)] == ["TITLE"]

    def test_builder_is_single_use(self, surface, config, assets):
        builder = DocumentBuilder(config, surface=surface, assets=assets)
        assert builder.state is BuilderState.IDLE
        builder.build("Texto.")
        assert builder.state is BuilderState.FINALIZED
        with pytest.raises(BuilderStateError):
            builder.build("Otra vez.")
        assert surface.finished == 1

    def test_bad_config_fails_before_drawing(self, surface, config, assets):
        with pytest.raises(LayoutConfigError):
            DocumentBuilder(replace(config, page_width=0), surface=surface, assets=assets)
        assert surface.ops == []

    def test_build_contract_pdf_uses_given_surface(self, surface, config):
        assert build_contract_pdf("Texto.", config, surface=surface) == b"%PDF-recorded"
        assert surface.finished == 1


class TestBase64:
    def test_encodes_document(self):
        encoded = encode_pdf_base64(b"%PDF-" + b"x" * 100)
        assert encoded.startswith("JVBERi")

    def test_rejects_tiny_output(self):
        with pytest.raises(EmptyDocumentError):
            encode_pdf_base64(b"%PDF")
