"""Page geometry and typography tables: paper sizes, orientation, margins, fonts, PDF versions"""

import logging
from enum import Enum
from typing import NamedTuple


logger = logging.getLogger(__name__)

DEFAULT_MARGIN_MM = 10.0
MM_PER_INCH = 25.4


class PDFVersion(str, Enum):
    """PDF format version written into the file header (not the document's own version)."""
    v1_7 = "1.7"
    v2_0 = "2.0"


class PaperOrientation(str, Enum):
    portrait  = "portrait"
    landscape = "landscape"


class PaperSize(str, Enum):
    """ISO 216 A/B series, US and JIS B sizes."""
    A0 = "A0"
    A1 = "A1"
    A2 = "A2"
    A3 = "A3"
    A4 = "A4"
    A5 = "A5"
    A6 = "A6"
    A7 = "A7"
    A8 = "A8"
    A9 = "A9"
    A10 = "A10"
    B0 = "B0"
    B1 = "B1"
    B2 = "B2"
    B3 = "B3"
    B4 = "B4"
    B5 = "B5"
    B6 = "B6"
    B7 = "B7"
    B8 = "B8"
    B9 = "B9"
    B10 = "B10"
    HalfLetter = "HalfLetter"
    Letter = "Letter"
    Legal = "Legal"
    JuniorLegal = "JuniorLegal"
    Ledger = "Ledger"
    Tabloid = "Tabloid"
    JISB0 = "JISB0"
    JISB1 = "JISB1"
    JISB2 = "JISB2"
    JISB3 = "JISB3"
    JISB4 = "JISB4"
    JISB5 = "JISB5"
    JISB6 = "JISB6"
    JISB7 = "JISB7"
    JISB8 = "JISB8"
    JISB9 = "JISB9"
    JISB10 = "JISB10"

    @property
    def dimensions(self) -> tuple[float, float]:
        """(width, height) in inches, portrait."""
        return PAPER_DIMENSIONS[self]


# Inches; the headless renderer takes page sizes in inches.
PAPER_DIMENSIONS: dict[PaperSize, tuple[float, float]] = {
    PaperSize.A0:          (33.1, 46.8),
    PaperSize.A1:          (23.4, 33.1),
    PaperSize.A2:          (16.5, 23.4),
    PaperSize.A3:          (11.7, 16.5),
    PaperSize.A4:          (8.3, 11.7),
    PaperSize.A5:          (5.8, 8.3),
    PaperSize.A6:          (4.1, 5.8),
    PaperSize.A7:          (2.9, 4.1),
    PaperSize.A8:          (2.0, 2.9),
    PaperSize.A9:          (1.5, 2.0),
    PaperSize.A10:         (1.0, 1.5),
    PaperSize.B0:          (39.4, 55.7),
    PaperSize.B1:          (27.8, 39.4),
    PaperSize.B2:          (19.7, 27.8),
    PaperSize.B3:          (13.9, 19.7),
    PaperSize.B4:          (9.8, 13.9),
    PaperSize.B5:          (6.9, 9.8),
    PaperSize.B6:          (4.9, 6.9),
    PaperSize.B7:          (3.5, 4.9),
    PaperSize.B8:          (2.4, 3.5),
    PaperSize.B9:          (1.7, 2.4),
    PaperSize.B10:         (1.2, 1.7),
    PaperSize.HalfLetter:  (5.5, 8.5),
    PaperSize.Letter:      (8.5, 11.0),
    PaperSize.Legal:       (8.5, 14.0),
    PaperSize.JuniorLegal: (8.0, 5.0),
    PaperSize.Ledger:      (17.0, 11.0),
    PaperSize.Tabloid:     (11.0, 17.0),
    PaperSize.JISB0:       (40.6, 57.3),
    PaperSize.JISB1:       (28.7, 40.6),
    PaperSize.JISB2:       (20.3, 28.7),
    PaperSize.JISB3:       (14.3, 20.3),
    PaperSize.JISB4:       (10.1, 14.3),
    PaperSize.JISB5:       (7.2, 10.1),
    PaperSize.JISB6:       (5.0, 7.2),
    PaperSize.JISB7:       (3.6, 5.0),
    PaperSize.JISB8:       (2.5, 3.6),
    PaperSize.JISB9:       (1.8, 2.5),
    PaperSize.JISB10:      (1.3, 1.8),
}


def page_dimensions(paper_size: PaperSize, orientation: PaperOrientation) -> tuple[float, float]:
    """Return (width, height) in inches with width and height swapped for landscape."""
    width, height = paper_size.dimensions
    if orientation == PaperOrientation.landscape:
        return height, width
    return width, height


class FontsStandard(str, Enum):
    """The 14 standard PostScript fonts available to every PDF reader."""
    Courier              = "Courier"
    CourierBold          = "CourierBold"
    CourierBoldOblique   = "CourierBoldOblique"
    CourierOblique       = "CourierOblique"
    Helvetica            = "Helvetica"
    HelveticaBold        = "HelveticaBold"
    HelveticaBoldOblique = "HelveticaBoldOblique"
    HelveticaOblique     = "HelveticaOblique"
    Symbol               = "Symbol"
    TimesBold            = "TimesBold"
    TimesBoldItalic      = "TimesBoldItalic"
    TimesItalic          = "TimesItalic"
    TimesRoman           = "TimesRoman"
    ZapfDingbats         = "ZapfDingbats"

    @property
    def css(self) -> "CssFont":
        return css_font(self)


class CssFont(NamedTuple):
    family: str
    weight: str
    style:  str


_FONT_FAMILIES = {
    "Courier":   "Courier, monospace",
    "Helvetica": "Helvetica, sans-serif",
    "Times":     "'Times New Roman', Times, serif",
    "Symbol":    "Symbol",
    "Zapf":      "'Zapf Dingbats'",
}


def css_font(font: FontsStandard) -> CssFont:
    """Map a standard font to its CSS (family, weight, style) triple."""
    name = font.value
    family = next(v for k, v in _FONT_FAMILIES.items() if name.startswith(k))
    weight = "bold" if "Bold" in name else "normal"
    style = "italic" if "Oblique" in name or "Italic" in name else "normal"
    return CssFont(family, weight, style)


class PageMargins(NamedTuple):
    """Page margins in inches, CSS order."""
    top:    float
    right:  float
    bottom: float
    left:   float

    @classmethod
    def uniform(cls, inches: float) -> "PageMargins":
        return cls(inches, inches, inches, inches)


DEFAULT_MARGINS = PageMargins.uniform(DEFAULT_MARGIN_MM / MM_PER_INCH)


def parse_margins(text: str) -> PageMargins:
    """Parse 1-4 whitespace-separated millimetre values (CSS shorthand order) into inches.

    Any non-integer token falls back to the default margin on all four sides
    with a warning; more than four tokens also yields the default.
    """
    tokens = text.split()
    if not tokens:
        return DEFAULT_MARGINS
    if not all(t.isascii() and t.isdigit() for t in tokens):
        logger.warning(
            "Something wrong with the margin values provided [%s]; using the default of %smm for the margins",
            ", ".join(tokens), DEFAULT_MARGIN_MM,
        )
        return DEFAULT_MARGINS

    inches = [int(t) / MM_PER_INCH for t in tokens]
    if len(inches) == 1:
        return PageMargins.uniform(inches[0])
    if len(inches) == 2:
        top_bottom, left_right = inches
        return PageMargins(top_bottom, left_right, top_bottom, left_right)
    if len(inches) == 3:
        top, left_right, bottom = inches
        return PageMargins(top, left_right, bottom, left_right)
    if len(inches) == 4:
        return PageMargins(*inches)
    return DEFAULT_MARGINS
