"""Indiana Appearance form rendering"""
from datetime import date
from io import BytesIO
from typing import Any, Dict, Optional, Tuple
import logging

from reportlab.lib.pagesizes import LETTER
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

logger = logging.getLogger(__name__)

PAGE_WIDTH, PAGE_HEIGHT = LETTER
MARGIN = 72
CONTENT_WIDTH = PAGE_WIDTH - MARGIN * 2
LINE_HEIGHT = 13
ADDRESS_SPLIT_LENGTH = 60


class _Page:
    """Canvas wrapper that takes top-down coordinates like the form layout"""

    def __init__(self, pdf: canvas.Canvas):
        self.pdf = pdf
        self.font = "Helvetica"
        self.size = 11

    def set_font(self, font: str, size: float):
        self.font = font
        self.size = size
        self.pdf.setFont(font, size)

    def _baseline(self, top: float) -> float:
        return PAGE_HEIGHT - top - self.size * 0.8

    def text(self, value: str, x: float, top: float, width: Optional[float] = None):
        lines = simpleSplit(value, self.font, self.size, width) if width else [value]
        for i, line in enumerate(lines):
            self.pdf.drawString(x, self._baseline(top + i * LINE_HEIGHT), line)

    def centered(self, value: str, top: float):
        self.pdf.drawCentredString(PAGE_WIDTH / 2, self._baseline(top), value)

    def rect(self, x: float, top: float, width: float, height: float):
        self.pdf.rect(x, PAGE_HEIGHT - top - height, width, height, stroke=1, fill=0)

    def cross(self, x: float, top: float, size: float):
        bottom = PAGE_HEIGHT - top - size
        self.pdf.line(x, bottom, x + size, bottom + size)
        self.pdf.line(x, bottom + size, x + size, bottom)


def split_address(address: str) -> Tuple[str, Optional[str]]:
    """
    Spread an address over the form's two address lines

    Multi-line addresses use their first two lines. A long single line is
    split at its first comma.
    """
    lines = address.split("\n")
    if len(lines) == 1 and len(address) > ADDRESS_SPLIT_LENGTH:
        parts = address.split(",")
        if len(parts) >= 2:
            return parts[0].strip(), ",".join(parts[1:]).strip()
        return address, None

    second = lines[1] if len(lines) > 1 and lines[1] else None
    return lines[0] or address, second


def format_form_date(day: date) -> str:
    """M/D/YYYY, as printed next to the signature"""
    return f"{day.month}/{day.day}/{day.year}"


def _draw_layout(page: _Page):
    y = 72

    page.set_font("Helvetica-Bold", 14)
    page.centered("STATE OF INDIANA", y)
    y += 20

    page.set_font("Helvetica-Bold", 12)
    page.centered("IN THE _________________ COURT OF _________________ COUNTY", y)
    y += 40

    # Caption box
    page.rect(MARGIN, y, CONTENT_WIDTH, 100)
    y += 10

    page.set_font("Helvetica", 11)
    page.text("____________________________________,", MARGIN + 10, y)
    y += 20
    page.text("Plaintiff,", MARGIN + 10, y)
    y += 30
    page.text("v.", MARGIN + 10, y)
    y += 20
    page.text("____________________________________,", MARGIN + 10, y)
    y += 20
    page.text("Defendant.", MARGIN + 10, y)
    page.text("Cause No. _______________", MARGIN + CONTENT_WIDTH - 150, y - 70)
    y += 40

    page.set_font("Helvetica-Bold", 14)
    page.centered("APPEARANCE", y)
    y += 30

    page.set_font("Helvetica", 11)
    page.text("I hereby enter my appearance in the above-entitled cause and acknowledge", MARGIN, y)
    y += 15
    page.text("service of process. I agree to accept service of pleadings and other papers", MARGIN, y)
    y += 15
    page.text("by delivery to me or by leaving them at my address shown below.", MARGIN, y)
    y += 30

    page.text("Address: _______________________________________________________________", MARGIN, y)
    y += 20
    page.text("_______________________________________________________________________", MARGIN, y)
    y += 30
    page.text("Telephone: _____________________________________________________________", MARGIN, y)
    y += 30
    page.text("Email: _________________________________________________________________", MARGIN, y)
    y += 40

    page.rect(MARGIN, y, 10, 10)
    page.text("I agree to notify the Court of any change in my address or", MARGIN + 20, y + 2)
    y += 15
    page.text("telephone number.", MARGIN + 20, y)
    y += 40

    page.text("_________________________________________________", MARGIN, y)
    y += 15
    page.text("Signature", MARGIN, y)
    page.text("Date: ________________", MARGIN + CONTENT_WIDTH - 150, y - 15)
    y += 30

    page.text("_________________________________________________", MARGIN, y)
    y += 15
    page.text("Print Name", MARGIN, y)


def _fill_values(page: _Page, form_data: Dict[str, Any], today: date):
    page.set_font("Helvetica", 11)

    court = form_data.get("court")
    county = form_data.get("county")
    if court and county:
        page.text(str(court).upper(), MARGIN + 130, 112, width=100)
        page.text(str(county).upper(), MARGIN + 320, 112, width=100)

    y = 162
    if form_data.get("plaintiff"):
        page.text(str(form_data["plaintiff"]), MARGIN + 10, y, width=300)
    if form_data.get("caseNumber"):
        page.text(str(form_data["caseNumber"]), MARGIN + CONTENT_WIDTH - 100, y + 10, width=90)

    y += 50
    if form_data.get("defendant"):
        page.text(str(form_data["defendant"]), MARGIN + 10, y, width=300)

    if form_data.get("mailingAddress"):
        first, second = split_address(str(form_data["mailingAddress"]))
        page.text(first, MARGIN + 70, 310, width=400)
        if second:
            page.text(second, MARGIN, 330, width=468)

    if form_data.get("phone"):
        page.text(str(form_data["phone"]), MARGIN + 90, 370, width=300)
    if form_data.get("email"):
        page.text(str(form_data["email"]), MARGIN + 55, 400, width=400)

    if form_data.get("agreeToNotify") is True:
        page.cross(MARGIN + 2, 442, 6)

    y = 535
    if form_data.get("defendant"):
        page.text(str(form_data["defendant"]), MARGIN, y, width=300)
    page.text(format_form_date(today), MARGIN + CONTENT_WIDTH - 100, y - 15, width=90)


def render_appearance_form(form_data: Dict[str, Any], today: Optional[date] = None) -> bytes:
    """
    Render the Appearance form with the user's answers

    Args:
        form_data: Collected answers keyed by form field, missing fields stay blank
        today: Date printed next to the signature, defaults to today

    Returns:
        PDF document bytes
    """
    buffer = BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=LETTER)
    pdf.setTitle("Appearance")

    page = _Page(pdf)
    _draw_layout(page)
    _fill_values(page, form_data, today or date.today())

    pdf.showPage()
    pdf.save()

    content = buffer.getvalue()
    logger.info(f"Rendered appearance form ({len(content)} bytes)")
    return content
