"""PDF export helpers for the stock report page."""

from __future__ import annotations

from datetime import datetime
from io import BytesIO
from pathlib import Path
import re

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import inch
from reportlab.pdfgen import canvas

from ui.models import PageViewModel


DISCLAIMER_LINES = (
    "Disclaimer: All information is provided for educational purposes.",
    "This does not constitute financial advice. Always do your own research.",
)


def _safe_symbol(symbol: str | None) -> str:
    cleaned = re.sub(r"[^A-Za-z0-9._-]", "", (symbol or "").strip().upper())
    return cleaned or "REPORT"


def report_filename(page: PageViewModel, generated_at: datetime | None = None) -> str:
    """Download name for the report: ``<SYMBOL>_report_<YYYYMMDD>.pdf``."""
    stamp = (generated_at or datetime.now()).strftime("%Y%m%d")
    return f"{_safe_symbol(page.report_symbol)}_report_{stamp}.pdf"


def build_report_pdf(page: PageViewModel, chart_path: Path | None = None) -> bytes:
    """Render the cards, officers and news of one report into PDF bytes.

    Nothing is written to disk, so concurrent exports never share a file.
    """
    buffer = BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    width, height = A4
    left_margin = 0.75 * inch
    top = height - 0.75 * inch
    y = top

    def draw_title(text: str, size: int = 16) -> None:
        nonlocal y
        pdf.setFont("Helvetica-Bold", size)
        pdf.drawString(left_margin, y, text)
        y -= 0.28 * inch

    def draw_line(text: str, bold: bool = False, color: tuple[float, float, float] | None = None) -> None:
        nonlocal y
        if y < 0.8 * inch:
            pdf.showPage()
            y = top

        pdf.setFont("Helvetica-Bold" if bold else "Helvetica", 10)
        if color is not None:
            pdf.setFillColorRGB(*color)
        else:
            pdf.setFillColor(colors.black)

        pdf.drawString(left_margin, y, text[:110])
        y -= 0.2 * inch
        pdf.setFillColor(colors.black)

    draw_title("AI/ML Stock Information Report")
    draw_line(f"Symbol: {page.report_symbol or ''}", bold=True)
    draw_line(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")

    for card in page.cards:
        y -= 0.08 * inch
        draw_line(card.title, bold=True, color=(0.12, 0.31, 0.62))
        if card.heading:
            draw_line(card.heading, bold=True)
        for row in card.rows:
            draw_line(f"- {row.label}: {row.value}")

    y -= 0.08 * inch
    draw_line("Company Officers", bold=True, color=(0.12, 0.31, 0.62))
    if not page.officers:
        draw_line("No company officers found.")
    for officer in page.officers:
        draw_line(f"{officer.name or ''} - {officer.title or ''}", bold=True)
        for row in officer.rows:
            draw_line(f"   {row.label}: {row.value}")

    y -= 0.08 * inch
    draw_line("Latest News", bold=True, color=(0.12, 0.31, 0.62))
    if not page.news:
        draw_line("No news available.")
    for item in page.news:
        draw_line(f"- {item.title or ''} ({item.publisher or 'unknown publisher'})")

    y -= 0.05 * inch
    for line in DISCLAIMER_LINES:
        draw_line(line, bold=True)

    def draw_image_block(image_path: Path | None, label: str, desired_height: float) -> None:
        nonlocal y
        if image_path is None or not image_path.exists():
            draw_line(f"{label}: not available")
            return

        if y < desired_height + 1.0 * inch:
            pdf.showPage()
            y = top

        draw_line(label, bold=True)
        img_width = width - (2 * left_margin)
        pdf.drawImage(str(image_path), left_margin, y - desired_height, width=img_width, height=desired_height, preserveAspectRatio=True)
        y -= desired_height + 0.2 * inch

    draw_image_block(chart_path, "Forecast (Low / High / Close)", desired_height=3.2 * inch)

    pdf.save()
    return buffer.getvalue()
