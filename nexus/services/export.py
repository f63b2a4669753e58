"""
Exports of the (already filtered) item list: CSV text and a tabular PDF.
"""
from io import BytesIO
from typing import Dict, List

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle

from ..schemas.records import Area, Item


CSV_HEADER = "Code,Name,Category,Status,Area,Description"
PDF_TITLE = "Inventory Report - Nexus Pro"
PDF_COLUMNS = ["Code", "Name", "Category", "Status", "Area"]


def _area_names(areas: List[Area]) -> Dict[str, str]:
    return {a.id: a.name for a in areas}


def area_name(item: Item, names: Dict[str, str]) -> str:
    return names.get(item.area_id, "N/A")


def items_to_csv(items: List[Item], areas: List[Area]) -> str:
    # Only the description is quoted; other fields go out verbatim
    names = _area_names(areas)
    rows = [
        f'{i.code},{i.name},{i.category},{i.status.label},{area_name(i, names)},"{i.description}"'
        for i in items
    ]
    return "\n".join([CSV_HEADER] + rows)


def items_to_pdf(items: List[Item], areas: List[Area]) -> bytes:
    names = _area_names(areas)
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=40,
        leftMargin=40,
        topMargin=40,
        bottomMargin=40,
        title=PDF_TITLE,
    )
    styles = getSampleStyleSheet()

    story = [Paragraph(PDF_TITLE, styles["Heading2"]), Spacer(1, 12)]
    data = [PDF_COLUMNS] + [
        [i.code, i.name, i.category, i.status.label, area_name(i, names)]
        for i in items
    ]
    table = Table(data, repeatRows=1)
    table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#4f46e5')),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 9),
        ('GRID', (0, 0), (-1, -1), 0.25, colors.HexColor('#d1d5db')),
        ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#f3f4f6')]),
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
    ]))
    story.append(table)
    doc.build(story)
    return buffer.getvalue()
