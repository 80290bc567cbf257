"""PDF export of a calculator run."""

from __future__ import annotations

import io
from typing import Dict, Optional

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

# rows beyond this are left out of the PDF schedule
MAX_SCHEDULE_ROWS = 360

_TABLE_STYLE = TableStyle(
    [
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#E6ECE9")),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
    ]
)


def _pairs_table(heading: str, values: Dict[str, str]) -> Table:
    rows = [[heading, "Value"]] + [[k, str(v)] for k, v in values.items()]
    table = Table(rows, hAlign="LEFT")
    table.setStyle(_TABLE_STYLE)
    return table


def build_pdf(
    title: str,
    inputs: Dict[str, str],
    results: Dict[str, str],
    schedule: Optional[pd.DataFrame] = None,
) -> bytes:
    """Create a PDF with the inputs, the headline results and an optional schedule."""
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=letter, leftMargin=36, rightMargin=36)
    styles = getSampleStyleSheet()
    story = [Paragraph(title, styles["Title"]), Spacer(1, 12)]

    story.append(Paragraph("Inputs", styles["Heading2"]))
    story.extend([_pairs_table("Field", inputs), Spacer(1, 12)])
    story.append(Paragraph("Results", styles["Heading2"]))
    story.extend([_pairs_table("Figure", results), Spacer(1, 12)])

    if schedule is not None and not schedule.empty:
        shown = schedule.head(MAX_SCHEDULE_ROWS)
        rows = [list(map(str, shown.columns))] + shown.astype(str).values.tolist()
        table = Table(rows, hAlign="LEFT", repeatRows=1)
        table.setStyle(_TABLE_STYLE)
        story.extend([PageBreak(), Paragraph("Schedule", styles["Heading2"]), table])

    doc.build(story)
    pdf_bytes = buffer.getvalue()
    buffer.close()
    return pdf_bytes


__all__ = ["build_pdf"]
