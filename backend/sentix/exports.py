import csv
import io
import json
import math
from datetime import date, datetime
from typing import Optional, Sequence

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from sentix.config import SNIPPET_LENGTH
from sentix.models import AnalysisResult, ExportFormat

CSV_HEADER = ["ID", "Text", "Sentiment", "Confidence", "Keywords", "Explanation"]
PDF_HEADER = ["Sentiment", "Conf.", "Keywords", "Text Snippet"]

MEDIA_TYPES = {
    ExportFormat.JSON: "application/json",
    ExportFormat.CSV: "text/csv",
    ExportFormat.PDF: "application/pdf",
}


def export_filename(fmt: ExportFormat, today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"sentix_results_{today.isoformat()}.{ExportFormat(fmt).value}"


def to_json(results: Sequence[AnalysisResult]) -> bytes:
    payload = [r.model_dump(exclude_none=True) for r in results]
    return json.dumps(payload, indent=2, ensure_ascii=False).encode("utf-8")


def to_csv(results: Sequence[AnalysisResult]) -> bytes:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for r in results:
        writer.writerow([
            r.id,
            r.text,
            r.sentiment,
            r.confidence,
            ", ".join(r.keywords),
            r.explanation,
        ])
    return buffer.getvalue().encode("utf-8")


def snippet(text: str, length: int = SNIPPET_LENGTH) -> str:
    if len(text) > length:
        return text[:length - 3] + "..."
    return text


def confidence_percent(confidence: float) -> str:
    if not math.isfinite(confidence):
        return "n/a"
    return f"{round(confidence * 100)}%"


def pdf_rows(results: Sequence[AnalysisResult]):
    return [
        [r.sentiment, confidence_percent(r.confidence), ", ".join(r.keywords[:3]), snippet(r.text)]
        for r in results
    ]


def to_pdf(results: Sequence[AnalysisResult], generated_at: Optional[datetime] = None) -> bytes:
    """Render a one-table report of the results."""
    generated_at = generated_at or datetime.now()
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4, title="Sentix Analysis Report")
    styles = getSampleStyleSheet()

    story = [
        Paragraph("Sentix Analysis Report", styles["Title"]),
        Paragraph(f"Generated on: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}", styles["Normal"]),
        Spacer(1, 12),
    ]

    table = Table([PDF_HEADER] + pdf_rows(results), colWidths=[20 * mm, 15 * mm, 30 * mm, 90 * mm], repeatRows=1)
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#2563eb")),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
    ]))
    story.append(table)

    doc.build(story)
    return buffer.getvalue()


SERIALIZERS = {
    ExportFormat.JSON: to_json,
    ExportFormat.CSV: to_csv,
    ExportFormat.PDF: to_pdf,
}
