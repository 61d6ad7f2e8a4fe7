"""Renders a one-page PDF summary of an appeal for the robotics email."""

import io
import logging
from typing import List, Optional

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..models.ccd import Address, SscsCaseData

logger = logging.getLogger(__name__)

TABLE_STYLE = TableStyle([
    ('BACKGROUND', (0, 0), (0, -1), colors.lightgrey),
    ('TEXTCOLOR', (0, 0), (-1, -1), colors.black),
    ('ALIGN', (0, 0), (0, -1), 'RIGHT'),
    ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
    ('FONTSIZE', (0, 0), (-1, -1), 10),
    ('GRID', (0, 0), (-1, -1), 1, colors.black),
    ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
])


def _format_address(address: Optional[Address]) -> str:
    if address is None:
        return ""
    parts = [address.line1, address.line2, address.town, address.county, address.postcode]
    return ", ".join(part for part in parts if part)


def _table(rows: List[List[str]]) -> Table:
    table = Table(rows, colWidths=[2 * inch, 4 * inch])
    table.setStyle(TABLE_STYLE)
    return table


def render_case_pdf(case_data: SscsCaseData, case_id: Optional[int] = None) -> bytes:
    """
    Render the appeal summary PDF.

    Missing sections are left blank; this document is informational and
    never blocks a dispatch.

    Args:
        case_data: Appeal case record
        case_id: CCD case id shown in the heading

    Returns:
        PDF bytes
    """
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4)
    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        'AppealTitle',
        parent=styles['Heading1'],
        fontSize=16,
        textColor=colors.HexColor('#003366'),
        spaceAfter=20,
        alignment=TA_CENTER
    )

    appeal = case_data.appeal
    appellant = appeal.appellant if appeal else None
    benefit = appeal.benefit_type if appeal else None
    mrn = appeal.mrn_details if appeal else None
    hearing = appeal.hearing_options if appeal else None

    story = [Paragraph("SSCS APPEAL", title_style)]
    if case_id is not None:
        story.append(Paragraph(f"Case reference: {case_id}", styles['Normal']))
    story.append(Spacer(1, 0.2 * inch))

    story.append(Paragraph("<b>Appellant</b>", styles['Heading2']))
    story.append(_table([
        ['Name:', appellant.name.full_name if appellant and appellant.name else ''],
        ['NINO:', appellant.identity.nino or '' if appellant and appellant.identity else ''],
        ['Address:', _format_address(appellant.address if appellant else None)],
        ['Mobile:', appellant.contact.mobile or '' if appellant and appellant.contact else ''],
        ['Email:', appellant.contact.email or '' if appellant and appellant.contact else ''],
    ]))
    story.append(Spacer(1, 0.3 * inch))

    story.append(Paragraph("<b>Appeal</b>", styles['Heading2']))
    story.append(_table([
        ['Benefit:', (benefit.description or benefit.code or '') if benefit else ''],
        ['MRN date:', mrn.mrn_date or '' if mrn else ''],
        ['Issuing office:', mrn.dwp_issuing_office or '' if mrn else ''],
        ['Late reason:', mrn.mrn_late_reason or '' if mrn else ''],
        ['Evidence present:', case_data.evidence_present or ''],
    ]))
    story.append(Spacer(1, 0.3 * inch))

    story.append(Paragraph("<b>Hearing</b>", styles['Heading2']))
    story.append(_table([
        ['Wants to attend:', hearing.wants_to_attend or '' if hearing else ''],
        ['Interpreter:', hearing.languages or '' if hearing else ''],
        ['Arrangements:', ", ".join(hearing.arrangements or []) if hearing else ''],
        ['Other:', hearing.other or '' if hearing else ''],
    ]))

    doc.build(story)
    pdf = buffer.getvalue()
    logger.info(f"Rendered appeal PDF for case {case_id}: {len(pdf)} bytes")
    return pdf
