"""Export endpoints for PDF and CSV."""

import logging
import io
from datetime import datetime
from typing import Optional
import pandas as pd
from fastapi import APIRouter, HTTPException, Request, Query
from fastapi.responses import StreamingResponse
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from organizer.api.activities import get_store, resolve_filter
from organizer.services import DataProcessor

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/export", tags=["export"])

# Export column key -> (DataFrame column, label), in output order
COLUMN_MAPPING = {
    "created_at": ("created_formatted", "Created"),
    "name": ("name", "Activity"),
    "category": ("category", "Category"),
    "priority": ("priority", "Priority"),
    "status": ("status", "Status"),
    "completed_at": ("completed_formatted", "Completed"),
    "notes": ("notes", "Notes"),
}


def get_filtered_dataframe(request: Request, category: Optional[str], priority: Optional[str]):
    """Helper returning the filtered activities and their DataFrame."""
    store = get_store(request)
    filtered = store.list_activities(resolve_filter(store, category, priority))

    if not filtered:
        raise HTTPException(status_code=404, detail="No activities match the filter")

    return filtered, DataProcessor.activities_to_dataframe(filtered)


def select_columns(df: pd.DataFrame, columns: Optional[str]) -> list[tuple[str, str]]:
    """Build export columns list maintaining order from COLUMN_MAPPING."""
    if columns:
        selected_set = {c.strip() for c in columns.split(",")}
        ordered_keys = [key for key in COLUMN_MAPPING if key in selected_set]
    else:
        ordered_keys = list(COLUMN_MAPPING)

    export_columns = [COLUMN_MAPPING[key] for key in ordered_keys if COLUMN_MAPPING[key][0] in df.columns]
    if not export_columns:
        raise HTTPException(status_code=404, detail="No data to export with selected columns")
    return export_columns


@router.get("/csv")
async def export_csv(
    request: Request,
    category: Optional[str] = Query(None, description="Exact category filter"),
    priority: Optional[str] = Query(None, description="Exact priority filter"),
    columns: Optional[str] = Query(None, description="Comma-separated column keys to export"),
):
    """
    Export the filtered activities to CSV.

    Returns:
        CSV file with a totals row
    """
    filtered, df = get_filtered_dataframe(request, category, priority)
    export_columns = select_columns(df, columns)

    df_cols = [col for col, _ in export_columns]
    labels = {col: label for col, label in export_columns}
    df_export = df[df_cols].rename(columns=labels)

    summary = DataProcessor.calculate_summary(filtered)
    totals = {label: "" for _, label in export_columns}
    totals[export_columns[0][1]] = "TOTAL"
    if "Status" in totals:
        totals["Status"] = f"{summary.completed}/{summary.total} done"

    totals_df = pd.DataFrame([totals], columns=df_export.columns)
    df_export = pd.concat([df_export, totals_df], ignore_index=True)

    csv_buffer = io.StringIO()
    df_export.to_csv(csv_buffer, index=False)
    csv_buffer.seek(0)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    filename = f"activities_{timestamp}.csv"

    logger.info(f"Exported {len(filtered)} activities to CSV")

    return StreamingResponse(
        iter([csv_buffer.getvalue()]),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.get("/pdf")
async def export_pdf(
    request: Request,
    category: Optional[str] = Query(None, description="Exact category filter"),
    priority: Optional[str] = Query(None, description="Exact priority filter"),
    columns: Optional[str] = Query(None, description="Comma-separated column keys to export"),
):
    """
    Export the filtered activities to PDF.

    Returns:
        PDF file
    """
    filtered, df = get_filtered_dataframe(request, category, priority)
    export_columns = select_columns(df, columns)
    summary = DataProcessor.calculate_summary(filtered)
    breakdown = DataProcessor.priority_breakdown(filtered)

    pdf_buffer = io.BytesIO()
    doc = SimpleDocTemplate(pdf_buffer, pagesize=landscape(A4))
    elements = []

    styles = getSampleStyleSheet()
    title_style = styles["Title"]
    normal_style = styles["Normal"]

    elements.append(Paragraph("Daily Activities Report", title_style))
    elements.append(Spacer(1, 0.2 * inch))

    generated = datetime.now().strftime("%d/%m/%Y %H:%M")
    elements.append(Paragraph(f"Generated: {generated}", normal_style))
    elements.append(Spacer(1, 0.2 * inch))

    by_priority = ", ".join(f"{level}: {count}" for level, count in breakdown.items())
    summary_text = f"""
    <b>Summary</b><br/>
    Total Activities: {summary.total}<br/>
    Completed: {summary.completed}<br/>
    Pending: {summary.pending}<br/>
    By Priority: {by_priority}
    """
    elements.append(Paragraph(summary_text, normal_style))
    elements.append(Spacer(1, 0.3 * inch))

    table_data = [[label for _, label in export_columns]]
    for idx in range(len(df)):
        row = []
        for df_col, _ in export_columns:
            value = df[df_col].iloc[idx]
            if pd.isna(value) or value == "":
                row.append("-")
            elif df_col in ["name", "notes"]:
                text = str(value)
                row.append(text[:40] if len(text) > 40 else text)
            else:
                row.append(str(value))
        table_data.append(row)

    table = Table(table_data, repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.grey),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
                ("ALIGN", (0, 0), (-1, -1), "CENTER"),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, 0), 10),
                ("BOTTOMPADDING", (0, 0), (-1, 0), 12),
                ("GRID", (0, 0), (-1, -1), 1, colors.black),
                ("FONTSIZE", (0, 1), (-1, -1), 8),
                ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.lightgrey]),
            ]
        )
    )
    elements.append(table)

    doc.build(elements)
    pdf_buffer.seek(0)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    filename = f"activities_{timestamp}.pdf"

    logger.info(f"Exported {len(filtered)} activities to PDF")

    return StreamingResponse(
        pdf_buffer,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
