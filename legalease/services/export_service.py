"""CSV and JSON export of document analyses"""
import io
import csv
import json
from dataclasses import dataclass

from ..models import LegalDocument, DocumentAnalysis, ExportFormat

CSV_HEADER = "Clause,Category,Risk Level,Risk Score,Plain Language\n"


@dataclass
class ExportResult:
    content: str
    media_type: str
    filename: str


def export_analysis(document: LegalDocument, analysis: DocumentAnalysis, export_format: ExportFormat) -> ExportResult:
    if export_format == ExportFormat.JSON:
        return ExportResult(
            content=to_json(document, analysis),
            media_type="application/json",
            filename=f"{document.filename}_analysis.json"
        )
    return ExportResult(
        content=to_csv(analysis),
        media_type="text/csv",
        filename=f"{document.filename}_analysis.csv"
    )


def to_json(document: LegalDocument, analysis: DocumentAnalysis) -> str:
    payload = {
        "document": document.model_dump(mode='json', by_alias=True, exclude={'analysis_result'}),
        "analysis": analysis.model_dump(mode='json', by_alias=True),
    }
    return json.dumps(payload, indent=2)


def to_csv(analysis: DocumentAnalysis) -> str:
    buffer = io.StringIO()
    buffer.write(CSV_HEADER)
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for clause in analysis.clauses:
        writer.writerow([
            clause.text,
            clause.category,
            clause.risk_level.value,
            clause.risk_score,
            clause.plain_language,
        ])
    return buffer.getvalue()
