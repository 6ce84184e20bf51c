from __future__ import annotations

import io
import json
from datetime import datetime, timezone
from typing import Any, Sequence

from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

from logic import NEXT_STEPS, StreamScore, top_stream
from session import Session


def _safe_text(value: Any) -> str:
    if value is None:
        return "-"
    return str(value)


def build_results_payload(session: Session, results: Sequence[StreamScore]) -> dict[str, Any]:
    return {
        "identity": session.identity,
        "top_stream": top_stream(results),
        "results": [item.to_dict() for item in results],
        "next_steps": list(NEXT_STEPS),
        "generated_at": datetime.now(timezone.utc).isoformat(),
    }


def build_pdf_report(payload: dict[str, Any]) -> bytes:
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4, title="Career Aptitude Report")
    styles = getSampleStyleSheet()
    normal = styles["BodyText"]
    heading = styles["Heading2"]

    story = []
    story.append(Paragraph("Career Aptitude Quiz Results", styles["Title"]))
    story.append(Paragraph(f"Generated: {_safe_text(payload.get('generated_at'))}", normal))
    story.append(Paragraph(f"Student: {_safe_text(payload.get('identity'))}", normal))
    story.append(Spacer(1, 12))

    story.append(Paragraph("Recommended Streams", heading))
    for idx, item in enumerate(payload.get("results", []), start=1):
        marker = " - Best Match" if idx == 1 and item.get("raw_count") else ""
        story.append(
            Paragraph(
                f"{idx}. {_safe_text(item.get('label'))} Stream: {float(item.get('percentage', 0.0)):.0f}%{marker}",
                styles["Heading3"],
            )
        )
        story.append(Paragraph(f"Matching answers: {_safe_text(item.get('raw_count'))}", normal))
    story.append(Spacer(1, 8))

    story.append(Paragraph("Recommended Next Steps", heading))
    for step in payload.get("next_steps", []):
        story.append(Paragraph(f"- {_safe_text(step)}", normal))

    doc.build(story)
    buffer.seek(0)
    return buffer.read()


def build_json_summary(payload: dict[str, Any]) -> bytes:
    return json.dumps(payload, indent=2, ensure_ascii=True).encode("utf-8")
