from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session
from tenbucks.database import get_db
from tenbucks.schemas import SessionResults
from tenbucks.services import match_service, scoring_service, season_service
from tenbucks.models.player import Player

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas
from reportlab.lib.units import cm
import io


router = APIRouter(prefix="/sessions", tags=["results"])


@router.get("/{session_id}/results", response_model=SessionResults)
def session_results(session_id: str, db: Session = Depends(get_db)):
    session = season_service.get_session(db, session_id)
    return {
        "totals": scoring_service.team_totals(db, session),
        "players": scoring_service.session_net_scores(db, session),
    }


@router.get("/{session_id}/results-pdf")
def results_pdf(session_id: str, db: Session = Depends(get_db)):
    session = season_service.get_session(db, session_id)
    season_number = session.season.number

    totals = scoring_service.team_totals(db, session)
    net_scores = scoring_service.session_net_scores(db, session)
    waves = match_service.get_waves(db, session)
    names = {p.id: p.name for p in db.query(Player).all()}

    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    width, height = A4

    y = height - 2 * cm

    pdf.setFont("Helvetica-Bold", 16)
    pdf.drawCentredString(width / 2, y, f"Season {season_number} - Session {session.number}")
    y -= 25
    pdf.setFont("Helvetica", 12)
    pdf.drawCentredString(width / 2, y, f"Red {totals['red']}  -  Black {totals['black']}")
    y -= 30

    for wave_number, matches in waves.items():
        if y < 4 * cm:
            pdf.showPage()
            y = height - 2 * cm

        pdf.setFont("Helvetica-Bold", 12)
        pdf.drawCentredString(width / 2, y, f"Wave {wave_number}")
        y -= 20
        pdf.setFont("Helvetica", 10)

        for match in matches:
            left = " / ".join([names[match.player1_id], names[match.player2_id]])
            right = " / ".join([names[match.player3_id], names[match.player4_id]])
            if match.is_complete:
                score = (
                    f"{match.red_first_set}-{match.black_first_set}, "
                    f"{match.red_second_set}-{match.black_second_set}"
                )
            else:
                score = "vs"
            pdf.drawString(2 * cm, y, left)
            pdf.drawCentredString(width / 2, y, score)
            pdf.drawRightString(width - 2 * cm, y, right)
            y -= 15

        y -= 10

    if y < 6 * cm:
        pdf.showPage()
        y = height - 2 * cm

    pdf.setFont("Helvetica-Bold", 12)
    pdf.drawString(2 * cm, y, "Player's score for the session")
    y -= 20
    pdf.setFont("Helvetica", 10)
    for row in net_scores:
        if y < 2 * cm:
            pdf.showPage()
            y = height - 2 * cm
            pdf.setFont("Helvetica", 10)
        pdf.drawString(2 * cm, y, f"{row['name']} ({row['team'].value})")
        pdf.drawRightString(width - 2 * cm, y, f"{row['net_score']:+d} points")
        y -= 15

    pdf.save()
    buffer.seek(0)

    return StreamingResponse(
        buffer,
        media_type="application/pdf",
        headers={
            "Content-Disposition":
                f"attachment; filename=results_s{season_number}_{session.number}.pdf"
        }
    )
