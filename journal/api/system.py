"""System API: health check and on-demand position resync."""

from fastapi import APIRouter, Depends
from sqlmodel import Session

from journal.database import get_session
from journal.engine.position_sync import resync_positions

router = APIRouter(prefix="/api/system", tags=["system"])


@router.get("/health")
def health_check():
    return {"status": "ok"}


@router.post("/resync-positions")
def resync(session: Session = Depends(get_session)):
    """Recompute position sizes and P&L for every trade."""
    return resync_positions(session)
