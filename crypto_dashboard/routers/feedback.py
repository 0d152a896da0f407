from fastapi import APIRouter, Depends
from sqlmodel import select

from ..logging_setup import get_logger
from ..models import Feedback
from ..schema import FeedbackIn
from ..security import get_current_user_id
from ..store import get_session

logger = get_logger("crypto_dashboard.routes.feedback")

router = APIRouter(prefix="/api/feedback", tags=["Feedback"])


def _feedback_dict(fb: Feedback) -> dict:
    return {
        "id": fb.id,
        "userId": fb.user_id,
        "type": fb.type,
        "section": fb.section,
        "contentId": fb.content_id,
        "comment": fb.comment,
        "createdAt": fb.created_at.isoformat(),
    }


@router.post("")
def post_feedback(body: FeedbackIn, user_id: int = Depends(get_current_user_id)):
    logger.info(f"Feedback received: user={user_id} type={body.type} section={body.section}")
    with get_session() as s:
        fb = Feedback(
            user_id=user_id,
            type=body.type,
            section=body.section,
            content_id=body.contentId,
            comment=body.comment,
        )
        s.add(fb)
        s.commit()
        s.refresh(fb)
        return {"message": "Feedback saved successfully", "feedback": _feedback_dict(fb)}


@router.get("")
def list_feedback(user_id: int = Depends(get_current_user_id)):
    with get_session() as s:
        rows = s.exec(
            select(Feedback).where(Feedback.user_id == user_id).order_by(Feedback.created_at.desc(), Feedback.id.desc())
        ).all()
        return {"feedback": [_feedback_dict(fb) for fb in rows], "count": len(rows)}
