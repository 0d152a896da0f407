from fastapi import APIRouter

from ..providers.memes import all_memes

router = APIRouter(prefix="/api/memes", tags=["Memes"])


@router.get("")
def list_memes():
    memes = all_memes()
    return {"memes": memes, "count": len(memes)}
