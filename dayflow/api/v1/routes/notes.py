# dayflow/api/v1/routes/notes.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from dayflow.core.database import db_helper
from dayflow.core.utils import get_current_user
from dayflow.core.schemas.productivity import NoteCreate, NoteSchema
from dayflow.models.productivity import Note
from dayflow.models.user import User
from dayflow.services.activity_service import ActivityService

router = APIRouter(prefix="/notes", tags=["notes"])


@router.post("/", response_model=NoteSchema, status_code=status.HTTP_201_CREATED)
async def create_note(
    payload: NoteCreate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(db_helper.session_getter)
):
    user_id = current_user.id
    note = Note(user_id=user_id, **payload.model_dump())
    session.add(note)
    await session.commit()
    result = NoteSchema.model_validate(note)

    await ActivityService(session).record_activity(user_id, {"notes_created": 1})
    return result
