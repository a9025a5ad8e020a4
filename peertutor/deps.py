# peertutor/deps.py

from fastapi import Depends, HTTPException

from .auth import get_current_tutor
from .errors import ConflictError, NotFoundError, SchedulingError, ValidationError
from .schemas import CurrentTutor


def require_admin(current_tutor: CurrentTutor = Depends(get_current_tutor)) -> CurrentTutor:
    if not current_tutor.is_admin:
        raise HTTPException(status_code=403, detail="Forbidden")
    return current_tutor


def http_error(exc: SchedulingError) -> HTTPException:
    """Map a core error onto the HTTP status the routes answer with."""
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=422, detail=str(exc))
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, ConflictError):
        return HTTPException(status_code=409, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))
