import logging
from typing import Optional
from uuid import UUID

from application.converters.note_converter import NoteConverter
from application.rest.schemas.input.note_input import NoteCreate, NoteUpdate
from application.rest.schemas.output.common_output import ErrorResponse, MessageResponse
from application.rest.schemas.output.note_output import NoteResponse, NotesListResponse
from domain.entities.search import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, NoteSearchCriteria
from domain.services.note_service import NoteService
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from utils.dependencies import get_current_user_id, get_db, get_note_service

logger = logging.getLogger(__name__)
router = APIRouter()

UNAUTHORIZED_RESPONSE = {
    "model": ErrorResponse,
    "description": "User authentication required.",
    "content": {
        "application/json": {"example": {"detail": "User ID not found in headers"}}
    },
}

NOT_FOUND_RESPONSE = {
    "model": ErrorResponse,
    "description": "Note not found or owned by another user.",
    "content": {
        "application/json": {
            "example": {"detail": "Note not found", "error_code": "NOT_FOUND"}
        }
    },
}

INTERNAL_ERROR_RESPONSE = {
    "model": ErrorResponse,
    "description": "Internal server error - database operation failed.",
    "content": {
        "application/json": {
            "example": {"detail": "Failed to save note", "error_code": "NOTE_ERROR"}
        }
    },
}

# Responses of endpoints that may resolve a pull request on GitHub
GITHUB_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {
        "model": ErrorResponse,
        "description": "Invalid note data, missing GitHub token or token rejected by GitHub.",
        "content": {
            "application/json": {
                "example": {
                    "detail": "remote credential required",
                    "error_code": "PRECONDITION_FAILED",
                }
            }
        },
    },
    status.HTTP_403_FORBIDDEN: {
        "model": ErrorResponse,
        "description": "GitHub denied access to the repository.",
        "content": {
            "application/json": {
                "example": {
                    "detail": "Resource not accessible by personal access token",
                    "error_code": "GITHUB_FORBIDDEN",
                }
            }
        },
    },
    status.HTTP_429_TOO_MANY_REQUESTS: {
        "model": ErrorResponse,
        "description": "GitHub rate limit exceeded, retry later.",
        "content": {
            "application/json": {
                "example": {
                    "detail": "GitHub API rate limit exceeded",
                    "error_code": "GITHUB_RATE_LIMITED",
                }
            }
        },
    },
    status.HTTP_502_BAD_GATEWAY: {
        "model": ErrorResponse,
        "description": "GitHub returned an unexpected response.",
        "content": {
            "application/json": {
                "example": {
                    "detail": "GitHub API error 500",
                    "error_code": "GITHUB_UPSTREAM_ERROR",
                }
            }
        },
    },
}


@router.post(
    path="/notes",
    description="Create a note, optionally linked to a GitHub pull request.",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_201_CREATED: {
            "model": NoteResponse,
            "description": "Note created successfully.",
        },
        **GITHUB_RESPONSES,
        status.HTTP_401_UNAUTHORIZED: UNAUTHORIZED_RESPONSE,
        status.HTTP_404_NOT_FOUND: {
            "model": ErrorResponse,
            "description": "The referenced pull request does not exist.",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "PR 42 not found in acme/widgets",
                        "error_code": "PULL_REQUEST_NOT_FOUND",
                    }
                }
            },
        },
        status.HTTP_500_INTERNAL_SERVER_ERROR: INTERNAL_ERROR_RESPONSE,
    },
)
async def create_note(
    note_data: NoteCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    note_service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    """Create a new note for the current user.

    When the payload carries a pull request reference, the pull request is
    resolved (from the local cache or GitHub) and linked to the note. If
    that fails no note is created.

    Args:
        note_data (NoteCreate): Pydantic schema containing note creation data.
        user_id (str): Identifier of the authenticated user.
        db (Session): Fresh database session for this request.
        note_service (NoteService): Domain service with injected collaborators.

    Returns:
        NoteResponse: Created note with its linked pull requests.
    """
    pull_request_ref = NoteConverter.input_to_pull_request_ref(note_data)

    note = await note_service.create_note(
        db,
        owner_id=user_id,
        title=note_data.title,
        content=note_data.content,
        pull_request_ref=pull_request_ref,
    )
    return NoteConverter.entity_to_response(note)


@router.get(
    path="/notes",
    description="List the current user's notes with search, PR filters and pagination.",
    response_model=NotesListResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": NotesListResponse,
            "description": "Paginated list of the user's notes, newest first.",
        },
        status.HTTP_401_UNAUTHORIZED: UNAUTHORIZED_RESPONSE,
        status.HTTP_500_INTERNAL_SERVER_ERROR: INTERNAL_ERROR_RESPONSE,
    },
)
async def list_notes(
    search: Optional[str] = Query(
        default=None, description="Case-insensitive match on title and content"
    ),
    pr_number: Optional[int] = Query(
        default=None, description="Only notes referencing this pull request number"
    ),
    pr_state: Optional[str] = Query(
        default=None, description="Only notes linked to a pull request in this state"
    ),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    note_service: NoteService = Depends(get_note_service),
) -> NotesListResponse:
    """Get the current user's notes.

    Args:
        search (Optional[str]): Free-text filter on title and content.
        pr_number (Optional[int]): Pull request number filter.
        pr_state (Optional[str]): Linked pull request state filter.
        page (int): Page number, 1-based.
        limit (int): Notes per page.
        user_id (str): Identifier of the authenticated user.
        db (Session): Fresh database session for this request.
        note_service (NoteService): Domain service with injected collaborators.

    Returns:
        NotesListResponse: Notes for the page with pagination metadata.

    Example:
        GET /notes?pr_state=closed&page=1&limit=20
    """
    logger.info(
        f"Listing notes for user {user_id}: search={search!r}, pr_number={pr_number}, "
        f"pr_state={pr_state!r}, page={page}, limit={limit}"
    )

    criteria = NoteSearchCriteria(
        user_id=user_id,
        query=search,
        pr_number=pr_number,
        pr_state=pr_state,
        page=page,
        limit=limit,
    )
    notes, pagination = await note_service.list_notes(db, criteria)
    return NotesListResponse.from_entities(notes, pagination)


@router.get(
    path="/notes/{note_id}",
    description="Retrieve a single note owned by the current user.",
    response_model=NoteResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": NoteResponse,
            "description": "The note with its linked pull requests.",
        },
        status.HTTP_401_UNAUTHORIZED: UNAUTHORIZED_RESPONSE,
        status.HTTP_404_NOT_FOUND: NOT_FOUND_RESPONSE,
        status.HTTP_500_INTERNAL_SERVER_ERROR: INTERNAL_ERROR_RESPONSE,
    },
)
async def get_note(
    note_id: UUID,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    note_service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    """Get a note by ID.

    Args:
        note_id (UUID): Identifier of the note.
        user_id (str): Identifier of the authenticated user.
        db (Session): Fresh database session for this request.
        note_service (NoteService): Domain service with injected collaborators.

    Returns:
        NoteResponse: The requested note.
    """
    note = await note_service.get_note(db, note_id, user_id)
    return NoteConverter.entity_to_response(note)


@router.put(
    path="/notes/{note_id}",
    description="Overwrite a note and re-link it to the given pull request (or none).",
    response_model=NoteResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": NoteResponse,
            "description": "Note updated successfully.",
        },
        **GITHUB_RESPONSES,
        status.HTTP_401_UNAUTHORIZED: UNAUTHORIZED_RESPONSE,
        status.HTTP_404_NOT_FOUND: NOT_FOUND_RESPONSE,
        status.HTTP_500_INTERNAL_SERVER_ERROR: INTERNAL_ERROR_RESPONSE,
    },
)
async def update_note(
    note_id: UUID,
    note_data: NoteUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    note_service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    """Update a note owned by the current user.

    The payload replaces the note: a request without pull request fields
    unlinks the note.

    Args:
        note_id (UUID): Identifier of the note.
        note_data (NoteUpdate): Pydantic schema containing the new note data.
        user_id (str): Identifier of the authenticated user.
        db (Session): Fresh database session for this request.
        note_service (NoteService): Domain service with injected collaborators.

    Returns:
        NoteResponse: The updated note.
    """
    pull_request_ref = NoteConverter.input_to_pull_request_ref(note_data)

    note = await note_service.update_note(
        db,
        note_id=note_id,
        user_id=user_id,
        title=note_data.title,
        content=note_data.content,
        pull_request_ref=pull_request_ref,
    )
    return NoteConverter.entity_to_response(note)


@router.delete(
    path="/notes/{note_id}",
    description="Delete a note owned by the current user together with its links.",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": MessageResponse,
            "description": "Note deleted successfully.",
        },
        status.HTTP_401_UNAUTHORIZED: UNAUTHORIZED_RESPONSE,
        status.HTTP_404_NOT_FOUND: NOT_FOUND_RESPONSE,
        status.HTTP_500_INTERNAL_SERVER_ERROR: INTERNAL_ERROR_RESPONSE,
    },
)
async def delete_note(
    note_id: UUID,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    note_service: NoteService = Depends(get_note_service),
) -> MessageResponse:
    """Delete a note.

    Args:
        note_id (UUID): Identifier of the note.
        user_id (str): Identifier of the authenticated user.
        db (Session): Fresh database session for this request.
        note_service (NoteService): Domain service with injected collaborators.

    Returns:
        MessageResponse: Confirmation message.
    """
    await note_service.delete_note(db, note_id, user_id)
    return MessageResponse(message="Note deleted successfully")
