"""Note converters for transforming between Pydantic schemas and domain objects.

This module contains converter functions for transforming note objects
between the API layer (Pydantic) and the domain layer (entities).
"""

from typing import Optional

from application.rest.schemas.input.note_input import NoteCreate
from application.rest.schemas.output.note_output import NoteResponse
from domain.entities.note import Note
from domain.entities.pull_request import PullRequestRef


class NoteConverter:
    """Converter class for note transformations between layers.

    This class provides static methods to convert between:
    - Pydantic input schemas -> Domain value objects
    - Domain entities -> Pydantic output schemas

    Example:
        >>> ref = NoteConverter.input_to_pull_request_ref(note_create)
        >>> note_response = NoteConverter.entity_to_response(note)
    """

    @staticmethod
    def input_to_pull_request_ref(note_input: NoteCreate) -> Optional[PullRequestRef]:
        """Extract the pull request reference from a create/update payload.

        Args:
            note_input (NoteCreate): Pydantic schema with the note fields.

        Returns:
            Optional[PullRequestRef]: The reference, None when no PR field is set.

        Raises:
            InvalidArgumentError: If only some of the PR fields are set.

        Example:
            >>> note_input = NoteCreate(title="t", repo_owner="acme", repo_name="widgets", github_pr_number=42)
            >>> str(NoteConverter.input_to_pull_request_ref(note_input))
            'acme/widgets#42'
        """
        return PullRequestRef.from_parts(
            note_input.repo_owner, note_input.repo_name, note_input.github_pr_number
        )

    @staticmethod
    def entity_to_response(note: Note) -> NoteResponse:
        return NoteResponse.from_entity(note)
