"""
Admin property form sessions.

A session is the server-side state of one open create or edit form: the draft,
the category choices, and the image set with its temporary previews. Sessions
live in a registry until they are submitted, discarded, or left idle too long.
"""

import asyncio
import logging
import time
import uuid
from pathlib import Path
from typing import Dict, List, Optional

from estate_portal.config import Settings
from estate_portal.schemas.category import Category
from estate_portal.schemas.form import FormMode, FormSessionResponse
from estate_portal.schemas.image import ImageSetResponse
from estate_portal.schemas.property import Property, PropertyDraft, PropertyDraftUpdate
from estate_portal.services.backend import BackendClient
from estate_portal.services.image_set import ImageSetEditor, PreviewStore
from estate_portal.utils.exceptions import ConflictError, FormValidationError, NotFoundError
from estate_portal.utils.file_utils import SelectedFile
from estate_portal.utils.validators import PropertyFormValidator, errors_from, kinds_from

logger = logging.getLogger(__name__)


class PropertyFormSession:
    """State of one open property form."""

    def __init__(
        self,
        session_id: str,
        mode: FormMode,
        draft: PropertyDraft,
        categories: List[Category],
        images: ImageSetEditor,
        property_id: Optional[int] = None
    ):
        self.id = session_id
        self.mode = mode
        self.draft = draft
        self.categories = categories
        self.images = images
        self.property_id = property_id
        self.last_used = time.monotonic()
        self.submitting = False

    def touch(self) -> None:
        self.last_used = time.monotonic()

    def update_fields(self, update: PropertyDraftUpdate) -> PropertyDraft:
        """Apply the fields present in a partial update to the draft."""
        self.ensure_idle()
        changes = update.changes()
        if changes:
            self.draft = PropertyDraft.model_validate({**self.draft.model_dump(), **changes})
        self.touch()
        return self.draft

    def add_files(self, selected: List[SelectedFile]):
        self.ensure_idle()
        self.touch()
        return self.images.add_files(selected)

    def remove_image(self, index: int):
        self.ensure_idle()
        self.touch()
        return self.images.remove_at(index)

    def validate(self) -> Dict[str, str]:
        return PropertyFormValidator.validate(self.draft)

    async def submit(self, client: BackendClient) -> Property:
        """
        Validate and send the form to the backend.

        Nothing in the session changes here; on failure the user can correct
        the form or retry as is.

        Raises:
            FormValidationError: If the draft is invalid; no request is sent
            BackendError: If the backend rejects the request or is unreachable
            ConflictError: If a submit of this form is already in flight
        """
        self.ensure_idle()
        self.touch()
        violations = PropertyFormValidator.violations(self.draft)
        if violations:
            raise FormValidationError(errors_from(violations), kinds_from(violations))

        self.submitting = True
        try:
            new_files = self.images.new_images
            if self.mode == FormMode.EDIT:
                return await client.update_property(
                    self.property_id,
                    self.draft,
                    new_files=new_files,
                    retained_images=self.images.retained_references()
                )
            return await client.create_property(self.draft, new_files=new_files)
        finally:
            self.submitting = False
            self.touch()

    def ensure_idle(self) -> None:
        if self.submitting:
            raise ConflictError("Form is already being submitted")

    def close(self) -> int:
        """Release the session's previews. Safe to call more than once."""
        return self.images.teardown()

    def to_response(self) -> FormSessionResponse:
        return FormSessionResponse(
            id=self.id,
            mode=self.mode,
            property_id=self.property_id,
            draft=self.draft,
            categories=self.categories,
            images=ImageSetResponse(
                previews=self.images.previews,
                existing_count=len(self.images.existing_images),
                new_count=len(self.images.new_images),
                max_images=self.images.max_images
            )
        )


class FormSessionRegistry:
    """
    Owner of every open property form session.

    Args:
        settings: Application settings (preview storage, limits, TTL)
        preview_url_prefix: URL prefix under which session previews are served
    """

    def __init__(self, settings: Settings, preview_url_prefix: str = "/admin/forms"):
        self.settings = settings
        self.preview_root = Path(settings.preview_dir)
        self.preview_url_prefix = preview_url_prefix.rstrip("/")
        self.ttl_seconds = settings.form_session_ttl_seconds
        self._sessions: Dict[str, PropertyFormSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    async def open_create(self, client: BackendClient) -> PropertyFormSession:
        """Open an empty create form with the current category choices."""
        self.purge_expired()
        categories = await client.list_categories()
        session = self._new_session(FormMode.CREATE, PropertyDraft(), categories)
        logger.info(f"Opened create form {session.id}")
        return session

    async def open_edit(self, client: BackendClient, property_id: int) -> PropertyFormSession:
        """Open an edit form seeded from the stored property."""
        self.purge_expired()
        categories, prop = await asyncio.gather(
            client.list_categories(),
            client.get_property(property_id)
        )
        session = self._new_session(
            FormMode.EDIT,
            PropertyDraft.from_property(prop),
            categories,
            existing_images=prop.images,
            property_id=prop.id
        )
        logger.info(f"Opened edit form {session.id} for property {property_id}")
        return session

    def get(self, session_id: str) -> PropertyFormSession:
        """
        Raises:
            NotFoundError: If no open session has this id or it has expired
        """
        self.purge_expired()
        session = self._sessions.get(session_id)
        if session is None:
            raise NotFoundError("Form session", session_id)
        return session

    async def submit(self, session_id: str, client: BackendClient) -> Property:
        """Submit a session and close it once the backend accepted it."""
        session = self.get(session_id)
        saved = await session.submit(client)
        self.close(session_id)
        logger.info(f"Form {session_id} submitted ({session.mode.value}) as property {saved.id}")
        return saved

    def discard(self, session_id: str) -> bool:
        """
        Close a session at the user's request.

        Raises:
            NotFoundError: If no open session has this id
            ConflictError: If the session is being submitted
        """
        self.get(session_id).ensure_idle()
        return self.close(session_id)

    def close(self, session_id: str) -> bool:
        """Discard a session and release its previews."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        released = session.close()
        logger.info(f"Closed form {session_id} (released {released} preview(s))")
        return True

    def close_all(self) -> int:
        closed = 0
        for session_id in list(self._sessions):
            if self.close(session_id):
                closed += 1
        return closed

    def purge_expired(self) -> int:
        """Close sessions idle for longer than the configured TTL. Sessions mid-submit are kept."""
        cutoff = time.monotonic() - self.ttl_seconds
        expired = [
            sid for sid, session in self._sessions.items()
            if session.last_used < cutoff and not session.submitting
        ]
        for session_id in expired:
            logger.info(f"Form {session_id} expired")
            self.close(session_id)
        return len(expired)

    def _new_session(
        self,
        mode: FormMode,
        draft: PropertyDraft,
        categories: List[Category],
        existing_images: Optional[List[str]] = None,
        property_id: Optional[int] = None
    ) -> PropertyFormSession:
        session_id = uuid.uuid4().hex
        store = PreviewStore(
            root_dir=self.preview_root / session_id,
            url_prefix=f"{self.preview_url_prefix}/{session_id}/previews",
            size=self.settings.preview_size
        )
        images = ImageSetEditor(
            store,
            existing=existing_images or [],
            max_images=self.settings.max_images_per_property,
            image_base_url=self.settings.image_base_url
        )
        session = PropertyFormSession(
            session_id, mode, draft, categories, images, property_id=property_id
        )
        self._sessions[session_id] = session
        return session
