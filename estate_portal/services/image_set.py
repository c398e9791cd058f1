"""
Image set editing for the admin property forms.

A form shows one ordered list of images: references already stored by the
backend followed by files picked locally in this session. Each picked file
gets a temporary preview (a thumbnail on disk) that must be released when the
file is removed or the form goes away.
"""

import logging
import shutil
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Tuple, Union

from estate_portal.schemas.image import ImagePreviewEntry, ImageProvenance
from estate_portal.utils.exceptions import (
    BadRequestError,
    IndexOutOfRangeError,
    LimitExceededError,
    NotFoundError
)
from estate_portal.utils.file_utils import ImageProcessor, SelectedFile

logger = logging.getLogger(__name__)


def resolve_image_url(reference: str, image_base_url: str = "") -> str:
    """Absolute references are used as-is; relative ones are joined to the image host."""
    if reference.startswith(("http://", "https://")) or not image_base_url:
        return reference
    base = image_base_url.rstrip("/")
    if reference.startswith("/"):
        return f"{base}{reference}"
    return f"{base}/{reference}"


@dataclass
class PreviewHandle:
    """Temporary display handle for one locally selected file."""

    token: str
    path: Path
    url: str
    released: bool = False


class PreviewStore:
    """
    Owner of the temporary preview files of one form session.

    Every handle is released at most once; releasing again is a no-op.
    """

    def __init__(self, root_dir: Path, url_prefix: str, size: Tuple[int, int] = (300, 300)):
        self.root_dir = Path(root_dir)
        self.url_prefix = url_prefix.rstrip("/")
        self.size = tuple(size)
        self._handles: Dict[str, PreviewHandle] = {}

    @property
    def outstanding(self) -> int:
        """Number of handles acquired and not yet released."""
        return len(self._handles)

    def acquire(self, selected: SelectedFile) -> PreviewHandle:
        """
        Write a preview thumbnail for a selected file.

        Raises:
            ValidationError: If the preview cannot be generated
        """
        token = uuid.uuid4().hex
        extension = Path(selected.filename).suffix.lower()
        path = self.root_dir / f"{token}{extension}"

        ImageProcessor.create_thumbnail(selected.content, path, self.size)

        handle = PreviewHandle(token=token, path=path, url=f"{self.url_prefix}/{token}")
        self._handles[token] = handle
        logger.debug(f"Acquired preview {token} for {selected.filename}")
        return handle

    def release(self, handle: PreviewHandle) -> bool:
        """
        Delete a handle's preview file.

        Returns:
            True if this call released the handle, False if it was already released
        """
        if handle.released:
            return False

        handle.released = True
        self._handles.pop(handle.token, None)
        try:
            handle.path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Failed to delete preview file {handle.path}: {e}")
        return True

    def release_all(self) -> int:
        """Release every outstanding handle and remove the session directory."""
        released = 0
        for handle in list(self._handles.values()):
            if self.release(handle):
                released += 1

        if self.root_dir.exists():
            shutil.rmtree(self.root_dir, ignore_errors=True)
        return released

    def path_for(self, token: str) -> Path:
        """
        Get the file behind an outstanding handle.

        Raises:
            NotFoundError: If the token is unknown or released
        """
        handle = self._handles.get(token)
        if handle is None or not handle.path.exists():
            raise NotFoundError("Image preview", token)
        return handle.path


@dataclass(frozen=True)
class ExistingImage:
    """Image reference already persisted by the backend."""

    reference: str
    provenance: ImageProvenance = field(default=ImageProvenance.EXISTING, init=False)


@dataclass
class NewImage:
    """Locally selected file together with its preview handle."""

    file: SelectedFile
    handle: PreviewHandle
    provenance: ImageProvenance = field(default=ImageProvenance.NEW, init=False)


ImageEntry = Union[ExistingImage, NewImage]


class ImageSetEditor:
    """
    Ordered image collection of a property form.

    Entries are tagged with their provenance and indexed directly. Existing
    references are only supplied at construction and new files are only ever
    appended, so every existing entry precedes every new one.
    """

    def __init__(
        self,
        store: PreviewStore,
        existing: Iterable[str] = (),
        max_images: int = 10,
        image_base_url: str = ""
    ):
        self.store = store
        self.max_images = max_images
        self.image_base_url = image_base_url
        self._entries: List[ImageEntry] = [ExistingImage(reference) for reference in existing]
        self._closed = False

    def __len__(self) -> int:
        return len(self._entries)

    def __enter__(self) -> "ImageSetEditor":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.teardown()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def entries(self) -> Tuple[ImageEntry, ...]:
        return tuple(self._entries)

    @property
    def existing_images(self) -> List[str]:
        return [entry.reference for entry in self._entries if isinstance(entry, ExistingImage)]

    @property
    def new_images(self) -> List[SelectedFile]:
        return [entry.file for entry in self._entries if isinstance(entry, NewImage)]

    @property
    def previews(self) -> List[ImagePreviewEntry]:
        previews = []
        for index, entry in enumerate(self._entries):
            if isinstance(entry, ExistingImage):
                previews.append(ImagePreviewEntry(
                    index=index,
                    url=resolve_image_url(entry.reference, self.image_base_url),
                    provenance=ImageProvenance.EXISTING
                ))
            else:
                previews.append(ImagePreviewEntry(
                    index=index,
                    url=entry.handle.url,
                    provenance=ImageProvenance.NEW,
                    filename=entry.file.filename
                ))
        return previews

    def retained_references(self) -> List[str]:
        """Existing references still in the form, in display order."""
        return self.existing_images

    def add_files(self, selected: List[SelectedFile]) -> List[ImagePreviewEntry]:
        """
        Append locally selected files.

        The batch is all-or-nothing: it is rejected when it would push the set
        over the limit, and any previews created before a failing file are
        released again.

        Returns:
            Preview entries of the added files

        Raises:
            LimitExceededError: If the set would exceed max_images
        """
        self._ensure_open()
        selected = list(selected)
        requested = len(self._entries) + len(selected)
        if requested > self.max_images:
            raise LimitExceededError(self.max_images, requested)

        acquired: List[NewImage] = []
        try:
            for file in selected:
                acquired.append(NewImage(file=file, handle=self.store.acquire(file)))
        except Exception:
            for entry in acquired:
                self.store.release(entry.handle)
            raise

        start = len(self._entries)
        self._entries.extend(acquired)
        return self.previews[start:]

    def remove_at(self, index: int) -> ImageEntry:
        """
        Remove the image shown at a preview index.

        Returns:
            The removed entry

        Raises:
            IndexOutOfRangeError: If index is outside the preview list
        """
        self._ensure_open()
        if index < 0 or index >= len(self._entries):
            raise IndexOutOfRangeError(index, len(self._entries))

        entry = self._entries.pop(index)
        if isinstance(entry, NewImage):
            self.store.release(entry.handle)
        return entry

    def teardown(self) -> int:
        """
        Release every outstanding preview handle.

        Safe to call more than once.

        Returns:
            Number of handles released by this call
        """
        if self._closed:
            return 0
        self._closed = True

        released = 0
        for entry in self._entries:
            if isinstance(entry, NewImage) and self.store.release(entry.handle):
                released += 1
        released += self.store.release_all()
        return released

    def _ensure_open(self) -> None:
        if self._closed:
            raise BadRequestError("Image set has already been closed")
