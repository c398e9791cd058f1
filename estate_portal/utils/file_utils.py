"""
File upload utilities for image validation and preview generation.
Provides the checks applied to locally selected images before they join a form.
"""

import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple
from PIL import Image
from fastapi import UploadFile

from estate_portal.utils.exceptions import (
    ValidationError,
    UnsupportedFileTypeError,
    FileSizeExceededError
)


@dataclass
class SelectedFile:
    """An image picked in a form but not yet uploaded to the backend."""

    filename: str
    content_type: str
    content: bytes = field(repr=False)

    @property
    def size(self) -> int:
        return len(self.content)


class FileValidator:
    """Utility class for file validation operations."""

    # Supported image formats and their MIME types
    SUPPORTED_FORMATS: Dict[str, List[str]] = {
        'image/jpeg': ['.jpg', '.jpeg'],
        'image/png': ['.png'],
        'image/webp': ['.webp']
    }

    PIL_FORMATS: Dict[str, List[str]] = {
        'image/jpeg': ['jpeg'],
        'image/png': ['png'],
        'image/webp': ['webp']
    }

    # Maximum file size (10MB by default)
    MAX_FILE_SIZE = 10 * 1024 * 1024

    @classmethod
    def validate_file_extension(cls, filename: str) -> str:
        """
        Validate file extension.

        Args:
            filename: Name of the file

        Returns:
            Lowercase file extension

        Raises:
            ValidationError: If extension is not supported
        """
        if not filename:
            raise ValidationError("Filename is required")

        extension = Path(filename).suffix.lower()

        if not extension:
            raise ValidationError("File must have an extension")

        supported_extensions = [
            ext for extensions in cls.SUPPORTED_FORMATS.values() for ext in extensions
        ]

        if extension not in supported_extensions:
            raise ValidationError(
                f"File extension '{extension}' not supported. "
                f"Supported extensions: {', '.join(supported_extensions)}"
            )

        return extension

    @classmethod
    def validate_mime_type(cls, mime_type: str, allowed_types: Optional[List[str]] = None) -> str:
        """
        Validate MIME type.

        Raises:
            UnsupportedFileTypeError: If MIME type is not supported
        """
        allowed = allowed_types or list(cls.SUPPORTED_FORMATS.keys())
        if not mime_type or mime_type not in allowed or mime_type not in cls.SUPPORTED_FORMATS:
            raise UnsupportedFileTypeError(mime_type or "unknown", allowed)
        return mime_type

    @classmethod
    def validate_file_size(cls, file_size: int, max_size: Optional[int] = None) -> int:
        """
        Validate file size.

        Raises:
            ValidationError: If the file is empty
            FileSizeExceededError: If file size exceeds limit
        """
        if file_size <= 0:
            raise ValidationError("File size must be greater than 0")

        max_allowed = max_size or cls.MAX_FILE_SIZE
        if file_size > max_allowed:
            raise FileSizeExceededError(file_size, max_allowed)

        return file_size

    @classmethod
    def validate_image_content(cls, content: bytes, mime_type: str) -> Tuple[int, int]:
        """
        Check that the bytes decode as an image of the declared type.

        Returns:
            Tuple of (width, height)
        """
        try:
            with Image.open(io.BytesIO(content)) as img:
                pil_format = img.format.lower() if img.format else ""
                if pil_format not in cls.PIL_FORMATS.get(mime_type, []):
                    raise ValidationError(
                        f"Image format '{pil_format}' doesn't match MIME type '{mime_type}'"
                    )
                return img.size
        except ValidationError:
            raise
        except Exception as e:
            raise ValidationError(f"Invalid image file: {str(e)}")

    @classmethod
    def validate_selected_file(
        cls,
        filename: str,
        content_type: str,
        content: bytes,
        max_size: Optional[int] = None,
        allowed_types: Optional[List[str]] = None
    ) -> SelectedFile:
        """
        Run every check on an in-memory file.

        Returns:
            SelectedFile ready to be added to an image set
        """
        extension = cls.validate_file_extension(filename)
        mime_type = cls.validate_mime_type(content_type, allowed_types)

        if extension not in cls.SUPPORTED_FORMATS[mime_type]:
            raise ValidationError(
                f"File extension '{extension}' doesn't match MIME type '{mime_type}'"
            )

        cls.validate_file_size(len(content), max_size)
        cls.validate_image_content(content, mime_type)
        return SelectedFile(filename=filename, content_type=mime_type, content=content)

    @classmethod
    async def read_upload_file(
        cls,
        file: UploadFile,
        max_size: Optional[int] = None,
        allowed_types: Optional[List[str]] = None
    ) -> SelectedFile:
        """
        Read and validate a FastAPI upload.

        Raises:
            ValidationError: If any validation fails
        """
        if not file.filename:
            raise ValidationError("Filename is required")

        await file.seek(0)
        content = await file.read()

        return cls.validate_selected_file(
            file.filename,
            file.content_type or "",
            content,
            max_size=max_size,
            allowed_types=allowed_types
        )


class ImageProcessor:
    """Utility class for image processing operations."""

    @staticmethod
    def create_thumbnail(content: bytes, thumbnail_path: Path,
                         size: Tuple[int, int] = (300, 300)) -> Path:
        """
        Write a downscaled copy of an in-memory image.

        Args:
            content: Original image bytes
            thumbnail_path: Path where the thumbnail should be saved
            size: Bounding box as (width, height); aspect ratio is kept

        Returns:
            Path of the written thumbnail

        Raises:
            ValidationError: If the image cannot be decoded or written
        """
        try:
            with Image.open(io.BytesIO(content)) as img:
                image_format = img.format or "PNG"
                img.thumbnail(size, Image.Resampling.LANCZOS)

                thumbnail_path.parent.mkdir(parents=True, exist_ok=True)
                img.save(thumbnail_path, format=image_format, optimize=True, quality=85)

                return thumbnail_path
        except Exception as e:
            if thumbnail_path.exists():
                thumbnail_path.unlink()
            raise ValidationError(f"Failed to create image preview: {str(e)}")
