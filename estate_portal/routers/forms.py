"""
Admin property form sessions: draft editing, image selection with previews,
validation and submission to the backend.
"""

from typing import List

from fastapi import APIRouter, Depends, File, Path, Response, UploadFile, status
from fastapi.responses import FileResponse

from estate_portal.config import Settings
from estate_portal.schemas.error import get_form_error_responses
from estate_portal.schemas.form import (
    FormMode,
    FormOpenRequest,
    FormSessionResponse,
    FormSubmitResponse,
    FormValidationResponse
)
from estate_portal.schemas.property import PropertyDraftUpdate
from estate_portal.services.backend import BackendClient
from estate_portal.services.property_form import FormSessionRegistry
from estate_portal.utils.dependencies import (
    get_app_settings,
    get_backend_client,
    get_form_registry
)
from estate_portal.utils.exceptions import ValidationError
from estate_portal.utils.file_utils import FileValidator


router = APIRouter(prefix="/admin/forms", tags=["Property Forms"])


@router.post(
    "",
    response_model=FormSessionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Open a property form",
    description="Open an empty create form, or an edit form when propertyId is given",
    responses=get_form_error_responses()
)
async def open_form(
    request: FormOpenRequest,
    client: BackendClient = Depends(get_backend_client),
    registry: FormSessionRegistry = Depends(get_form_registry)
) -> FormSessionResponse:
    if request.property_id is None:
        session = await registry.open_create(client)
    else:
        session = await registry.open_edit(client, request.property_id)
    return session.to_response()


@router.get(
    "/{form_id}",
    response_model=FormSessionResponse,
    summary="Get form state",
    responses=get_form_error_responses()
)
async def get_form(
    form_id: str = Path(..., description="Form session ID"),
    registry: FormSessionRegistry = Depends(get_form_registry)
) -> FormSessionResponse:
    return registry.get(form_id).to_response()


@router.patch(
    "/{form_id}",
    response_model=FormSessionResponse,
    summary="Edit form fields",
    responses=get_form_error_responses()
)
async def update_form(
    update: PropertyDraftUpdate,
    form_id: str = Path(..., description="Form session ID"),
    registry: FormSessionRegistry = Depends(get_form_registry)
) -> FormSessionResponse:
    session = registry.get(form_id)
    session.update_fields(update)
    return session.to_response()


@router.post(
    "/{form_id}/images",
    response_model=FormSessionResponse,
    summary="Add images",
    description="Add locally selected images; the whole batch is rejected if any file is invalid "
                "or the form would exceed the image limit",
    responses=get_form_error_responses()
)
async def add_images(
    form_id: str = Path(..., description="Form session ID"),
    files: List[UploadFile] = File(..., description="Image files"),
    registry: FormSessionRegistry = Depends(get_form_registry),
    settings: Settings = Depends(get_app_settings)
) -> FormSessionResponse:
    session = registry.get(form_id)
    if not files:
        raise ValidationError("At least one file is required")

    selected = [
        await FileValidator.read_upload_file(
            upload,
            max_size=settings.max_file_size,
            allowed_types=settings.allowed_file_types
        )
        for upload in files
    ]
    session.add_files(selected)
    return session.to_response()


@router.delete(
    "/{form_id}/images/{index}",
    response_model=FormSessionResponse,
    summary="Remove an image",
    description="Remove the image at a preview index, existing or newly added",
    responses=get_form_error_responses()
)
async def remove_image(
    form_id: str = Path(..., description="Form session ID"),
    index: int = Path(..., description="Preview index"),
    registry: FormSessionRegistry = Depends(get_form_registry)
) -> FormSessionResponse:
    session = registry.get(form_id)
    session.remove_image(index)
    return session.to_response()


@router.get(
    "/{form_id}/previews/{token}",
    response_class=FileResponse,
    summary="Preview of a newly added image",
    responses=get_form_error_responses()
)
async def get_preview(
    form_id: str = Path(..., description="Form session ID"),
    token: str = Path(..., description="Preview token"),
    registry: FormSessionRegistry = Depends(get_form_registry)
) -> FileResponse:
    session = registry.get(form_id)
    return FileResponse(session.images.store.path_for(token))


@router.post(
    "/{form_id}/validate",
    response_model=FormValidationResponse,
    summary="Validate the draft",
    responses=get_form_error_responses()
)
async def validate_form(
    form_id: str = Path(..., description="Form session ID"),
    registry: FormSessionRegistry = Depends(get_form_registry)
) -> FormValidationResponse:
    errors = registry.get(form_id).validate()
    return FormValidationResponse(valid=not errors, errors=errors)


@router.post(
    "/{form_id}/submit",
    response_model=FormSubmitResponse,
    summary="Submit the form",
    description="Validate and send the property to the backend; the form is closed on success. "
                "Returns 201 when a new property was created",
    responses=get_form_error_responses()
)
async def submit_form(
    response: Response,
    form_id: str = Path(..., description="Form session ID"),
    client: BackendClient = Depends(get_backend_client),
    registry: FormSessionRegistry = Depends(get_form_registry)
) -> FormSubmitResponse:
    mode: FormMode = registry.get(form_id).mode
    saved = await registry.submit(form_id, client)
    if mode == FormMode.CREATE:
        response.status_code = status.HTTP_201_CREATED
    return FormSubmitResponse(mode=mode, property=saved)


@router.delete(
    "/{form_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Discard a form",
    responses=get_form_error_responses()
)
async def discard_form(
    form_id: str = Path(..., description="Form session ID"),
    registry: FormSessionRegistry = Depends(get_form_registry)
) -> None:
    registry.discard(form_id)
