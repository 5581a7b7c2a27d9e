"""
Public forms router
Contact form relay and creator applications
"""
from fastapi import APIRouter, Depends, HTTPException, status, UploadFile, File, Form
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import logging

from atlantic_cms.database import get_async_session
from atlantic_cms.apps.forms.models import CreatorApplication
from atlantic_cms.apps.forms.schemas import (
    ContactFormRequest,
    CreatorApplicationForm,
    CreatorApplicationResponse,
    FormSubmissionResponse,
)
from atlantic_cms.apps.forms.services.form_relay_service import FormRelayError, FormRelayService, get_form_relay_service
from atlantic_cms.apps.forms.services.notification_service import CreatorNotificationService, get_notification_service
from atlantic_cms.apps.uploads.services.storage_service import SupabaseStorageService, get_storage_service
from atlantic_cms.apps.uploads.services.upload_pipeline import UploadFailed, upload_for_call_site
from atlantic_cms.apps.uploads.utils.errors import upload_http_error
from atlantic_cms.apps.uploads.utils.validation import CallSite, UploadFolder, UploadRejected, validate_for_call_site

logger = logging.getLogger(__name__)

router = APIRouter()

APPLICATION_FOLDER = UploadFolder.APPLICATIONS.value
MAX_APPLICATION_FILES = 5


@router.post("/contact", response_model=FormSubmissionResponse, status_code=status.HTTP_200_OK)
async def submit_contact_form(
    request: ContactFormRequest,
    relay: FormRelayService = Depends(get_form_relay_service),
):
    """
    Relay a contact form submission to the form service
    """
    try:
        await relay.submit(request.model_dump())
    except FormRelayError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to send message. {str(e)}"
        )

    return FormSubmissionResponse(
        success=True,
        message="Thank you for reaching out. We'll get back to you within 24 hours.",
    )


@router.post("/creator-applications", response_model=CreatorApplicationResponse, status_code=status.HTTP_201_CREATED)
async def submit_creator_application(
    name: str = Form(...),
    email: str = Form(...),
    role: str = Form(...),
    location: str = Form(...),
    experience: str = Form(...),
    portfolio_link: Optional[str] = Form(None),
    files: List[UploadFile] = File(default=[]),
    session: AsyncSession = Depends(get_async_session),
    storage: SupabaseStorageService = Depends(get_storage_service),
    notifier: CreatorNotificationService = Depends(get_notification_service),
):
    """
    Store a creator application with its work samples, then notify the team.

    The notification is best-effort: the applicant gets a success response
    even when it fails.
    """
    try:
        application = CreatorApplicationForm(
            name=name,
            email=email,
            role=role,
            location=location,
            experience=experience,
            portfolio_link=portfolio_link,
        )
    except ValidationError as e:
        raise RequestValidationError(e.errors())

    if len(files) > MAX_APPLICATION_FILES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"You can attach at most {MAX_APPLICATION_FILES} files"
        )

    contents = []
    try:
        for file in files:
            content = await file.read()
            validate_for_call_site(file.content_type, len(content), CallSite.CREATOR_APPLICATION)
            contents.append((file, content))

        file_urls = []
        for file, content in contents:
            uploaded = await upload_for_call_site(
                storage, content, file.filename, file.content_type, APPLICATION_FOLDER, CallSite.CREATOR_APPLICATION
            )
            file_urls.append(uploaded.url)
    except (UploadRejected, UploadFailed) as e:
        logger.warning(f"Creator application upload refused for {application.email}: {e}")
        raise upload_http_error(e)

    try:
        row = CreatorApplication(
            name=application.name,
            email=application.email,
            role=application.role,
            location=application.location,
            portfolio_link=application.portfolio_link,
            experience=application.experience,
            file_urls=file_urls,
        )
        session.add(row)
        await session.commit()
        await session.refresh(row)
    except Exception as e:
        await session.rollback()
        logger.error(f"Error saving creator application: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while submitting the form."
        )

    logger.info(f"Creator application stored: {row.id} ({row.role}, {len(file_urls)} files)")

    await notifier.notify({
        "name": row.name,
        "email": row.email,
        "role": row.role,
        "location": row.location,
        "portfolio_link": row.portfolio_link,
        "experience": row.experience,
        "file_urls": file_urls,
    })

    return row
