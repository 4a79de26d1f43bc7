# jobboard/api/v1/applications.py

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from jobboard.db.database import get_db
from jobboard.schemas.application import ApplicationResponse, ApplicationStatusUpdate
from jobboard.security.dependencies import get_current_actor
from jobboard.security.policy import Actor
from jobboard.services import applications as application_service
from jobboard.storage.resumes import ResumeStore, get_resume_store

router = APIRouter(prefix="/applications", tags=["applications"])


@router.post(
    "/apply/{job_id}",
    response_model=ApplicationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def apply_endpoint(
    job_id: int,
    resume: Optional[UploadFile] = File(None),
    cover_letter: Optional[str] = Form(None, alias="coverLetter"),
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
    store: ResumeStore = Depends(get_resume_store),
):
    """Apply to a job with a PDF/DOC/DOCX resume of at most 5 MB."""
    content = b""
    content_type = None
    filename = None
    if resume is not None:
        # One byte past the limit is enough to reject an oversized file.
        content = await resume.read(store.max_size + 1)
        content_type = resume.content_type
        filename = resume.filename

    return await application_service.apply_to_job(
        db, store, actor, job_id, content, content_type, filename, cover_letter
    )


@router.get("/my-applications", response_model=List[ApplicationResponse])
def my_applications_endpoint(
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return application_service.list_for_applicant(db, actor)


@router.get("/company-applications", response_model=List[ApplicationResponse])
def company_applications_endpoint(
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    """Applications received on the current company's jobs."""
    return application_service.list_for_company(db, actor)


@router.put("/{application_id}/status", response_model=ApplicationResponse)
def update_status_endpoint(
    application_id: int,
    data: ApplicationStatusUpdate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return application_service.set_status(db, actor, application_id, data.status)


@router.get("/{application_id}/resume")
def download_resume_endpoint(
    application_id: int,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
    store: ResumeStore = Depends(get_resume_store),
):
    """Download the resume. Open to the applicant and to the company that owns the job."""
    path, filename = application_service.get_resume_file(db, store, actor, application_id)
    return FileResponse(path, filename=filename)
