from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
import logging
import redis

from resume_tailor.models.job import ParsedJobDescription
from resume_tailor.models.requests import (
    CoverLetterRequest,
    JobDescriptionParseRequest,
    ResumeProfileParseRequest,
    TailorResumeRequest,
)
from resume_tailor.services.cache import ArtifactStore, get_artifact_store
from resume_tailor.services.config import settings
from resume_tailor.services.generator import ResumeTailorGenerator, get_generator
from resume_tailor.utils.limiter import limiter

logger = logging.getLogger("uvicorn.error")

router = APIRouter(tags=["Generation"])


def _save_or_warn(store: ArtifactStore, kind: str, payload, body: dict) -> dict:
    try:
        body["id"] = store.save(kind, payload)
    except redis.RedisError as e:
        logger.warning(f"Could not cache {kind}: {repr(e)}")
        body["warning"] = f"{kind.replace('_', ' ').capitalize()} generated but not saved"
    return body


def _is_blank_job(job_description) -> bool:
    if isinstance(job_description, ParsedJobDescription):
        # the default title alone does not count
        values = job_description.model_dump(exclude_defaults=True).values()
        return not any(v.strip() if isinstance(v, str) else v for v in values)
    return not job_description.strip()


def _check_length(field: str, text: str):
    if not text.strip():
        raise HTTPException(status_code=400, detail=f"Invalid input: {field} cannot be empty")
    if len(text) > settings.MAX_JOB_DESCRIPTION_CHARS:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid input: {field} is too long (max {settings.MAX_JOB_DESCRIPTION_CHARS:,} characters)",
        )


# POST: structured fields from a pasted job description
@router.post("/job-description/parse", response_model=ParsedJobDescription)
@limiter.limit(settings.GENERATION_RATE_LIMIT)
async def parse_job_description(
    request: Request,
    payload: JobDescriptionParseRequest,
    generator: ResumeTailorGenerator = Depends(get_generator),
):
    _check_length("rawText", payload.rawText)

    logger.info(f"Parsing job description ({len(payload.rawText)} characters)")
    return await generator.parse_job_description(payload.rawText, payload.options)


# POST: profile fields from extracted resume text
@router.post("/resume/parse-profile", response_model=dict)
@limiter.limit(settings.GENERATION_RATE_LIMIT)
async def parse_resume_profile(
    request: Request,
    payload: ResumeProfileParseRequest,
    generator: ResumeTailorGenerator = Depends(get_generator),
):
    _check_length("parsedResumeData", payload.parsedResumeData)

    logger.info(f"Parsing resume into profile ({len(payload.parsedResumeData)} characters)")
    profile = await generator.parse_resume_to_profile(payload.parsedResumeData, payload.options)
    return {"profile": profile.model_dump()}


# POST: tailored resume JSON from a profile and a job description
@router.post("/resume/tailor", response_model=dict)
@limiter.limit(settings.GENERATION_RATE_LIMIT)
async def tailor_resume(
    request: Request,
    payload: TailorResumeRequest,
    generator: ResumeTailorGenerator = Depends(get_generator),
    store: ArtifactStore = Depends(get_artifact_store),
):
    if _is_blank_job(payload.jobDescription):
        raise HTTPException(status_code=400, detail="Invalid or missing job description")

    logger.info("Start resume tailoring")
    resume = await generator.tailor_resume(payload.jobDescription, payload.profile)
    ats_score = ResumeTailorGenerator.estimate_ats_score(resume, payload.jobDescription)
    return _save_or_warn(store, "tailored_resume", resume, {"resume": resume, "atsScore": ats_score, "success": True})


# POST: cover letter text
@router.post("/cover-letter", response_model=dict)
@limiter.limit(settings.GENERATION_RATE_LIMIT)
async def cover_letter(
    request: Request,
    payload: CoverLetterRequest,
    generator: ResumeTailorGenerator = Depends(get_generator),
    store: ArtifactStore = Depends(get_artifact_store),
):
    if not payload.jobDescription.strip():
        raise HTTPException(status_code=400, detail="Job description is required")
    if not payload.resumeData:
        raise HTTPException(status_code=400, detail="Resume data is required")

    letter = await generator.generate_cover_letter(payload.jobDescription, payload.resumeData, payload.tone)
    return _save_or_warn(store, "cover_letter", letter, {"coverLetter": letter, "success": True})


# POST: plain text from an uploaded PDF resume
@router.post("/pdf/extract", response_model=dict)
async def extract_pdf(pdf: UploadFile = File(...)):
    if pdf.content_type != "application/pdf":
        raise HTTPException(status_code=400, detail="File must be a PDF")

    pdf_bytes = await pdf.read()
    logger.info(f"PDF received: {len(pdf_bytes)} bytes, filename={pdf.filename}")

    try:
        text, num_pages = await run_in_threadpool(ResumeTailorGenerator.extract_text_from_pdf, pdf_bytes)
    except ValueError as e:
        raise HTTPException(status_code=500, detail=f"Failed to extract text from PDF: {e}")

    logger.info(f"PDF processed successfully, text length: {len(text)}")
    return {"text": text, "numPages": num_pages, "fileName": pdf.filename}


# GET: previously generated artifact by ID
@router.get("/artifacts/{artifact_id}", response_model=dict)
def get_artifact(artifact_id: str, store: ArtifactStore = Depends(get_artifact_store)):
    try:
        artifact = store.get(artifact_id)
    except redis.RedisError as e:
        logger.exception("Error retrieving artifact")
        raise HTTPException(status_code=503, detail=f"Artifact storage unavailable: {repr(e)}")

    if artifact is None:
        logger.warning(f"Artifact not found or expired: {artifact_id}")
        raise HTTPException(status_code=404, detail="Artifact not found or expired.")
    return {"id": artifact_id, **artifact}
