from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import PlainTextResponse
import logging
import redis

from resume_tailor.models.report import MatchReport
from resume_tailor.models.requests import AtsScoreRequest, LexicalScoreRequest
from resume_tailor.services.cache import ArtifactStore, get_artifact_store
from resume_tailor.services.config import settings
from resume_tailor.services.generator import ResumeTailorGenerator, get_generator
from resume_tailor.services.report_text import REPORT_FILENAME, render_report
from resume_tailor.services.scorer import score_match
from resume_tailor.utils.limiter import limiter

logger = logging.getLogger("uvicorn.error")

router = APIRouter(
    prefix="/ats",
    tags=["ATS Scoring"]
)


# POST: local keyword match, no LLM involved
@router.post("/lexical", response_model=MatchReport)
def lexical_score(payload: LexicalScoreRequest):
    report = score_match(payload.resumeText, payload.jobDescription)
    logger.info(f"Lexical ATS score computed: {report.score} ({len(report.matched_keywords)}/{report.job_keyword_count} keywords)")
    return report


# POST: same report as a downloadable text file
@router.post("/lexical/report", response_class=PlainTextResponse)
def lexical_report(payload: LexicalScoreRequest):
    report = score_match(payload.resumeText, payload.jobDescription)
    return PlainTextResponse(
        render_report(report),
        headers={"Content-Disposition": f'attachment; filename="{REPORT_FILENAME}"'},
    )


# POST: LLM-generated ATS report, cached for later retrieval
@router.post("/score", response_model=dict)
@limiter.limit(settings.GENERATION_RATE_LIMIT)
async def ats_score(
    request: Request,
    payload: AtsScoreRequest,
    generator: ResumeTailorGenerator = Depends(get_generator),
    store: ArtifactStore = Depends(get_artifact_store),
):
    if not payload.jobDescription.strip():
        raise HTTPException(status_code=400, detail="Job description is required")
    resume_data = payload.resumeData
    if not (resume_data.strip() if isinstance(resume_data, str) else resume_data):
        raise HTTPException(status_code=400, detail="Resume data is required")

    logger.info("Start ATS report generation")
    ats_report = await generator.generate_ats_report(payload.jobDescription, resume_data)

    try:
        report_id = store.save("ats_report", ats_report)
    except redis.RedisError as e:
        logger.warning(f"Could not cache ATS report: {repr(e)}")
        return {"atsReport": ats_report, "success": True, "warning": "ATS report generated but not saved"}

    return {"atsReport": ats_report, "id": report_id, "success": True}
