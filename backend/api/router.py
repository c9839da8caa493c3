from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_active_policy, get_reasoning_engine
from config import settings
from models.requests import QuickAnalyzeRequest
from models.responses import AlignmentResponse, PolicyResponse
from models.schemas.input_data import InputData, ResumeImage
from services.alignment_analyzer import AlignmentAnalyzer
from services.alignment_policy import AlignmentPolicy
from services.engine import BaseReasoningEngine
from services.errors import InputValidationError, SchemaError, TransportError
from services import input_capture, report_view

router = APIRouter()
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def _check_text_length(*texts: str) -> None:
    if any(len(text) > settings.max_text_chars for text in texts):
        raise HTTPException(
            status_code=400,
            detail=f"Text too long (max {settings.max_text_chars} chars)",
        )


async def _run_analysis(
    data: InputData,
    engine: BaseReasoningEngine,
    policy: AlignmentPolicy,
) -> AlignmentResponse:
    try:
        result = await AlignmentAnalyzer(engine, policy=policy).analyze(data)
    except InputValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except (TransportError, SchemaError) as e:
        raise HTTPException(status_code=502, detail=e.message)

    return AlignmentResponse(
        policy_version=policy.version,
        result=result,
        report=report_view.build_report_view(result, policy),
    )


@router.get("/health")
async def health(
    engine: BaseReasoningEngine = Depends(get_reasoning_engine),
    policy: AlignmentPolicy = Depends(get_active_policy),
):
    return {
        "status": "ok",
        "engine": engine.name,
        "gemini_configured": engine.is_configured,
        "model": settings.gemini_model,
        "policy_version": policy.version,
    }


@router.get("/policy", response_model=PolicyResponse)
async def policy_info(policy: AlignmentPolicy = Depends(get_active_policy)):
    return PolicyResponse(
        name=policy.name,
        version=policy.version,
        rubric={item.label: item.points for item in policy.rubric},
        nice_to_have_points=policy.nice_to_have_points,
        nice_to_have_max=policy.nice_to_have_max,
        penalty_caps=policy.cap_table(),
        system_instruction=policy.system_instruction,
    )


@router.post("/analyze", response_model=AlignmentResponse)
@limiter.limit(settings.rate_limit)
async def analyze(
    request: Request,
    job_description: str = Form(""),
    resume_text: str = Form(""),
    resume_image: UploadFile | None = File(None),
    engine: BaseReasoningEngine = Depends(get_reasoning_engine),
    policy: AlignmentPolicy = Depends(get_active_policy),
):
    _check_text_length(job_description, resume_text)

    image: ResumeImage | None = None
    if resume_image is not None and resume_image.filename:
        # Read and validate size
        content = await resume_image.read()
        max_bytes = settings.max_upload_size_mb * 1024 * 1024
        if len(content) > max_bytes:
            raise HTTPException(
                status_code=400,
                detail=f"File too large. Max size: {settings.max_upload_size_mb}MB",
            )
        try:
            image = input_capture.encode_image(content, resume_image.content_type or "")
        except InputValidationError as e:
            raise HTTPException(status_code=400, detail=e.message)

    data = InputData(job_description=job_description, resume_text=resume_text, resume_image=image)
    return await _run_analysis(data, engine, policy)


@router.post("/analyze/quick", response_model=AlignmentResponse)
@limiter.limit(settings.rate_limit)
async def analyze_quick(
    request: Request,
    body: QuickAnalyzeRequest,
    engine: BaseReasoningEngine = Depends(get_reasoning_engine),
    policy: AlignmentPolicy = Depends(get_active_policy),
):
    _check_text_length(body.job_description, body.resume_text)

    image: ResumeImage | None = None
    try:
        if body.resume_image_data_url:
            image = input_capture.decode_data_url(body.resume_image_data_url)
        elif body.resume_image_base64:
            image = input_capture.image_from_base64(
                body.resume_image_base64, body.resume_image_mime_type or ""
            )
    except InputValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)

    data = InputData(
        job_description=body.job_description,
        resume_text=body.resume_text,
        resume_image=image,
    )
    return await _run_analysis(data, engine, policy)
