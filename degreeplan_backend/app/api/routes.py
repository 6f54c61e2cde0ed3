from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.core.errors import InputValidationError
from app.schemas.course import CourseCreateRequest, CourseInfoResponse, CourseResponse
from app.schemas.plan import (
    PlanExportRequest,
    PlanGenerateRequest,
    PlanGenerateResponse,
    PlanReviewRequest,
    PlanReviewResponse,
)
from app.schemas.prerequisite import PrerequisiteCreateRequest, PrerequisiteResponse
from app.services.catalog import (
    CachedCatalogResolver,
    DatabaseCatalogResolver,
    HttpCatalogResolver,
    resolve_many,
)
from app.services.courses import bulk_upsert_courses
from app.services.export import render_export
from app.services.plan_review import review_plan
from app.services.planner import generate_graduation_plan, plan_to_response
from app.services.prerequisites import bulk_create_prereqs

router = APIRouter(prefix="/api")


def get_catalog_resolver(request: Request, db: Session = Depends(get_db)):
    if settings.catalog_source == "http":
        upstream = HttpCatalogResolver(
            settings.catalog_api_url,
            session=request.app.state.http_session,
            timeout=settings.catalog_timeout_seconds,
            default_credits=settings.stub_credits,
        )
        return CachedCatalogResolver(upstream, request.app.state.catalog_cache)
    return DatabaseCatalogResolver(db, default_credits=settings.stub_credits)


@router.post("/plans/generate", response_model=PlanGenerateResponse)
def generate_plan_endpoint(
    payload: PlanGenerateRequest,
    resolver=Depends(get_catalog_resolver),
):
    try:
        plan = generate_graduation_plan(
            payload,
            resolver,
            stub_credits=settings.stub_credits,
            full_time_credits=settings.full_time_credits,
            max_workers=settings.catalog_max_workers,
            lookup_timeout=settings.catalog_timeout_seconds,
        )
    except InputValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return plan_to_response(plan)


@router.post("/plans/export")
def export_plan_endpoint(payload: PlanExportRequest):
    try:
        result = render_export(
            payload.plan,
            payload.format,
            include_details=payload.include_details,
            majors=payload.majors,
            minors=payload.minors,
        )
    except InputValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return Response(
        content=result.body,
        media_type=result.media_type,
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )


@router.post("/plans/validate", response_model=PlanReviewResponse)
def validate_plan_endpoint(payload: PlanReviewRequest):
    review = review_plan(
        payload.plan,
        completed_ids=[c.course_id for c in payload.completed_courses],
        heavy_load_credits=settings.heavy_load_credits,
        full_time_credits=settings.full_time_credits,
        graduation_credits=settings.graduation_credits,
    )
    return PlanReviewResponse(
        is_valid=review.is_valid,
        errors=review.errors,
        warnings=review.warnings,
        suggestions=review.suggestions,
    )


# ── Catalog ───────────────────────────────────────────────────────────────────

@router.get("/courses/{course_id}", response_model=CourseInfoResponse)
def get_course_endpoint(course_id: str, resolver=Depends(get_catalog_resolver)):
    record = resolve_many(
        resolver,
        [course_id],
        max_workers=1,
        timeout=settings.catalog_timeout_seconds,
        stub_credits=settings.stub_credits,
    )[course_id]
    return CourseInfoResponse(
        course_id=record.course_id,
        name=record.name,
        credits=record.credits,
        prerequisites=sorted(record.prerequisites),
        corequisites=sorted(record.corequisites),
        is_stub=record.is_stub,
    )


@router.post("/courses", response_model=list[CourseResponse])
def bulk_create_courses_endpoint(
    payload: CourseCreateRequest,
    db: Session = Depends(get_db),
):
    return bulk_upsert_courses(db, payload.courses)


@router.post("/prerequisites", response_model=list[PrerequisiteResponse])
def bulk_create_prereqs_endpoint(
    payload: PrerequisiteCreateRequest,
    db: Session = Depends(get_db),
):
    return bulk_create_prereqs(db, payload.prerequisites)
