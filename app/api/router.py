"""
Main API router
"""
from fastapi import APIRouter

from app.api.v1 import (
    health,
    version,
    auth,
    users,
    campuses,
    colleges,
    submissions,
    resolutions,
    reviews,
    audit_logs,
    reports,
    dashboard,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(version.router, tags=["version"])
api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(campuses.router, prefix="/campuses", tags=["campuses"])
api_router.include_router(colleges.router, prefix="/colleges", tags=["colleges"])
api_router.include_router(submissions.tech_transfers, prefix="/tech-transfers", tags=["tech-transfers"])
api_router.include_router(submissions.awards, prefix="/awards", tags=["awards"])
api_router.include_router(submissions.engagements, prefix="/engagements", tags=["engagements"])
api_router.include_router(submissions.modalities, prefix="/modalities", tags=["modalities"])
api_router.include_router(
    submissions.impact_assessments, prefix="/impact-assessments", tags=["impact-assessments"]
)
api_router.include_router(resolutions.router, prefix="/resolutions", tags=["resolutions"])
api_router.include_router(reviews.router, prefix="/reviews", tags=["reviews"])
api_router.include_router(audit_logs.router, prefix="/audit-logs", tags=["audit-logs"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
