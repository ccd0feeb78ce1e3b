"""
Submission schemas: tech transfers, awards, engagements, modalities, impact assessments

Update schemas forbid unknown fields, so review status and remarks can only
change through the review endpoints.
"""
from datetime import date
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.models.mixins import ReviewStatus
from app.models.tech_transfer import Copyright
from app.schemas.common import TimestampedOut
from app.schemas.user import UserRef

_UPDATE_CONFIG = ConfigDict(extra="forbid", use_enum_values=True)


class _DateRange(BaseModel):
    @model_validator(mode="after")
    def end_after_start(self):
        start = getattr(self, "start_date", None)
        end = getattr(self, "end_date", None)
        if start is not None and end is not None and end < start:
            raise ValueError("end_date must not be before start_date")
        return self


class SubmissionOut(TimestampedOut):
    """Fields shared by every submission"""
    id: int
    owner_id: int
    owner: Optional[UserRef] = None
    status: ReviewStatus
    remarks: Optional[str] = None
    is_archived: bool


# Tech transfers

class TechTransferCreate(_DateRange):
    college_id: Optional[int] = None
    name: str = Field(..., min_length=1, max_length=255)
    description: str
    category: str = Field(..., max_length=255)
    purpose: str = Field(..., max_length=255)
    start_date: date
    end_date: date
    tags: str = Field(..., max_length=255)
    leader: str = Field(..., max_length=255)
    deliverables: Optional[str] = Field(None, max_length=255)
    agency_partner: str = Field(..., max_length=255)
    contact_person: str = Field(..., max_length=255)
    contact_email: Optional[str] = Field(None, max_length=255)
    contact_phone: Optional[str] = Field(None, max_length=255)
    contact_address: Optional[str] = Field(None, max_length=255)
    copyright: Copyright = Copyright.NO
    ip_details: Optional[str] = None
    attachment_paths: Optional[List[str]] = None
    attachment_link: Optional[str] = Field(None, max_length=255)

    model_config = ConfigDict(use_enum_values=True)


class TechTransferUpdate(_DateRange):
    college_id: Optional[int] = None
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=255)
    purpose: Optional[str] = Field(None, max_length=255)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    tags: Optional[str] = Field(None, max_length=255)
    leader: Optional[str] = Field(None, max_length=255)
    deliverables: Optional[str] = Field(None, max_length=255)
    agency_partner: Optional[str] = Field(None, max_length=255)
    contact_person: Optional[str] = Field(None, max_length=255)
    contact_email: Optional[str] = Field(None, max_length=255)
    contact_phone: Optional[str] = Field(None, max_length=255)
    contact_address: Optional[str] = Field(None, max_length=255)
    copyright: Optional[Copyright] = None
    ip_details: Optional[str] = None
    attachment_paths: Optional[List[str]] = None
    attachment_link: Optional[str] = Field(None, max_length=255)

    model_config = _UPDATE_CONFIG


class TechTransferOut(SubmissionOut):
    college_id: Optional[int] = None
    name: str
    description: str
    category: str
    purpose: str
    start_date: date
    end_date: date
    tags: str
    leader: str
    deliverables: Optional[str] = None
    agency_partner: str
    contact_person: str
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_address: Optional[str] = None
    copyright: str
    ip_details: Optional[str] = None
    attachment_paths: Optional[List[str]] = None
    attachment_link: Optional[str] = None


# Awards

class AwardCreate(BaseModel):
    college_id: Optional[int] = None
    award_name: str = Field(..., min_length=1, max_length=255)
    description: str
    date_received: date
    event_details: str
    location: str = Field(..., max_length=255)
    awarding_body: str = Field(..., max_length=255)
    people_involved: str = Field(..., max_length=255)
    attachment_paths: Optional[List[str]] = None
    attachment_link: Optional[str] = Field(None, max_length=255)


class AwardUpdate(BaseModel):
    college_id: Optional[int] = None
    award_name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    date_received: Optional[date] = None
    event_details: Optional[str] = None
    location: Optional[str] = Field(None, max_length=255)
    awarding_body: Optional[str] = Field(None, max_length=255)
    people_involved: Optional[str] = Field(None, max_length=255)
    attachment_paths: Optional[List[str]] = None
    attachment_link: Optional[str] = Field(None, max_length=255)

    model_config = _UPDATE_CONFIG


class AwardOut(SubmissionOut):
    college_id: Optional[int] = None
    award_name: str
    description: str
    date_received: date
    event_details: str
    location: str
    awarding_body: str
    people_involved: str
    attachment_paths: Optional[List[str]] = None
    attachment_link: Optional[str] = None


# Engagements

class EngagementCreate(_DateRange):
    college_id: Optional[int] = None
    agency_partner: str = Field(..., max_length=255)
    location: str = Field(..., max_length=255)
    activity_conducted: str = Field(..., max_length=255)
    start_date: date
    end_date: date
    number_of_participants: int = Field(0, ge=0)
    faculty_involved: str = Field(..., max_length=255)
    narrative: str
    attachment_paths: Optional[List[str]] = None
    attachment_link: Optional[str] = Field(None, max_length=255)


class EngagementUpdate(_DateRange):
    college_id: Optional[int] = None
    agency_partner: Optional[str] = Field(None, max_length=255)
    location: Optional[str] = Field(None, max_length=255)
    activity_conducted: Optional[str] = Field(None, max_length=255)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    number_of_participants: Optional[int] = Field(None, ge=0)
    faculty_involved: Optional[str] = Field(None, max_length=255)
    narrative: Optional[str] = None
    attachment_paths: Optional[List[str]] = None
    attachment_link: Optional[str] = Field(None, max_length=255)

    model_config = _UPDATE_CONFIG


class EngagementOut(SubmissionOut):
    college_id: Optional[int] = None
    agency_partner: str
    location: str
    activity_conducted: str
    start_date: date
    end_date: date
    number_of_participants: int
    faculty_involved: str
    narrative: str
    attachment_paths: Optional[List[str]] = None
    attachment_link: Optional[str] = None


# Modalities

class ModalityCreate(BaseModel):
    tech_transfer_id: int
    modality: str = Field(..., min_length=1, max_length=255)
    tv_channel: Optional[str] = Field(None, max_length=255)
    radio: Optional[str] = Field(None, max_length=255)
    online_link: Optional[str] = Field(None, max_length=255)
    time_air: Optional[str] = Field(None, max_length=255)
    period: Optional[str] = Field(None, max_length=255)
    partner_agency: Optional[str] = Field(None, max_length=255)
    hosted_by: Optional[str] = Field(None, max_length=255)


class ModalityUpdate(BaseModel):
    tech_transfer_id: Optional[int] = None
    modality: Optional[str] = Field(None, min_length=1, max_length=255)
    tv_channel: Optional[str] = Field(None, max_length=255)
    radio: Optional[str] = Field(None, max_length=255)
    online_link: Optional[str] = Field(None, max_length=255)
    time_air: Optional[str] = Field(None, max_length=255)
    period: Optional[str] = Field(None, max_length=255)
    partner_agency: Optional[str] = Field(None, max_length=255)
    hosted_by: Optional[str] = Field(None, max_length=255)

    model_config = _UPDATE_CONFIG


class ModalityOut(SubmissionOut):
    tech_transfer_id: int
    modality: str
    tv_channel: Optional[str] = None
    radio: Optional[str] = None
    online_link: Optional[str] = None
    time_air: Optional[str] = None
    period: Optional[str] = None
    partner_agency: Optional[str] = None
    hosted_by: Optional[str] = None


# Impact assessments

class ImpactAssessmentCreate(BaseModel):
    tech_transfer_id: int
    beneficiary: str = Field(..., min_length=1, max_length=255)
    geographic_coverage: str = Field(..., max_length=255)
    num_direct_beneficiary: int = Field(0, ge=0)
    num_indirect_beneficiary: int = Field(0, ge=0)


class ImpactAssessmentUpdate(BaseModel):
    tech_transfer_id: Optional[int] = None
    beneficiary: Optional[str] = Field(None, min_length=1, max_length=255)
    geographic_coverage: Optional[str] = Field(None, max_length=255)
    num_direct_beneficiary: Optional[int] = Field(None, ge=0)
    num_indirect_beneficiary: Optional[int] = Field(None, ge=0)

    model_config = _UPDATE_CONFIG


class ImpactAssessmentOut(SubmissionOut):
    tech_transfer_id: int
    beneficiary: str
    geographic_coverage: str
    num_direct_beneficiary: int
    num_indirect_beneficiary: int


class SubmissionStats(BaseModel):
    total: int
    pending: int
    approved: int
    rejected: int


class ReviewRequest(BaseModel):
    """Review decision; status is validated by the review service"""
    status: str = Field(..., description="approved or rejected")
    remarks: Optional[str] = Field(None, max_length=500)


class PendingSubmission(BaseModel):
    type: str
    id: int
    owner: Optional[UserRef] = None
    title: Optional[str] = None
    created_at: Optional[str] = None


class PendingSubmissionsResponse(BaseModel):
    items: List[PendingSubmission]
    counts: Dict[str, int]
    total: int
