# app/schemas/sections.py
"""
Wire shapes of the four wizard sections.

Every field is optional: the wizard saves whatever the candidate has filled
in and completeness is judged later from what was stored. Blank strings are
treated as "not provided" and are not stored.
"""
from datetime import date
from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models.applicant import PaymentStatus


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and value.strip() == "":
        return None
    return value


class Gender(str, Enum):
    male = "male"
    female = "female"
    other = "other"


class MaritalStatus(str, Enum):
    single = "single"
    married = "married"
    divorced = "divorced"
    widowed = "widowed"


class Category(str, Enum):
    general = "general"
    obc = "obc"
    sc = "sc"
    st = "st"
    ews = "ews"


OptionalStr = Annotated[Optional[str], BeforeValidator(_blank_to_none)]
OptionalGender = Annotated[Optional[Gender], BeforeValidator(_blank_to_none)]
OptionalMaritalStatus = Annotated[Optional[MaritalStatus], BeforeValidator(_blank_to_none)]
OptionalCategory = Annotated[Optional[Category], BeforeValidator(_blank_to_none)]
OptionalDate = Annotated[Optional[date], BeforeValidator(_blank_to_none)]
OptionalFloat = Annotated[Optional[float], BeforeValidator(_blank_to_none)]
OptionalInt = Annotated[Optional[int], BeforeValidator(_blank_to_none)]


class SectionModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def stored(self) -> dict:
        """JSON-ready dict with camelCase keys, omitting fields that were not provided."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# -------------------- CANDIDATE --------------------
class PersonalDetails(SectionModel):
    father_name: OptionalStr = None
    mother_name: OptionalStr = None
    gender: OptionalGender = None
    marital_status: OptionalMaritalStatus = None
    nationality: OptionalStr = None
    religion: OptionalStr = None
    category: OptionalCategory = None


class BenchmarkDisability(SectionModel):
    is_disabled: bool = False
    disability_type: OptionalStr = None
    disability_percentage: OptionalFloat = None
    certificate_number: OptionalStr = None


class ExServicemen(SectionModel):
    is_ex_servicemen: bool = False
    service_number: OptionalStr = None
    rank: OptionalStr = None
    unit: OptionalStr = None
    service_from: OptionalDate = None
    service_to: OptionalDate = None
    discharge_type: OptionalStr = None


class EmployeeDetails(SectionModel):
    employee_id: OptionalStr = None
    department: OptionalStr = None
    designation: OptionalStr = None
    joining_date: OptionalDate = None
    current_salary: OptionalFloat = None
    work_location: OptionalStr = None


class WclDetails(SectionModel):
    wcl_employee_id: OptionalStr = None
    wcl_department: OptionalStr = None
    wcl_designation: OptionalStr = None
    wcl_joining_date: OptionalDate = None
    wcl_work_location: OptionalStr = None


class Address(SectionModel):
    address_line1: OptionalStr = None
    address_line2: OptionalStr = None
    country: OptionalStr = None
    state: OptionalStr = None
    city_district: OptionalStr = None
    post_office: OptionalStr = None
    pincode: OptionalStr = None
    police_station: OptionalStr = None
    nearest_railway_station: OptionalStr = None


class CorrespondenceAddress(Address):
    country: OptionalStr = "India"


class PermanentAddress(Address):
    same_as_correspondence: bool = False


class DobDetails(SectionModel):
    date_of_birth: OptionalDate = None
    calculated_age: OptionalInt = None


class CandidateDetails(SectionModel):
    personal_details: PersonalDetails = Field(default_factory=PersonalDetails)
    benchmark_disability: BenchmarkDisability = Field(default_factory=BenchmarkDisability)
    ex_servicemen: ExServicemen = Field(default_factory=ExServicemen)
    employee_details: EmployeeDetails = Field(default_factory=EmployeeDetails)
    wcl_details: WclDetails = Field(default_factory=WclDetails)
    correspondence_address: CorrespondenceAddress = Field(default_factory=CorrespondenceAddress)
    permanent_address: PermanentAddress = Field(default_factory=PermanentAddress)
    dob_details: DobDetails = Field(default_factory=DobDetails)


# -------------------- QUALIFICATION --------------------
class Matriculation(SectionModel):
    board_name: OptionalStr = None
    year_of_passing: OptionalStr = None
    roll_number: OptionalStr = None
    percentage: OptionalStr = None
    subjects: OptionalStr = None


class Intermediate(Matriculation):
    stream: OptionalStr = None


class Iti(SectionModel):
    institute_name: OptionalStr = None
    year_of_passing: OptionalStr = None
    roll_number: OptionalStr = None
    percentage: OptionalStr = None
    trade: OptionalStr = None
    duration: OptionalStr = None


class ExamCityPreference(SectionModel):
    city1: OptionalStr = None
    city2: OptionalStr = None
    city3: OptionalStr = None


class QualificationDetails(SectionModel):
    matriculation: Matriculation = Field(default_factory=Matriculation)
    intermediate: Intermediate = Field(default_factory=Intermediate)
    iti: Iti = Field(default_factory=Iti)
    exam_city_preference: ExamCityPreference = Field(default_factory=ExamCityPreference)


# -------------------- DOCUMENTS --------------------
class DocumentFile(SectionModel):
    data: str = Field(..., min_length=1)
    name: Optional[str] = None
    type: Optional[str] = None


# -------------------- PAYMENT --------------------
class PaymentSubmission(SectionModel):
    utr_number: str = Field(..., min_length=1, max_length=50)


class PaymentStatusUpdate(SectionModel):
    status: PaymentStatus
    admin_remarks: Optional[str] = Field(default=None, max_length=500)
