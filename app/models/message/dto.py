from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models.message.tree import MessageTree

TAXPAYER_NUMBER_LENGTH = 13


class OperationKind(str, Enum):
    LIST_ASSESSMENTS = "Lv01-BLJ"
    GET_ASSESSMENT = "Lv01-OPO"
    CREATE_OBJECTION = "Lk01-BGB"
    UNRECOGNIZED = "unrecognized"


class MessageVariant(str, Enum):
    REQUEST = "ns2:vraagBericht"
    NOTIFICATION = "ns2:kennisgevingsBericht"


class MessageHeader(BaseModel):
    berichtsoort: str | None = None
    entiteittype: str | None = None
    referentienummer: str | None = None
    tijdstip_bericht: str | None = None


class MessageEnvelope(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    variant: MessageVariant
    header: MessageHeader
    body: MessageTree


class AssessmentFilter(BaseModel):
    citizen_id: str | None = None
    assessment_number: str | None = None
    assessment_sequence_number: str | None = None
    tax_years: List[str] | None = None

    def to_search_filter(self) -> Dict[str, Any]:
        search_filter: Dict[str, Any] = {}
        if self.citizen_id is not None:
            search_filter["taxpayer.citizenId"] = self.citizen_id
        if self.assessment_number is not None:
            search_filter["assessmentNumber"] = self.assessment_number
        if self.assessment_sequence_number is not None:
            search_filter["assessmentSequenceNumber"] = self.assessment_sequence_number
        if self.tax_years is not None:
            search_filter["taxYear"] = list(self.tax_years)
        return search_filter


class ExtraElement(BaseModel):
    name: str
    value: str


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Attachment(CamelModel):
    file_name: str | None = None
    file_type: str | None = None
    file_content: str | None = None


class Grievance(CamelModel):
    kind: str
    explanation: str = ""


class AssessmentLineObjection(CamelModel):
    taxpayer_number: str
    grievances: List[Grievance] = Field(default_factory=list)


class DecisionLineObjection(CamelModel):
    decision_line_key: str
    grievances: List[Grievance] = Field(default_factory=list)


class Taxpayer(CamelModel):
    citizen_id: str | None = None


class ObjectionRecord(CamelModel):
    application_number: str | None = None
    application_date: str | None = None
    wants_to_be_heard: bool = False
    taxpayer: Taxpayer = Field(default_factory=Taxpayer)
    assessment_number: str | None = None
    assessment_sequence_number: str | None = None
    attachments: List[Attachment] = Field(default_factory=list)
    assessment_line_objections: List[AssessmentLineObjection] = Field(default_factory=list)
    decision_line_objections: List[DecisionLineObjection] = Field(default_factory=list)

    def missing_fields(self) -> List[str]:
        """
        Returns the wire names of all top-level fields that default to None and are still None.
        """
        missing = []
        for name, field in type(self).model_fields.items():
            if field.default is None and getattr(self, name) is None:
                missing.append(field.alias or name)
        return missing

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class HandlerResult(BaseModel):
    content: Dict[str, Any]
    status_code: int = 200
    operation: OperationKind | None = None
    header: MessageHeader | None = None

    @property
    def is_error(self) -> bool:
        return self.status_code >= 400
