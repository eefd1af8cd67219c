from pydantic import BaseModel, ConfigDict, Field
from typing import Any


class LoadSessionRequestSchema(BaseModel):
    session_id: str | None = None
    service_id: str | None = None
    service: dict[str, Any] = Field(default_factory=dict)


class SelectRequestSchema(BaseModel):
    attribute_name: str = Field(min_length=1)
    option_id: str | None = None
    value: str | None = None
    data: dict[str, Any] | None = None


class SegmentResultsRequestSchema(BaseModel):
    segments: list[dict[str, Any]] = Field(default_factory=list)


class OptionSchema(BaseModel):
    id: str
    name: str
    value: str
    weight: float = 0


class SegmentSchema(BaseModel):
    id: str
    segment_name: str


class VisibleGroupSchema(BaseModel):
    name: str
    kind: str | None = None
    parent: str | None = None
    level: int = 1
    required: bool = False
    selected_id: str = ""
    options: list[OptionSchema] = Field(default_factory=list)


class SelectionSchema(BaseModel):
    id: str
    value: str = ""
    timestamp: int = 0


class FilterEntrySchema(BaseModel):
    attribute_id: str
    option_id: str
    attribute_name: str
    option_name: str


class ValidationSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_valid: bool = Field(alias="isValid")
    missing: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)


class SchemaReportSchema(BaseModel):
    is_valid: bool
    attribute_count: int
    supported_count: int
    unsupported_count: int
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class SessionResponseSchema(BaseModel):
    session_id: str
    groups: list[VisibleGroupSchema] = Field(default_factory=list)
    segments: list[SegmentSchema] = Field(default_factory=list)
    selections: dict[str, SelectionSchema] = Field(default_factory=dict)
    selected_segment_id: str = ""
    filters: list[FilterEntrySchema] = Field(default_factory=list)
    validation: ValidationSchema
    ready_for_booking: bool = False
    report: SchemaReportSchema | None = None
    reset: list[str] = Field(default_factory=list)


class SegmentQuerySchema(BaseModel):
    category_id: str
    subcategory_id: str = ""
    segment_id: str = ""
    attribute: list[FilterEntrySchema] = Field(default_factory=list)


class BookingRequestSchema(BaseModel):
    catIdValue: str
    subCatIdValue: str
    filterList: list[FilterEntrySchema] = Field(default_factory=list)
    segmentId: str = ""
    serviceNameValue: str = ""
    timeRequired: str = ""
