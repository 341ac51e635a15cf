from typing import List, Literal, Optional
from pydantic import BaseModel, Field

FieldType = Literal["quantity", "doseForm", "dosePattern", "duration"]
FrequencyCode = Literal["OD", "BD", "TDS", "QID", "HS", "SOS", "Weekly", "Monthly", ""]
ParseMethod = Literal["ai", "regex"]
SuggestionKind = Literal["medicine", "combination"]

FIELD_TYPES = ("quantity", "doseForm", "dosePattern", "duration")
FREQUENCY_CODES = ("OD", "BD", "TDS", "QID", "HS", "SOS", "Weekly", "Monthly")

class StructuredPrescription(BaseModel):
    medicine_name: str
    potency: str = ""
    quantity: str = ""  # may be a fraction literal like "1/2oz"
    dose_form: str = ""
    dose_per_intake: str = ""
    frequency: FrequencyCode = ""
    pattern: str = Field("", description="dash-joined counts (6-6-6) or SOS/Weekly/Monthly")
    duration: str = Field("", description="normalized '<n> <unit-plural>'")
    confidence: float = Field(0.5, ge=0.0, le=1.0)

    duration_days: Optional[int] = None
    prescription_text: str = ""

class SmartParsingRule(BaseModel):
    id: str
    name: str
    field_type: FieldType
    pattern: str
    replacement: str = ""
    is_regex: bool = False
    priority: int = 0  # higher = evaluated first
    is_active: bool = True
    created_at: str = ""
    updated_at: str = ""

class RuleCreate(BaseModel):
    name: str = Field(..., min_length=1)
    field_type: FieldType
    pattern: str = Field(..., min_length=1)
    replacement: str = ""
    is_regex: bool = False
    priority: int = 0
    is_active: bool = True

class RuleUpdate(BaseModel):
    name: Optional[str] = None
    field_type: Optional[FieldType] = None
    pattern: Optional[str] = None
    replacement: Optional[str] = None
    is_regex: Optional[bool] = None
    priority: Optional[int] = None
    is_active: Optional[bool] = None

class ApplyRulesRequest(BaseModel):
    text: str

class ApplyRulesResponse(BaseModel):
    overrides: dict = Field(default_factory=dict)  # field_type -> value
    duration_days: Optional[int] = None

class NormalizeFieldRequest(BaseModel):
    field_type: FieldType
    text: str

class NormalizeFieldResponse(BaseModel):
    field_type: FieldType
    text: str

class CombinationMedicine(BaseModel):
    id: int
    name: str  # short code, unique case-insensitively
    content: str  # "A + B + C"
    description: Optional[str] = None
    created_at: str = ""

class CombinationUpsert(BaseModel):
    name: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    description: Optional[str] = None

class CombinationUpsertResult(BaseModel):
    combination: CombinationMedicine
    created: bool

class RegisterCombinationRequest(BaseModel):
    medicine_name: str

class RegisterCombinationResponse(BaseModel):
    registered: bool
    result: Optional[CombinationUpsertResult] = None

class MedicineSuggestion(BaseModel):
    name: str
    kind: SuggestionKind = "medicine"
    content: Optional[str] = None
    description: Optional[str] = None

class AutocompleteResponse(BaseModel):
    medicines: List[MedicineSuggestion] = Field(default_factory=list)
    combinations: List[MedicineSuggestion] = Field(default_factory=list)

class ParseRequest(BaseModel):
    input: str
    use_ai: Optional[bool] = None  # None -> USE_AI_PARSING setting
    api_key: Optional[str] = None
    timeout_s: Optional[float] = Field(default=None, gt=0)

class ParseResponse(BaseModel):
    success: bool
    data: Optional[StructuredPrescription] = None
    method: Optional[ParseMethod] = None
    error: Optional[str] = None
