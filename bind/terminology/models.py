from typing import List, Literal, Optional, TypedDict

from pydantic import BaseModel, ConfigDict

# Shapes served by the terminology service. Responses are handed back
# exactly as decoded, so these are TypedDicts rather than validated models.


class Designation(TypedDict):
    language: str  # BCP-47, e.g. "fr-CA"
    value: str


class _ConceptBase(TypedDict):
    code: str
    display: str


class CodeSystemConcept(_ConceptBase, total=False):
    definition: str
    designation: List[Designation]


class _CodeSystemBase(TypedDict):
    resourceType: Literal["CodeSystem"]
    id: str
    url: str
    name: str
    title: str
    status: Literal["draft", "active", "retired", "unknown"]
    description: str
    concept: List[CodeSystemConcept]


class CodeSystem(_CodeSystemBase, total=False):
    language: str


class _SummaryBase(TypedDict):
    id: str
    url: str
    name: str
    title: str
    status: str


class CodeSystemSummary(_SummaryBase, total=False):
    """Listing entry without the concept array."""

    count: int


class _LookupBase(TypedDict):
    system: str
    code: str
    display: str
    definition: str


class LookupResult(_LookupBase, total=False):
    """Returned by both $lookup and $search."""

    designation: List[Designation]


class HealthStatus(TypedDict):
    status: str


class TerminologyErrorBody(BaseModel):
    """Error payload sent with a non-2xx response."""

    model_config = ConfigDict(extra="allow")

    error: Optional[str] = None
