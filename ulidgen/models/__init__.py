"""ulidgen data model: Ulid, Case, GenerationRequest, InspectionResult."""

from ulidgen.models.ulid import Case, GenerationRequest, InspectionResult, Ulid

__all__ = ["Case", "GenerationRequest", "InspectionResult", "Ulid"]
