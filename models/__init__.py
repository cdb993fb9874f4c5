from .acquisition import (
    AcquisitionError,
    AcquisitionErrorKind,
    AcquisitionResult,
    RawContent,
    Repository,
    StructuredProfile,
)
from .dashboard_context import DashboardContext, DashboardProject
from .enrichment_request import EnrichmentRequest
from .enrichment_result import EnrichmentResult, GeneratedProfile
from .failure import Failure, FailureKind
from .profile_identifier import ProfileIdentifier, ResolutionError
from .validation import ErrorPage, LoginPage, MalformedUpstream, TooShort, Usable, ValidationVerdict

__all__ = [
    "AcquisitionError",
    "AcquisitionErrorKind",
    "AcquisitionResult",
    "RawContent",
    "Repository",
    "StructuredProfile",
    "DashboardContext",
    "DashboardProject",
    "EnrichmentRequest",
    "EnrichmentResult",
    "GeneratedProfile",
    "Failure",
    "FailureKind",
    "ProfileIdentifier",
    "ResolutionError",
    "ErrorPage",
    "LoginPage",
    "MalformedUpstream",
    "TooShort",
    "Usable",
    "ValidationVerdict",
]
