# Namespace for pipeline steps
from .resolve_identifier import ResolveIdentifier  # noqa: F401
from .acquire_content import AcquireContent  # noqa: F401
from .validate_content import ValidateContent  # noqa: F401
from .generate_profile import GeneratePrimary, GenerateFallback  # noqa: F401
from .assemble_result import AssembleResult  # noqa: F401
