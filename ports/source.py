from __future__ import annotations

import logging
from typing import Literal, Optional, Protocol, Union

from models import AcquisitionResult, ProfileIdentifier


ContentShape = Literal["raw", "structured"]


class SourcePort(Protocol):
    source_name: str
    content_shape: ContentShape

    def acquire(
        self,
        identifier: ProfileIdentifier,
        log: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None,
    ) -> AcquisitionResult:
        ...
