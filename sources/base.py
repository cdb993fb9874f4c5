from __future__ import annotations

import logging
from typing import Optional, Union

import requests

from config.settings import Settings, get_settings


LogLike = Union[logging.Logger, logging.LoggerAdapter]

logger = logging.getLogger("sources")


class ProfileSource:
    """Shared plumbing for acquisition strategies.

    Subclasses implement ``acquire(identifier, log=None)`` and return an
    AcquisitionResult; upstream problems are returned, never raised.
    """

    source_name: str = ""
    content_shape: str = ""

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None) -> None:
        self.settings = settings or get_settings()
        # Injected sessions are reused (tests); otherwise one session per acquisition
        self._session = session

    def _open_session(self) -> requests.Session:
        if self._session is not None:
            return self._session
        return requests.Session()

    def _close_session(self, session: requests.Session) -> None:
        if session is not self._session:
            session.close()

    @staticmethod
    def _log(log: Optional[LogLike]) -> LogLike:
        return log if log is not None else logger
