# datasources/exceptions.py

from typing import Optional


class DataSourceError(Exception):
    pass


class TransientBackendError(DataSourceError):
    pass


class DataSourceUnavailable(TransientBackendError):
    pass


class BackendStatusError(TransientBackendError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class QueryTimeout(DataSourceError):
    pass


class CircuitOpenError(DataSourceError):
    pass


class ResponseParseError(DataSourceError):
    pass


class QueueFullError(DataSourceError):
    pass


class QueueTimeoutError(DataSourceError):
    pass


class QueueClearedError(DataSourceError):
    pass
