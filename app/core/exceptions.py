"""Music Catalog API 예외 계층

모든 예외는 status_code 를 가지고 있고, main.py 의 핸들러가
{"success": false, "data": {"message": ...}} 형태로 변환한다.
"""


class MusicApiError(Exception):
    """Base exception for the music catalog API"""
    status_code: int = 400


class BadRequestError(MusicApiError):
    status_code = 400


class NotFoundError(MusicApiError):
    """Lookup yielded nothing"""
    status_code = 404


class UnauthorizedError(MusicApiError):
    """Credential mismatch or invalid bearer token"""
    status_code = 401


class ValidationError(MusicApiError):
    """Storage rejected a create/update"""
    status_code = 400


class DuplicateError(ValidationError):
    """Unique constraint violation"""
    pass


class StorageError(MusicApiError):
    """Generic directory / ledger I/O failure"""
    status_code = 400


class HashError(MusicApiError):
    """Password hashing failed. Do not retry."""
    status_code = 400


class SigningError(MusicApiError):
    """Token could not be signed (missing claims or signing key). Do not retry."""
    status_code = 500
