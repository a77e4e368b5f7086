"""
Structural validation of error descriptors

Проверка каталога (код, сообщение, retriable) выполняется в Asserter.error().
"""

from src.core.domain import ErrorDescriptor
from src.core.errors import AsserterError, ErrorKind


def error(err: ErrorDescriptor | None) -> None:
    """
    Структурная проверка ErrorDescriptor.

    Raises:
        AsserterError: ERROR_IS_NIL, ERROR_CODE_IS_NEG, ERROR_MESSAGE_MISSING
    """
    if err is None:
        raise AsserterError(ErrorKind.ERROR_IS_NIL)

    if err.code < 0:
        raise AsserterError(ErrorKind.ERROR_CODE_IS_NEG, f"code {err.code}", code=err.code)

    if not err.message:
        raise AsserterError(ErrorKind.ERROR_MESSAGE_MISSING, f"code {err.code}", code=err.code)
