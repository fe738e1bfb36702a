"""
Error classification policies for readdirp.

Every filesystem error raised while listing a directory or resolving an entry
goes through an ErrorPolicy, which decides whether the traversal warns and
continues or aborts.
"""

import errno
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Optional

from .._common.errors import RECURSIVE_ERROR_CODE

logger = logging.getLogger(__name__)

# Errors expected during an ordinary walk of a live filesystem.
NORMAL_FLOW_ERRORS = ('ENOENT', 'EPERM', 'EACCES', 'ELOOP', RECURSIVE_ERROR_CODE)


class ErrorAction(Enum):
    """Outcome of classifying an error."""
    WARN = "warn"     # Emit a warning, skip the entry and keep going
    FATAL = "fatal"   # Abort the traversal


def error_code(error: BaseException) -> Optional[str]:
    """Get the symbolic code of an error.

    Args:
        error: Exception raised during traversal

    Returns:
        errno name (e.g. ``'ENOENT'``) for OSError, the ``code`` attribute for
        readdirp errors, or None if the error carries no code
    """
    code = getattr(error, 'code', None)
    if isinstance(code, str):
        return code
    if isinstance(error, OSError) and error.errno is not None:
        return errno.errorcode.get(error.errno)
    return None


def is_normal_flow_error(error: BaseException) -> bool:
    """Check if an error belongs to the recoverable normal-flow set."""
    return error_code(error) in NORMAL_FLOW_ERRORS


class ErrorPolicy(ABC):
    """
    Base class for error classification policies.

    A policy instance belongs to one traversal; subclasses may keep records
    of what they have seen.
    """

    @abstractmethod
    def classify(self, error: BaseException, path: Optional[str] = None) -> ErrorAction:
        """
        Decide what to do with an error raised during traversal.

        Args:
            error: The exception that was raised
            path: Full path being processed when the error occurred, if known

        Returns:
            ErrorAction.WARN to continue, ErrorAction.FATAL to abort
        """
        pass


class FailFastPolicy(ErrorPolicy):
    """
    Policy that treats every error as fatal.

    Used when ``suppress_normal_flow_error`` is False. Useful when partial
    results are not acceptable.
    """

    def classify(self, error: BaseException, path: Optional[str] = None) -> ErrorAction:
        return ErrorAction.FATAL


class SuppressNormalFlowPolicy(ErrorPolicy):
    """
    Policy that recovers from normal-flow errors and aborts on anything else.

    This is the default. Recovered errors are collected for later inspection;
    each record keeps a summary of the error, not the exception itself.
    """

    def __init__(self, verbose: bool = False):
        """
        Initialize the policy.

        Args:
            verbose: If True, log each recovered error at WARNING level
                     instead of DEBUG
        """
        self.errors: List[Dict[str, Any]] = []
        self.skipped_paths: List[str] = []
        self.verbose = verbose

    def classify(self, error: BaseException, path: Optional[str] = None) -> ErrorAction:
        if not is_normal_flow_error(error):
            return ErrorAction.FATAL

        path = path or getattr(error, 'filename', None) or getattr(error, 'path', None)
        code = error_code(error)
        self.errors.append({
            'path': path,
            'code': code,
            'error_type': type(error).__name__,
            'error_message': str(error),
        })
        if path:
            self.skipped_paths.append(path)

        level = logging.WARNING if self.verbose else logging.DEBUG
        logger.log(level, "Skipping '%s' (%s): %s", path, code, error)
        return ErrorAction.WARN

    def get_statistics(self) -> dict:
        """
        Get statistics about recovered errors.

        Returns:
            Dictionary with error counts per code and full details
        """
        by_code: Dict[str, int] = {}
        for record in self.errors:
            by_code[record['code']] = by_code.get(record['code'], 0) + 1
        return {
            'total_errors': len(self.errors),
            'by_code': by_code,
            'skipped_paths': len(self.skipped_paths),
            'errors': self.errors,
        }


def create_error_policy(suppress_normal_flow_error: bool = True, verbose: bool = False) -> ErrorPolicy:
    """
    Convenience function to pick the policy matching the suppress option.

    Args:
        suppress_normal_flow_error: If True, use SuppressNormalFlowPolicy;
                                    otherwise FailFastPolicy
        verbose: Passed to SuppressNormalFlowPolicy

    Returns:
        An ErrorPolicy for one traversal
    """
    if suppress_normal_flow_error:
        return SuppressNormalFlowPolicy(verbose=verbose)
    return FailFastPolicy()
