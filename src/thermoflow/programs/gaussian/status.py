from thermoflow.programs.gaussian.patterns import (
    ERROR_PATTERNS,
    ERROR_TYPES,
    NORMAL_TERMINATION_PAT,
    PCM_ERROR_PATTERNS,
)
from thermoflow.programs.pattern import first_marker
from thermoflow.typing import JobStatus
from thermoflow.utils import logger


def classify_text(text: str) -> JobStatus:
    """
    Classifies the completion state of Gaussian output text.

    The checks run in a fixed order, so a file carrying both a normal-termination
    and an error marker is COMPLETED:

    1. normal termination -> COMPLETED
    2. error termination, fatal error, erroneous write, file length mismatch,
       internal coordinate error -> ERROR
    3. PCM convergence failure -> ERROR
    4. anything else, including empty text -> INTERRUPTED
    """
    if NORMAL_TERMINATION_PAT.search(text):
        return JobStatus.COMPLETED

    marker = first_marker(text, ERROR_PATTERNS)
    if marker is not None:
        logger.debug(f"Found error marker: '{marker}'")
        return JobStatus.ERROR

    marker = first_marker(text, PCM_ERROR_PATTERNS)
    if marker is not None:
        logger.debug(f"Found PCM failure marker: '{marker}'")
        return JobStatus.ERROR

    return JobStatus.INTERRUPTED


def has_pcm_failure(text: str) -> bool:
    return first_marker(text, PCM_ERROR_PATTERNS) is not None


def find_error_type(text: str) -> str:
    """Short description of the first recognised error, or an empty string."""
    for needle, description in ERROR_TYPES:
        if needle in text:
            return description
    return ""
