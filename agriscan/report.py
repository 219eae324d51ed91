"""Report rendering — AnalysisOutcome → chat text."""
from typing import Any, Optional

from agriscan.constants import (
    MSG_ERR_MALFORMED,
    MSG_ERR_INTAKE,
    MSG_ERR_MISSING_KEY,
    MSG_ERR_NO_IMAGE,
    MSG_ERR_NO_TEXT,
    MSG_ERR_TRANSPORT,
    MSG_ERR_UNSUPPORTED_MEDIA,
    MSG_ERR_VENDOR,
    MSG_UNCLEAR_IMAGE,
    REPORT_APPLICATION,
    REPORT_BULLET,
    REPORT_CAUSE,
    REPORT_CHEMICAL,
    REPORT_DOSAGE,
    REPORT_NO_ISSUE,
    REPORT_ORGANIC,
    REPORT_PESTICIDE,
    REPORT_PREVENTION,
    REPORT_SEVERITY,
    REPORT_SYMPTOMS,
    REPORT_TITLE,
    REPORT_UNKNOWN,
)
from agriscan.diagnosis import (
    AnalysisOutcome,
    DiagnosisRecord,
    Failure,
    FailureReason,
    Success,
    UnclearImage,
)


def _or_unknown(value: Any) -> str:
    return str(value) if value not in (None, "") else REPORT_UNKNOWN


def _bullets(header: str, items: Any) -> list[str]:
    match items:
        case [_, *_]:
            return [header] + [REPORT_BULLET % entry for entry in items]
        case _:
            return []


def _solution(header: str, solution: Any) -> list[str]:
    match solution:
        case dict() if solution:
            return [
                header,
                REPORT_PESTICIDE % _or_unknown(solution.get("pesticide")),
                REPORT_DOSAGE % _or_unknown(solution.get("dosage")),
                REPORT_APPLICATION % _or_unknown(solution.get("application")),
            ]
        case _:
            return []


def render_diagnosis(record: DiagnosisRecord) -> str:
    title = record.get("pest_name") or record.get("disease_name") or REPORT_NO_ISSUE
    sections = [
        [REPORT_TITLE % title, REPORT_SEVERITY % _or_unknown(record.get("severity"))],
        _bullets(REPORT_SYMPTOMS, record.get("symptoms")),
        [REPORT_CAUSE % record["cause"]] if record.get("cause") else [],
        _solution(REPORT_ORGANIC, record.get("organic_solution")),
        _solution(REPORT_CHEMICAL, record.get("chemical_solution")),
        _bullets(REPORT_PREVENTION, record.get("prevention")),
    ]
    return "\n\n".join("\n".join(lines) for lines in sections if lines)


def failure_message(failure: Failure, credential_env: Optional[str] = None) -> str:
    match failure.reason:
        case FailureReason.MISSING_CREDENTIAL:
            return MSG_ERR_MISSING_KEY % (credential_env or "the API key")
        case FailureReason.NO_IMAGE_SELECTED:
            return MSG_ERR_NO_IMAGE
        case FailureReason.UNSUPPORTED_MEDIA_TYPE:
            return MSG_ERR_UNSUPPORTED_MEDIA
        case FailureReason.INTAKE_REJECTED:
            return MSG_ERR_INTAKE % (failure.detail or "invalid image")
        case FailureReason.REJECTED | FailureReason.ALL_ENDPOINTS_EXHAUSTED:
            return MSG_ERR_VENDOR % (failure.detail or "request failed")
        case FailureReason.NO_TEXT_CONTENT:
            return MSG_ERR_NO_TEXT
        case FailureReason.MALFORMED_JSON:
            return MSG_ERR_MALFORMED
        case _:
            return MSG_ERR_TRANSPORT


def render_outcome(outcome: AnalysisOutcome, credential_env: Optional[str] = None) -> str:
    match outcome:
        case Success(record=record):
            return render_diagnosis(record)
        case UnclearImage():
            return MSG_UNCLEAR_IMAGE
        case Failure() as failure:
            return failure_message(failure, credential_env)
