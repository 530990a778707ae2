"""User-facing strings for the host shell.

Failures travel through the core as `FetchFailure` (tagged by
`FetchErrorKind`) and are only flattened to text here, at the boundary.
Norwegian is the default so existing front ends keep receiving the same
strings.
"""

from __future__ import annotations

from core.domain.language import Language
from core.domain.models import FetchErrorKind, FetchFailure

CONNECTION_REPLY = "Tauri fungerer!"

_FAILURE_TEMPLATES: dict[Language, dict[FetchErrorKind, str]] = {
    Language.NORWEGIAN: {
        FetchErrorKind.CLIENT_BUILD: "Kunne ikke opprette HTTP-klient: {detail}",
        FetchErrorKind.TRANSPORT: "Nettverksfeil: {detail}",
        FetchErrorKind.TIMEOUT: "Nettverksfeil: tidsavbrudd etter {seconds} s",
        FetchErrorKind.HTTP_STATUS: "HTTP-feil {status}: {detail}",
        FetchErrorKind.BODY_READ: "Kunne ikke lese respons: {detail}",
    },
    Language.ENGLISH: {
        FetchErrorKind.CLIENT_BUILD: "Could not create HTTP client: {detail}",
        FetchErrorKind.TRANSPORT: "Network error: {detail}",
        FetchErrorKind.TIMEOUT: "Network error: timed out after {seconds} s",
        FetchErrorKind.HTTP_STATUS: "HTTP error {status}: {detail}",
        FetchErrorKind.BODY_READ: "Could not read response: {detail}",
    },
}

_UNKNOWN_COMMAND: dict[Language, str] = {
    Language.NORWEGIAN: "Ukjent kommando: {name}",
    Language.ENGLISH: "Unknown command: {name}",
}

_INVALID_REQUEST: dict[Language, str] = {
    Language.NORWEGIAN: "Ugyldig forespørsel: {detail}",
    Language.ENGLISH: "Invalid request: {detail}",
}


def _format_seconds(value: float | None) -> str:
    if value is None:
        return "?"
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def format_failure(failure: FetchFailure, language: Language = Language.NORWEGIAN) -> str:
    """Flatten a tagged failure into the localized message sent to the host."""

    template = _FAILURE_TEMPLATES[language][failure.kind]
    status = ""
    if failure.status_code is not None:
        status = str(failure.status_code)
        if failure.reason_phrase:
            status = f"{status} {failure.reason_phrase}"
    return template.format(
        detail=failure.detail,
        status=status,
        seconds=_format_seconds(failure.timeout_seconds),
    )


def unknown_command(name: str, language: Language = Language.NORWEGIAN) -> str:
    return _UNKNOWN_COMMAND[language].format(name=name)


def invalid_request(detail: str, language: Language = Language.NORWEGIAN) -> str:
    return _INVALID_REQUEST[language].format(detail=detail)
