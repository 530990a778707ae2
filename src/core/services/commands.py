"""Remote-invocable commands exposed to the host shell.

The GUI host only sees command names and flat responses: a string value on
success or a localized error string on failure. Handlers return `str` or
raise `CommandError`; the registry owns the flattening so handlers stay
plain async functions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Awaitable, Callable

from core.config import AppSettings
from core.domain.language import Language
from core.domain.messages import CONNECTION_REPLY, format_failure, unknown_command
from core.domain.models import FetchFailure, InvokeResponse
from core.interfaces.fetcher import LocalityFetcher
from core.logging_setup import get_logger

Handler = Callable[[], Awaitable[str]]

log = get_logger("commands")


class CommandError(Exception):
    """Failure meant to be shown to the user as-is."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


@dataclass
class CommandRegistry:
    """Name -> handler table, the equivalent of the host's invoke handler."""

    language: Language = Language.NORWEGIAN
    _handlers: dict[str, Handler] = field(default_factory=dict, init=False, repr=False)

    def register(self, name: str) -> Callable[[Handler], Handler]:
        def decorator(func: Handler) -> Handler:
            if name in self._handlers:
                raise ValueError(f"command already registered: {name}")
            self._handlers[name] = func
            return func

        return decorator

    def names(self) -> list[str]:
        return sorted(self._handlers)

    async def invoke(self, name: str, *, request_id: int | str | None = None) -> InvokeResponse:
        handler = self._handlers.get(name)
        if handler is None:
            log.warning("Unknown command: %s", name)
            return InvokeResponse(id=request_id, ok=False, error=unknown_command(name, self.language))

        try:
            value = await handler()
        except CommandError as exc:
            return InvokeResponse(id=request_id, ok=False, error=exc.message)
        except Exception as exc:  # noqa: BLE001 - el host solo entiende respuestas planas
            log.exception("Command %s crashed", name)
            return InvokeResponse(id=request_id, ok=False, error=str(exc) or type(exc).__name__)

        return InvokeResponse(id=request_id, ok=True, value=value)


def test_connection() -> str:
    """Connectivity check: always the same string, no side effects."""

    return CONNECTION_REPLY


async def fetch_localities(fetcher: LocalityFetcher, language: Language = Language.NORWEGIAN) -> str:
    """Run the fetcher and flatten a failure into a `CommandError`."""

    outcome = await fetcher.fetch()
    if isinstance(outcome, FetchFailure):
        raise CommandError(format_failure(outcome, language))
    return outcome.payload


def build_registry(
    settings: AppSettings | None = None,
    *,
    fetcher: LocalityFetcher | None = None,
) -> CommandRegistry:
    """Wire the two operations the front end can call."""

    settings = settings or AppSettings()
    if fetcher is None:
        from adapters.feature_service import FeatureServiceFetcher  # noqa: PLC0415

        fetcher = FeatureServiceFetcher(settings)

    registry = CommandRegistry(language=settings.default_language)

    @registry.register("test_connection")
    async def _test_connection() -> str:
        return test_connection()

    @registry.register("fetch_localities")
    async def _fetch_localities() -> str:
        return await fetch_localities(fetcher, settings.default_language)

    return registry
