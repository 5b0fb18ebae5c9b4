"""Accumulation of dictated transcript fragments."""

from dataclasses import dataclass, field

from food_variety.domain.foods import CompareEntry
from food_variety.services.matcher import UtteranceMatcher, contains_stop_command


class DictationClosedError(RuntimeError):
    """The dictation session has already been finished or cancelled."""


@dataclass
class DictationSession:
    """Collects speech recognition results until the user stops dictating.

    Only final fragments become part of the transcript. The matcher runs once,
    on the whole transcript, when the session finishes.
    """

    matcher: UtteranceMatcher
    transcript: str = ""
    interim_text: str = ""
    active: bool = field(default=True, init=False)

    def add_fragment(self, text: str, is_final: bool) -> bool:
        """Add a recognition result and return True once a stop word was heard."""
        self._ensure_active()
        if is_final:
            self.transcript += f"{text} "
            self.interim_text = ""
        else:
            self.interim_text = text
        return contains_stop_command(self.transcript)

    def finish(self) -> list[CompareEntry]:
        """Close the session and return the foods recognized in the transcript."""
        self._ensure_active()
        self.active = False
        self.interim_text = ""
        return self.matcher.process_text(self.transcript)

    def cancel(self) -> None:
        self.active = False
        self.interim_text = ""

    def _ensure_active(self) -> None:
        if not self.active:
            raise DictationClosedError("Dictation session is no longer active")
