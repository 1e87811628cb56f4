from __future__ import annotations

from dataclasses import dataclass

# data-* attributes rendered on every copy button; static/app.js reads each of them
DATASET_KEYS = ("source", "feedbackMs", "idleLabel", "copiedLabel", "unavailableLabel")


@dataclass(frozen=True)
class CopyButton:
    """
    Settings for the markdown views' copy buttons.
    The browser performs the copy; the server only renders how long the
    confirmation stays and which labels the button cycles through.
    """
    feedback_ms: int = 2000
    copied_label: str = "Copied"
    unavailable_label: str = "Copy unavailable"

    def __post_init__(self):
        if self.feedback_ms <= 0:
            raise ValueError(f"feedback_ms must be positive, got {self.feedback_ms}")

    def data_attributes(self, source_id: str, idle_label: str) -> dict:
        return {
            "data-source": source_id,
            "data-feedback-ms": str(self.feedback_ms),
            "data-idle-label": idle_label,
            "data-copied-label": self.copied_label,
            "data-unavailable-label": self.unavailable_label,
        }
