from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# Client-side configuration section ("isaacls.maxNumberOfProblems")
CONFIGURATION_SECTION = "isaacls"

DEFAULT_MAX_NUMBER_OF_PROBLEMS = 1000


@dataclass(frozen=True)
class ServerSettings:
    """User-facing settings of the server."""

    # Diagnostics reported per document
    max_number_of_problems: int = DEFAULT_MAX_NUMBER_OF_PROBLEMS

    @classmethod
    def from_dict(cls, raw: Any) -> ServerSettings:
        """
        Build settings from the client's configuration section.

        Unknown keys are ignored and invalid values fall back to defaults.
        """
        if not isinstance(raw, dict):
            return cls()

        max_problems = raw.get("maxNumberOfProblems", DEFAULT_MAX_NUMBER_OF_PROBLEMS)
        if (
            isinstance(max_problems, bool)
            or not isinstance(max_problems, int)
            or max_problems < 0
        ):
            max_problems = DEFAULT_MAX_NUMBER_OF_PROBLEMS

        return cls(max_number_of_problems=max_problems)
