"""Step outputs — passes a decision to the next workflow step.

Each output is appended as a ``name=value`` line to the file named by
``GITHUB_OUTPUT``. Outside a workflow runner there is no such file and the
outputs are only logged.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from docaudit.models.document import ReviewDecision

logger = logging.getLogger(__name__)

ENV_OUTPUT_FILE = "GITHUB_OUTPUT"


class StepOutputWriter:
    def __init__(self, output_file: Optional[Path] = None) -> None:
        self._output_file = output_file

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> StepOutputWriter:
        env = os.environ if env is None else env
        value = env.get(ENV_OUTPUT_FILE)
        return cls(Path(value) if value else None)

    def set(self, name: str, value: str) -> None:
        if "\n" in value:
            raise ValueError(f"Output {name} must be a single line")
        if self._output_file is not None:
            with self._output_file.open("a", encoding="utf-8") as f:
                f.write(f"{name}={value}\n")
        logger.info("Output: %s=%s", name, value)

    def write_decision(self, decision: ReviewDecision) -> None:
        for name, value in decision.to_outputs().items():
            self.set(name, value)
