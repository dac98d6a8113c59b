"""fzf bridge: feed protocol lines on stdin, read back the selected line.

fzf is started with the tab delimiter, hides field 1 (the preview file
path), shows fields 2-5 with ANSI colours kept, and runs the previewer
on field 1 for the preview pane. Exit codes: 0 selection, 1 no match,
130 aborted by the user; anything else is a failure.
"""

import logging
import subprocess
from dataclasses import dataclass, field
from typing import List, Sequence

from prpicker.preview import FIELD_SEPARATOR, ProtocolLine

DEFAULT_PREVIEW_ARGS = ["--color=always", "--line-range", ":500"]
NO_SELECTION_CODES = (1, 130)

log = logging.getLogger("prpicker.chooser")


class ChooserError(Exception):
    """Base for chooser invocation errors."""

    pass


class ChooserUnavailable(ChooserError):
    """Raised when the chooser executable cannot be found or started."""

    pass


class ChooserFailed(ChooserError):
    """Raised when the chooser exits with an error code."""

    pass


@dataclass
class ChooserRequest:
    """Arguments and stdin for one chooser run."""

    argv: List[str]
    input_text: str


@dataclass
class ChooserResponse:
    """Exit code and selected line (None when nothing was chosen)."""

    returncode: int
    selected_line: str | None = None

    @property
    def artifact_path(self) -> str | None:
        if not self.selected_line:
            return None
        return self.selected_line.split(FIELD_SEPARATOR, 1)[0] or None


@dataclass
class FzfChooser:
    """Runs fzf with a bat preview of the hidden first field."""

    command: str = "fzf"
    preview_command: str = "bat"
    preview_args: List[str] = field(default_factory=lambda: list(DEFAULT_PREVIEW_ARGS))

    def preview_spec(self) -> str:
        """Preview command line; fzf substitutes {1} with field 1."""
        return " ".join([self.preview_command, *self.preview_args, "{1}"])

    def build_request(self, lines: Sequence[ProtocolLine]) -> ChooserRequest:
        argv = [
            self.command,
            "--ansi",
            f"--delimiter={FIELD_SEPARATOR}",
            "--with-nth=2,3,4,5",
            "--preview",
            self.preview_spec(),
        ]
        return ChooserRequest(argv=argv, input_text="\n".join(line.render() for line in lines))

    def invoke(self, request: ChooserRequest) -> ChooserResponse:
        """Run the chooser and block until it exits.

        stderr is not captured: fzf draws its interface there.

        Raises:
            ChooserUnavailable: executable missing or not runnable.
            ChooserFailed: exit code other than success or no selection.
        """
        log.debug("Running chooser: %s", request.argv)
        try:
            result = subprocess.run(
                request.argv,
                input=request.input_text,
                stdout=subprocess.PIPE,
                check=False,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except (FileNotFoundError, PermissionError) as e:
            raise ChooserUnavailable(f"{self.command} not available: {e}") from e
        if result.returncode in NO_SELECTION_CODES:
            return ChooserResponse(returncode=result.returncode)
        if result.returncode != 0:
            raise ChooserFailed(f"{self.command} exited with code {result.returncode}")
        selected = (result.stdout or "").strip("\r\n")
        return ChooserResponse(returncode=0, selected_line=selected or None)

    def select(self, lines: Sequence[ProtocolLine]) -> str | None:
        """Let the user pick a line; return its preview file path or None."""
        response = self.invoke(self.build_request(lines))
        return response.artifact_path
