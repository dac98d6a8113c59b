"""Preview files for the chooser.

Each pull request body is written to its own file in a private
temporary directory; the previewer is pointed at that file by the first
(hidden) field of the chooser line. The directory lives for one run and
is removed on exit from the PreviewMaterializer context, whatever the
outcome.
"""

import logging
import shutil
import tempfile
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Tuple

from prpicker.display import colored_status, colored_title, relative_age
from prpicker.models import PullRequest

FIELD_SEPARATOR = "\t"
TEMP_PREFIX = "prpicker-"

log = logging.getLogger("prpicker.preview")


class MaterializationError(Exception):
    """Raised when a preview file cannot be written."""

    pass


def _one_line(text: str) -> str:
    """Keep a display field on one protocol line and in its own column."""
    text = text.replace("\r\n", " ").replace("\n", " ").replace("\r", " ").replace(FIELD_SEPARATOR, " ")
    # Lone surrogates cannot be encoded for the chooser pipe.
    return text.encode("utf-8", "replace").decode("utf-8")


@dataclass(frozen=True)
class ProtocolLine:
    """One chooser input line.

    artifact_path is a hidden correlation key: the chooser does not show
    it and it is never coloured.
    """

    artifact_path: str
    age: str
    status: str
    title: str
    repository: str

    def fields(self) -> List[str]:
        return [self.artifact_path, self.age, self.status, self.title, self.repository]

    def render(self) -> str:
        return FIELD_SEPARATOR.join(_one_line(f) for f in self.fields())


class SelectionIndex:
    """Maps preview file paths back to the pull request they were written for."""

    def __init__(self) -> None:
        self._by_path: Dict[str, PullRequest] = {}

    def register(self, path: str, pr: PullRequest) -> None:
        self._by_path[path] = pr

    def resolve(self, path: str | None) -> PullRequest | None:
        if path is None:
            return None
        return self._by_path.get(path)

    def __contains__(self, path: object) -> bool:
        return path in self._by_path

    def __len__(self) -> int:
        return len(self._by_path)


def artifact_name(pr: PullRequest) -> str:
    """File name for a PR body, e.g. owner_repo_12.md."""
    safe_repo = pr.display_repository.replace("/", "_")
    return f"{safe_repo}_{pr.number}.md"


class PreviewMaterializer:
    """Writes preview files and owns the temporary directory holding them.

    Use as a context manager; the directory is created on the first
    materialize() call and removed exactly once by release_all().
    """

    def __init__(self, color: bool = True, now: datetime | None = None) -> None:
        self.color = color
        self.now = now
        self._directory: Path | None = None
        self._released = False

    @property
    def directory(self) -> Path | None:
        return self._directory

    def __enter__(self) -> "PreviewMaterializer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release_all()

    def _acquire(self) -> Path:
        if self._released:
            raise MaterializationError("preview directory already released")
        if self._directory is None:
            try:
                self._directory = Path(tempfile.mkdtemp(prefix=TEMP_PREFIX))
            except OSError as e:
                raise MaterializationError(f"Cannot create temporary directory: {e}") from e
            log.debug("Created preview directory %s", self._directory)
        return self._directory

    def _unique_path(self, directory: Path, pr: PullRequest, index: SelectionIndex) -> Path:
        path = directory / artifact_name(pr)
        suffix = 1
        while str(path) in index or path.exists():
            path = directory / f"{Path(artifact_name(pr)).stem}-{suffix}.md"
            suffix += 1
        return path

    def materialize(self, records: Iterable[PullRequest]) -> Tuple[List[ProtocolLine], SelectionIndex]:
        """Write one preview file per record, in the given order.

        Returns the chooser lines (same order) and the path index.

        Raises:
            MaterializationError: directory or file could not be written.
        """
        directory = self._acquire()
        index = SelectionIndex()
        lines: List[ProtocolLine] = []
        for pr in records:
            path = self._unique_path(directory, pr, index)
            try:
                path.write_text(pr.body or "", encoding="utf-8", errors="replace")
            except OSError as e:
                raise MaterializationError(f"Cannot write preview for {pr.identifier}: {e}") from e
            index.register(str(path), pr)
            lines.append(
                ProtocolLine(
                    artifact_path=str(path),
                    age=relative_age(pr.updated_at, self.now),
                    status=colored_status(pr.status_label, self.color),
                    title=colored_title(pr.title, self.color),
                    repository=pr.display_repository,
                )
            )
        log.debug("Wrote %s preview files to %s", len(lines), directory)
        return lines, index

    def release_all(self) -> None:
        """Remove the directory and everything in it; later calls do nothing."""
        if self._released:
            return
        self._released = True
        if self._directory is None:
            return
        shutil.rmtree(self._directory, ignore_errors=True)
        log.debug("Removed preview directory %s", self._directory)
