"""Rename propagation for @path references.

When a file or folder moves, every reference to its old path is rewritten
across the corpus in two independent passes:

1. Relative pass - documents inside the entity's old repository (or, for an
   entity outside all repositories, documents outside all repositories)
   reference it by repository-relative path.
2. Absolute pass - documents outside the entity's old repository reference
   it by full corpus path.

Documents are only written when their content actually changes. A document
that cannot be read or written is recorded in the report and skipped; the
rest of the corpus is still processed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ...events.bus import EventBus
from ...events.schemas import DocumentRewritten
from ...events.schemas import DocumentUpdateFailed
from ...models import DocumentError
from ...models import PropagationReport
from ...models import RenameEvent
from ...paths import REPOS_MARKER
from ...paths import locate_root
from ...paths import relative_identity
from ...storage.protocol import CorpusError
from ...storage.protocol import CorpusProtocol
from ...utils.mentions import rewrite_references

logger = logging.getLogger(__name__)

# Per-document failures that are reported instead of aborting propagation
DOCUMENT_ERRORS = (OSError, UnicodeError, KeyError, CorpusError)


class RenamePropagator:
    """Rewrites stale @path references after a move.

    Contract:
    - Inputs: RenameEvent (old path, new path, folder flag)
    - Outputs: PropagationReport (documents written, per-document errors)
    - Side Effects: corpus writes for documents whose content changed;
      DocumentRewritten / DocumentUpdateFailed events when a bus is given
    - Errors: never raised for per-document I/O failures
    """

    def __init__(
        self,
        corpus: CorpusProtocol,
        *,
        marker: str = REPOS_MARKER,
        event_bus: EventBus | None = None,
        dry_run: bool = False,
    ):
        """Initialize propagator.

        Args:
            corpus: Corpus to read and rewrite
            marker: Repository marker segment
            event_bus: Optional bus receiving per-document events
            dry_run: Compute the report without writing anything
        """
        self.corpus = corpus
        self.marker = marker
        self.event_bus = event_bus
        self.dry_run = dry_run

    def propagate(self, event: RenameEvent) -> PropagationReport:
        """Rewrite every reference to ``event.old_path`` in the corpus.

        Args:
            event: The completed move

        Returns:
            PropagationReport describing written and skipped documents
        """
        report = PropagationReport(event=event)

        old_root, old_rel = relative_identity(event.old_path, self.marker)
        _, new_rel = relative_identity(event.new_path, self.marker)

        # Fresh listing per call; the corpus is the only source of truth
        documents = self.corpus.list_documents()

        if old_rel != new_rel:
            in_scope = self._relative_scope(old_root)
            self._run_pass(report, documents, in_scope, old_rel, new_rel, event.is_folder)
        else:
            logger.debug(f"Relative path unchanged for {event.old_path}, skipping relative pass")

        if old_root and event.old_path != event.new_path:

            def outside_old_repo(path: str) -> bool:
                return locate_root(path, self.marker) != old_root

            self._run_pass(report, documents, outside_old_repo, event.old_path, event.new_path, event.is_folder)

        if report.updated or report.errors:
            logger.info(
                f"Propagated {event.old_path} -> {event.new_path}: "
                f"{len(report.updated)} updated, {len(report.errors)} failed",
                extra={"event": "rename_propagated", "replacements": report.replacements},
            )
        return report

    def _relative_scope(self, old_root: str | None) -> Callable[[str], bool]:
        """Documents that reference the entity by repository-relative path."""
        if old_root:
            prefix = old_root + "/"
            return lambda path: path.startswith(prefix)
        return lambda path: locate_root(path, self.marker) is None

    def _run_pass(
        self,
        report: PropagationReport,
        documents: list[str],
        in_scope: Callable[[str], bool],
        old_path: str,
        new_path: str,
        is_folder: bool,
    ) -> None:
        for path in documents:
            if in_scope(path):
                self._update_document(report, path, old_path, new_path, is_folder)

    def _update_document(
        self,
        report: PropagationReport,
        path: str,
        old_path: str,
        new_path: str,
        is_folder: bool,
    ) -> None:
        """Read-modify-write one document; failures are recorded, not raised."""
        try:
            content = self.corpus.read(path)
        except DOCUMENT_ERRORS as e:
            self._record_failure(report, path, "read", e)
            return

        updated, count = rewrite_references(content, old_path, new_path, is_folder=is_folder)
        if updated == content:
            return

        if not self.dry_run:
            try:
                self.corpus.write(path, updated)
            except DOCUMENT_ERRORS as e:
                self._record_failure(report, path, "write", e)
                return

        report.replacements += count
        if path not in report.updated:
            report.updated.append(path)
        logger.info(
            f"Rewrote {count} reference(s) in {path}",
            extra={"event": "document_rewritten", "path": path, "replacements": count},
        )
        if self.event_bus:
            self.event_bus.publish(DocumentRewritten(path=path, replacements=count))

    def _record_failure(self, report: PropagationReport, path: str, operation: str, error: Exception) -> None:
        message = str(error) or type(error).__name__
        logger.warning(f"Failed to {operation} {path} during propagation: {message}")
        report.errors.append(DocumentError(path=path, operation=operation, message=message))
        if self.event_bus:
            self.event_bus.publish(DocumentUpdateFailed(path=path, operation=operation, message=message))


def propagate(
    corpus: CorpusProtocol,
    event: RenameEvent,
    *,
    marker: str = REPOS_MARKER,
    event_bus: EventBus | None = None,
) -> PropagationReport:
    """Propagate one rename across a corpus (see RenamePropagator)."""
    return RenamePropagator(corpus, marker=marker, event_bus=event_bus).propagate(event)
