"""Pipeline orchestration: load documentation indexes, then emit wrappers."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from .doxygen import DoxygenIndex, open_index
from .emitter import EmitReport, WrapperEmitter
from .entities import EntityStore
from .loader import AttachSummary, EntityLoader
from .logging import get_logger


class GenerationError(RuntimeError):
    """Raised when a generation request cannot be satisfied."""


@dataclass
class GenerationResult:
    """Outcome of a generate run."""

    text: str
    report: EmitReport
    attach: AttachSummary
    output: Optional[Path] = None


class Orchestrator:
    """Coordinates the load and emit phases of a generation run."""

    def __init__(
        self,
        index_opener: Callable[[Path], DoxygenIndex] | None = None,
        emitter: WrapperEmitter | None = None,
    ) -> None:
        self.index_opener = index_opener or open_index
        self.emitter = emitter or WrapperEmitter()
        self.logger = get_logger("orchestrator")

    def load(self, index_dirs: Sequence[Path | str]) -> Tuple[EntityStore, AttachSummary]:
        """Load every index directory in order, then attach deferred methods once."""
        if not index_dirs:
            raise GenerationError("No documentation index directories configured")
        store = EntityStore()
        loader = EntityLoader(store)
        for directory in index_dirs:
            path = Path(directory)
            self.logger.info("Loading documentation index %s", path)
            index = self.index_opener(path)
            loaded = loader.load_entries(index.entries())
            self.logger.debug("Loaded %d entries from %s", loaded, path)
        summary = loader.attach_methods()
        self.logger.debug(
            "Attached %d methods (%d unresolved, %d duplicates)",
            summary.attached,
            summary.unresolved,
            summary.duplicates,
        )
        return store, summary

    def run_generate(
        self,
        index_dirs: Sequence[Path | str],
        *,
        package: str,
        classes: Sequence[str] | None = None,
        output: Path | None = None,
    ) -> GenerationResult:
        """Generate a Go file for ``classes`` (everything when empty)."""
        store, attach = self.load(index_dirs)
        store.seal()

        names = list(classes or [])
        if names:
            defined = store.index_by_name()
            missing = [name for name in names if name not in defined]
            if missing:
                raise GenerationError(f"Unknown class: {', '.join(missing)}")

        result = self.emitter.emit_file(store, package, names=names or None)
        totals = result.report.summary()
        self.logger.info(
            "Generated %d entities: %d members emitted, %d advisory, %d skipped",
            totals["entities"],
            totals["emitted"],
            totals["advisory"],
            totals["skipped"],
        )

        if output is not None:
            output = output.expanduser()
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(result.text, encoding="utf-8")
            self.logger.info("Wrote %s", output)
        return GenerationResult(text=result.text, report=result.report, attach=attach, output=output)

    def run_list(self, index_dirs: Sequence[Path | str]) -> List[Tuple[str, str]]:
        """Return ``(name, kind)`` for every defined entity, sorted by name."""
        store, _ = self.load(index_dirs)
        return [(entity.name, entity.kind) for entity in store.entities()]


__all__ = ["GenerationError", "GenerationResult", "Orchestrator"]
