"""Batch helpers for sorting many output files by outcome.

These sit on the caller side of the backend contract: they pick files, fan out
over a thread pool and collect results in input order. One bad file never stops
a batch.
"""

from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import TypeVar

from thermoflow.config import CommandContext
from thermoflow.core import PathType, QMProgram
from thermoflow.exceptions import ExtractionError, ValidationError
from thermoflow.registry import create_program
from thermoflow.thermo import ThermoSummary, summarize
from thermoflow.typing import EnergyComponents, JobStatus
from thermoflow.utils import logger

T = TypeVar("T")


@dataclass(frozen=True)
class FileStatus:
    path: Path
    status: JobStatus
    detail: str = ""


@dataclass
class TriageReport:
    """Files grouped by job status."""

    completed: list[FileStatus] = field(default_factory=list)
    errors: list[FileStatus] = field(default_factory=list)
    pcm_failures: list[FileStatus] = field(default_factory=list)
    interrupted: list[FileStatus] = field(default_factory=list)
    unknown: list[FileStatus] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(len(group) for group in (self.completed, self.errors, self.interrupted, self.unknown))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(completed={len(self.completed)}, errors={len(self.errors)}, "
            f"pcm_failures={len(self.pcm_failures)}, interrupted={len(self.interrupted)}, unknown={len(self.unknown)})"
        )


@dataclass(frozen=True)
class ExtractionRecord:
    """Outcome of extracting one file: either energies and a summary, or an error message."""

    path: Path
    energies: EnergyComponents | None = None
    summary: ThermoSummary | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _resolve(program: QMProgram | str) -> QMProgram:
    return create_program(program) if isinstance(program, str) else program


def collect_output_files(
    directory: PathType, program: QMProgram | str, max_file_size_mb: float | None = None
) -> list[Path]:
    """
    Output files in `directory` claimed by the backend's extensions, sorted by name.

    Files larger than `max_file_size_mb` are skipped with a warning.
    """
    backend = _resolve(program)
    files: list[Path] = []
    for path in sorted(Path(directory).iterdir()):
        if not path.is_file() or not backend.claims(path):
            continue
        if max_file_size_mb is not None and path.stat().st_size > max_file_size_mb * 1024 * 1024:
            logger.warning(f"Skipping {path.name}: larger than {max_file_size_mb} MB")
            continue
        files.append(path)
    logger.info(f"Collected {len(files)} {backend.program_name()} output files from {directory}")
    return files


def _map(func: Callable[[Path], T], items: Sequence[Path], max_workers: int | None) -> list[T]:
    if max_workers is None or max_workers <= 1 or len(items) <= 1:
        return [func(item) for item in items]
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        return list(pool.map(func, items))


def triage_files(
    paths: Iterable[PathType],
    program: QMProgram | str,
    context: CommandContext | None = None,
    max_workers: int | None = None,
) -> TriageReport:
    """
    Classifies every file and groups the results.

    PCM failures are listed both under `errors` and `pcm_failures` when the
    backend can detect them. With `context.show_error_details`, error entries
    carry the backend's error description.
    """
    backend = _resolve(program)
    context = context or CommandContext(program=backend.program_name())
    check_pcm = getattr(backend, "check_pcm_convergence", None)
    error_type = getattr(backend, "check_error_type", None)

    def classify(path: Path) -> tuple[FileStatus, bool]:
        status = backend.check_job_status(path)
        detail = ""
        if status is JobStatus.ERROR and context.show_error_details and error_type is not None:
            detail = error_type(path)
        is_pcm = status is JobStatus.ERROR and check_pcm is not None and check_pcm(path)
        return FileStatus(path=path, status=status, detail=detail), is_pcm

    report = TriageReport()
    for entry, is_pcm in _map(classify, [Path(p) for p in paths], max_workers):
        if entry.status is JobStatus.COMPLETED:
            report.completed.append(entry)
        elif entry.status is JobStatus.ERROR:
            report.errors.append(entry)
            if is_pcm:
                report.pcm_failures.append(entry)
        elif entry.status is JobStatus.UNKNOWN:
            report.unknown.append(entry)
        else:
            report.interrupted.append(entry)

    if not context.quiet:
        logger.info(f"Triage finished: {report!r}")
    return report


def extract_summaries(
    paths: Iterable[PathType],
    program: QMProgram | str,
    context: CommandContext | None = None,
    max_workers: int | None = None,
) -> list[ExtractionRecord]:
    """Extracts energies and thermodynamic summaries for every file, capturing per-file failures."""
    backend = _resolve(program)
    context = context or CommandContext(program=backend.program_name())

    def extract(path: Path) -> ExtractionRecord:
        try:
            energies = backend.extract_energies(path)
        except (ExtractionError, ValidationError) as e:
            return ExtractionRecord(path=path, error=str(e))
        metadata = backend.get_metadata(path) if context.use_input_temp else None
        return ExtractionRecord(path=path, energies=energies, summary=summarize(energies, context, metadata))

    return _map(extract, [Path(p) for p in paths], max_workers)
