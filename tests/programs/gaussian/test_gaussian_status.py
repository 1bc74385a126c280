from pathlib import Path

import pytest

from thermoflow.programs.gaussian import GaussianProgram, classify_text
from thermoflow.programs.gaussian.status import find_error_type, has_pcm_failure
from thermoflow.typing import JobStatus

ex_folder = Path(__file__).resolve().parents[2] / "data" / "gaussian"


@pytest.mark.parametrize(
    "filename, expected",
    [
        ("h2o_opt_freq.log", JobStatus.COMPLETED),
        ("h2o_sp_high.log", JobStatus.COMPLETED),
        ("ts_imaginary.log", JobStatus.COMPLETED),
        ("h2o_error.log", JobStatus.ERROR),
        ("h2o_pcm_fail.log", JobStatus.ERROR),
        ("h2o_running.log", JobStatus.INTERRUPTED),
    ],
)
def test_check_job_status(gaussian: GaussianProgram, filename: str, expected: JobStatus) -> None:
    assert gaussian.check_job_status(ex_folder / filename) is expected


def test_missing_file_is_unknown(gaussian: GaussianProgram, tmp_path: Path) -> None:
    assert gaussian.check_job_status(tmp_path / "missing.log") is JobStatus.UNKNOWN


def test_empty_file_is_interrupted(gaussian: GaussianProgram, tmp_path: Path) -> None:
    empty = tmp_path / "empty.log"
    empty.write_text("")
    assert gaussian.check_job_status(empty) is JobStatus.INTERRUPTED


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", JobStatus.INTERRUPTED),
        (" Normal termination of Gaussian 16 at Wed Mar  5 10:12:44 2025.", JobStatus.COMPLETED),
        (" Error termination via Lnk1e in /opt/g16/l502.exe", JobStatus.ERROR),
        (" Fatal Error: reading the checkpoint file", JobStatus.ERROR),
        (" Erroneous write. Write -1 instead of 2048.", JobStatus.ERROR),
        (" File lengths do not match: 1024 vs 2048", JobStatus.ERROR),
        (" Error in internal coordinate system.", JobStatus.ERROR),
        (" Convergence failure -- run terminated.", JobStatus.ERROR),
        (" PCM cycles did not converge", JobStatus.ERROR),
        (" PCM optimization failed", JobStatus.ERROR),
        (" File lengths (MBytes):  RWF=      5 Int=      0", JobStatus.INTERRUPTED),
        (" SCF Done:  E(RHF) = -76.123456     A.U. after    9 cycles", JobStatus.INTERRUPTED),
    ],
)
def test_classify_text(text: str, expected: JobStatus) -> None:
    assert classify_text(text) is expected


def test_normal_termination_wins_over_error_markers() -> None:
    # an earlier link failed but the job recovered and finished
    text = " Error termination request processed by link 9999.\n Normal termination of Gaussian 16 at Thu Mar  6 2025."
    assert classify_text(text) is JobStatus.COMPLETED


def test_classification_is_stable(gaussian: GaussianProgram) -> None:
    path = ex_folder / "h2o_error.log"
    assert {gaussian.check_job_status(path) for _ in range(3)} == {JobStatus.ERROR}


def test_pcm_failure(gaussian: GaussianProgram) -> None:
    assert gaussian.check_pcm_convergence(ex_folder / "h2o_pcm_fail.log")
    assert not gaussian.check_pcm_convergence(ex_folder / "h2o_error.log")
    assert not gaussian.check_pcm_convergence(ex_folder / "does_not_exist.log")
    assert has_pcm_failure(" PCM cycles did not converge")
    assert not has_pcm_failure("")


@pytest.mark.parametrize(
    "filename, expected",
    [
        ("h2o_error.log", "Error termination"),
        ("h2o_pcm_fail.log", "Convergence failure"),
        ("h2o_opt_freq.log", ""),
        ("does_not_exist.log", ""),
    ],
)
def test_check_error_type(gaussian: GaussianProgram, filename: str, expected: str) -> None:
    assert gaussian.check_error_type(ex_folder / filename) == expected


def test_error_type_order() -> None:
    assert find_error_type(" File lengths do not match\n Fatal Error") == "File length mismatch"
    assert find_error_type(" Fatal Error") == "Fatal error"
    assert find_error_type(" Convergence failure\n Error termination") == "Error termination"
