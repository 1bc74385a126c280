from pathlib import Path

import pytest

from thermoflow.programs.gaussian import GaussianProgram, RouteInfo, find_route_section, parse_route_section
from thermoflow.programs.gaussian.route import dispersion_label, parse_conditions, parse_program_version
from thermoflow.typing import CalculationMetadata, JobStatus

ex_folder = Path(__file__).resolve().parents[2] / "data" / "gaussian"


@pytest.fixture(scope="module")
def opt_freq_metadata(gaussian: GaussianProgram) -> CalculationMetadata:
    return gaussian.get_metadata(ex_folder / "h2o_opt_freq.log")


def test_wrapped_route_is_joined() -> None:
    text = (ex_folder / "h2o_opt_freq.log").read_text()
    assert find_route_section(text) == (
        "#p opt freq b3lyp/6-31g(d) scrf=(smd,solvent=water) empiricaldispersion=gd3bj"
    )


def test_no_route() -> None:
    assert find_route_section(" SCF Done:  E(RHF) = -76.1\n") == ""
    assert parse_route_section("") == RouteInfo()


def test_metadata(opt_freq_metadata: CalculationMetadata) -> None:
    assert opt_freq_metadata.program_version == "Gaussian 16 C.01"
    assert opt_freq_metadata.method == "b3lyp"
    assert opt_freq_metadata.basis_set == "6-31g(d)"
    assert opt_freq_metadata.keywords == ("opt", "freq", "scrf=(smd,solvent=water)", "empiricaldispersion=gd3bj")
    assert opt_freq_metadata.solvent == "water"
    assert opt_freq_metadata.temperature == 298.15
    assert opt_freq_metadata.pressure == 1.0
    assert opt_freq_metadata.status is JobStatus.COMPLETED
    assert opt_freq_metadata.file_path.endswith("h2o_opt_freq.log")


@pytest.mark.parametrize(
    "filename, method, basis, solvent",
    [
        ("h2o_sp_high.log", "wb97xd", "def2tzvp", None),
        ("h2o_error.log", "m062x", "6-311+g(d,p)", None),
        ("h2o_pcm_fail.log", "b3lyp", "6-31+g(d)", "acetonitrile"),
        ("h2o_running.log", "pbe0", "cc-pvtz", None),
        ("ts_imaginary.log", "b3lyp", "def2svp", None),
    ],
)
def test_level_of_theory(
    gaussian: GaussianProgram, filename: str, method: str, basis: str, solvent: str | None
) -> None:
    metadata = gaussian.get_metadata(ex_folder / filename)
    assert metadata.method == method
    assert metadata.basis_set == basis
    assert metadata.solvent == solvent


def test_conditions_from_thermochemistry_block(gaussian: GaussianProgram) -> None:
    metadata = gaussian.get_metadata(ex_folder / "ts_imaginary.log")
    assert metadata.program_version == "Gaussian 09 D.01"
    assert metadata.temperature == 353.15
    assert metadata.pressure == 2.0
    assert metadata.keywords == ("opt=(ts,calcfc,noeigentest)", "freq")


def test_conditions_default_when_absent() -> None:
    assert parse_conditions("") == (298.15, 1.0)


def test_program_version() -> None:
    assert parse_program_version(" Gaussian 16, Revision A.03,") == "Gaussian 16 A.03"
    assert parse_program_version("no banner") == ""


def test_metadata_of_missing_file(gaussian: GaussianProgram, tmp_path: Path) -> None:
    metadata = gaussian.get_metadata(tmp_path / "missing.log")
    assert metadata.status is JobStatus.ERROR
    assert metadata.method == ""
    assert metadata.keywords == ()


def test_unknown_method_leaves_fields_empty() -> None:
    info = parse_route_section("#p sp mymethod/mybasis")
    assert info.method == ""
    assert info.basis_set == ""
    assert info.keywords == ("sp", "mymethod/mybasis")


def test_method_with_open_shell_prefix_and_dash() -> None:
    info = parse_route_section("#n ub3lyp-d3/aug-cc-pvdz opt")
    assert info.method == "b3lyp"
    assert info.basis_set == "aug-cc-pvdz"
    assert info.keywords == ("opt",)


def test_method_and_basis_in_separate_tokens() -> None:
    info = parse_route_section("#t CCSD(T) cc-pVTZ freq")
    assert info.method == "CCSD(T)"
    assert info.basis_set == "cc-pVTZ"
    assert info.keywords == ("freq",)


def test_scrf_without_solvent_defaults_to_water() -> None:
    assert parse_route_section("#p b3lyp/6-31g(d) scrf=pcm").solvent == "water"
    assert parse_route_section("#p b3lyp/6-31g(d) scrf=(cpcm,solvent=Toluene)").solvent == "toluene"


@pytest.mark.parametrize(
    "route, expected",
    [
        ("#p b3lyp/6-31g(d) empiricaldispersion=gd3bj", "D3BJ"),
        ("#p b3lyp/6-31g(d) EmpiricalDispersion=(GD3)", "D3"),
        ("#p b3lyp/6-31g(d) empiricaldispersion=gd2", "D2"),
        ("#p b97d3/def2tzvp", "D3"),
        ("#p b3lyp/6-31g(d) opt", None),
        ("", None),
    ],
)
def test_dispersion_label(route: str, expected: str | None) -> None:
    assert dispersion_label(route) == expected


def test_get_dispersion_type(gaussian: GaussianProgram, tmp_path: Path) -> None:
    assert gaussian.get_dispersion_type(ex_folder / "h2o_opt_freq.log") == "D3BJ"
    assert gaussian.get_dispersion_type(ex_folder / "h2o_running.log") is None
    assert gaussian.get_dispersion_type(tmp_path / "missing.log") is None


def test_validate_calculation_type(gaussian: GaussianProgram) -> None:
    assert gaussian.validate_calculation_type(gaussian.get_metadata(ex_folder / "h2o_opt_freq.log"))
    assert not gaussian.validate_calculation_type(CalculationMetadata())
