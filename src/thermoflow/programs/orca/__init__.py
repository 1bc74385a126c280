from thermoflow.programs.orca.program import OrcaProgram

__all__ = ["OrcaProgram"]
