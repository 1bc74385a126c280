class ThermoflowError(Exception):
    """Base class for exceptions in the thermoflow package."""

    pass


class ExtractionError(ThermoflowError):
    """Exception raised when an output file cannot be read for extraction."""

    pass


class ValidationError(ThermoflowError):
    """Exception raised when extracted results fail plausibility checks."""

    pass


class UnsupportedProgramError(ThermoflowError):
    """Exception raised when no backend is registered under the requested name."""

    def __init__(self, program_name: str) -> None:
        self.program_name = program_name
        super().__init__(f"Unsupported quantum chemistry program: {program_name}")


class ConfigurationError(ThermoflowError):
    """Exception raised for configuration-related errors."""

    pass


class InternalCodeError(ThermoflowError):
    """Exception raised for errors in the internal code."""

    pass
