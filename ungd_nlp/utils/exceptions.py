from typing import Optional


class PipelineError(Exception):
    """Base error for every pipeline stage."""

    default_code = "PIPELINE_ERROR"

    def __init__(self, message: Optional[str] = None, code: Optional[str] = None):
        self.code = code or self.default_code
        self.message = message or "An error occurred"
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class DataLoadError(PipelineError):
    """Missing or malformed input file."""

    default_code = "DATA_LOAD_ERROR"


class InvalidConfigurationError(PipelineError):
    """A stage was given parameters it cannot run with."""

    default_code = "INVALID_CONFIGURATION"


class EmptyResultError(PipelineError):
    """A stage produced nothing to hand on to the next one."""

    default_code = "EMPTY_RESULT"


class NonConvergenceError(PipelineError):
    """Topic model did not reach its stopping criterion."""

    default_code = "NON_CONVERGENCE"

    def __init__(
        self,
        message: Optional[str] = None,
        code: Optional[str] = None,
        n_iter: Optional[int] = None,
    ):
        self.n_iter = n_iter
        super().__init__(message, code)


class DivisionUndefinedError(PipelineError):
    """Ratio requested over a zero denominator."""

    default_code = "DIVISION_UNDEFINED"
