class TransformError(Exception):
    """Base class for all the errors raised while transforming a Java unit"""

    pass


class ParseError(TransformError):
    """The input file cannot be parsed as Java"""

    pass


class ConfigurationError(TransformError):
    """
    The input no longer matches the conventions encoded in the rules (unknown accessor prefix, unknown field, etc.),
    or the rules file itself is invalid.
    """

    pass


class BatchError(TransformError):
    """Raised at the end of a batch run if some of the input files could not be transformed"""

    def __init__(self, failures):
        self.failures = failures
        names = ", ".join(f for f, _ in failures)
        super().__init__(f"{len(failures)} file(s) failed: {names}")
