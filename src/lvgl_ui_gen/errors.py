# errors.py


class GeneratorError(Exception):
    """Base class for errors raised while generating UI code."""


class ProjectConfigError(GeneratorError):
    """The project configuration is missing or invalid. Generation cannot run."""


class MalformedGuardsError(GeneratorError):
    """
    The previous implementation file has unbalanced USER CODE markers.

    Overwriting it would lose the user code inside the broken regions, so the
    caller has to confirm explicitly (see `regenerate(overwrite_malformed=True)`).
    """

    def __init__(self, diagnostics):
        self.diagnostics = list(diagnostics)
        details = "; ".join(str(d) for d in self.diagnostics)
        super().__init__(f"Guard markers may be corrupted: {details}")


class DroppedRegionsError(GeneratorError):
    """Regeneration would discard user code from regions that no longer exist."""

    def __init__(self, region_ids):
        self.region_ids = list(region_ids)
        super().__init__(f"User code would be discarded for regions: {', '.join(self.region_ids)}")
