class DartQCError(Exception):
    """Base class for errors raised by dartqc."""


class InvalidDatasetError(DartQCError, ValueError):
    """The input is not a usable Dataset (wrong type, mixed ploidy, misaligned
    metadata, no loci)."""


class MissingMetricError(DartQCError, KeyError):
    """A locus metric required by an operation is absent from `dset.locus`."""

    def __init__(self, metric: str, available=()):
        self.metric = metric
        self.available = list(available)
        super().__init__(metric)

    def __str__(self) -> str:
        return (
            f"Dataset does not include '{self.metric}' among the locus metrics; "
            f"available: {self.available}"
        )
