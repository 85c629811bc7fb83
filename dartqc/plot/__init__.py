from ._plot import hist, boxplot, adjusted_fences, smearplot, quality_profile


__all__ = ["hist", "boxplot", "adjusted_fences", "smearplot", "quality_profile"]
