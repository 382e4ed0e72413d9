from .random import RandomSource, derive_seed

__all__ = ["RandomSource", "derive_seed"]
