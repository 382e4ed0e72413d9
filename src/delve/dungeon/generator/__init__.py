from .nystrom import generate_nystrom
from .simple import generate_simple
from .variants import MapVariant, Nystrom, Simple

__all__ = ["MapVariant", "Nystrom", "Simple", "generate_nystrom", "generate_simple"]
