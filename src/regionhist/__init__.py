"""Region histograms - per-channel intensity signatures and intersection similarity."""

from .binning import RangeError, scalar_histogram
from .channels import (
    ImageSource,
    NumpyImageSource,
    channel_histograms,
    compute_signature,
    concatenated_histogram,
    split_signature,
)
from .config import HistogramConfig
from .export import output_histogram, read_histogram, write_histogram
from .models import RangeViolation, Region
from .numeric import ComponentTraits, component_traits, default_range
from .similarity import (
    IntersectionSimilarity,
    SimilarityMetric,
    batch_histogram_intersection,
    histogram_intersection,
)

__version__ = "0.1.0"

__all__ = [
    "ComponentTraits",
    "HistogramConfig",
    "ImageSource",
    "IntersectionSimilarity",
    "NumpyImageSource",
    "RangeError",
    "RangeViolation",
    "Region",
    "SimilarityMetric",
    "batch_histogram_intersection",
    "channel_histograms",
    "component_traits",
    "compute_signature",
    "concatenated_histogram",
    "default_range",
    "histogram_intersection",
    "output_histogram",
    "read_histogram",
    "scalar_histogram",
    "split_signature",
    "write_histogram",
]
