"""Engine subpackage - condition factors and estimate composition."""
from .estimate_engine import EstimateEngine, compute_estimate
from .models import EstimateInput, EstimateResult, EstimateSuccess, EstimateFailure

__all__ = [
    'EstimateEngine',
    'compute_estimate',
    'EstimateInput',
    'EstimateResult',
    'EstimateSuccess',
    'EstimateFailure',
]
