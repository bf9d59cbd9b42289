"""Display formatting - applied only when rendering, never to stored values."""
from .breakdown import (
    build_breakdown_text,
    factor_rows,
    num,
    round_factor,
    round_half_up,
    yen,
)

__all__ = [
    'build_breakdown_text',
    'factor_rows',
    'num',
    'round_factor',
    'round_half_up',
    'yen',
]
