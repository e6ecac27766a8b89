from .gridsearch import grid_search
from .train_model import train_single

__all__ = [
    "grid_search",
    "train_single",
]
