from .selection import tournament_selection
from .genetic_operators import (
    swap_mutation,
    adaptive_mutation,
    multi_point_crossover,
    repair_permutation,
)
