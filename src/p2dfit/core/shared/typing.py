"""Shared typing aliases used across p2dfit."""

from collections.abc import Callable

import numpy as np
import numpy.typing as npt

FloatArray = npt.NDArray[np.float64]
ArrayLike = npt.ArrayLike

# Scalar objective evaluated on a parameter vector
Objective = Callable[[FloatArray], float]
