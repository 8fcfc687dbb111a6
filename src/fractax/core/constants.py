import numpy as np

"""Integer type used when a fraction is built from plain Python ints only"""
DEFAULT_INT_DTYPE = np.int64

"""
Canonical text tokens. A finite fraction prints as <num>/<den>, the non-finite
classes print as their token. The sign of an infinity is not part of its text.
"""
NAN_TEXT = "NaN"
INF_TEXT = "Inf"
FRACTION_SEPARATOR = "/"
