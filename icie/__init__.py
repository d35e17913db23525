"""ICIE: competitive-programming editor extension built on the evscode framework.

Importing any part of the package first runs the declaration phase, so the
declaring modules always execute in ``DECLARING_MODULES`` order no matter
which submodule a caller reaches for first.
"""

from icie.extension import load_declarations

load_declarations()
