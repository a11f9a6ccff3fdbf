from fockstate.annotation import Annotation
from fockstate.config import Config, Session
from fockstate.exceptions import (
    FockStateError,
    FockStateParseError,
    InvalidArgumentError,
    ModeIndexError,
    UndefinedStateError,
)
from fockstate.fock import build_symm_basis, build_symm_mode_basis, calc_symm_dim, iter_symm_basis
from fockstate.hashing import hash_function
from fockstate.logs import setup_logging
from fockstate.norm import basis_norms, calc_norm
from fockstate.parser import ParsedFock, parse_fock_str
from fockstate.state import FockState
