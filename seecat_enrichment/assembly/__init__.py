"""Record assembly and output contract validation."""

from .assembler import ResultAssembler
from .validators import validate_record_inputs

__all__ = ["ResultAssembler", "validate_record_inputs"]
