import re
from dataclasses import dataclass, field
from typing import List


def derive_identifier(name: str) -> str:
    """Build an identifier from a register name when none was declared.

    Every character outside [A-Za-z0-9_] becomes '_', and a leading '_' is
    added if the result would not start with a letter or underscore.
    """
    ident = re.sub(r'[^A-Za-z0-9_]', '_', name)
    if not re.match(r'[A-Za-z_]', ident):
        ident = '_' + ident
    return ident


@dataclass
class Register:
    """One register definition line."""
    names: List[str]
    identifier: str
    index: int
    line: int = 0  # source line, 0 when built by hand


@dataclass
class RegisterFile:
    filename: str
    registers: List[Register] = field(default_factory=list)

    @property
    def num_names(self) -> int:
        return sum(len(reg.names) for reg in self.registers)
