"""Parser for register definition files.

Each non-blank, non-comment line declares one register:

    "rax", "eax" : RAX
    "rip"

The quoted strings are the register's names and the optional token after
':' is its identifier. Without one, the identifier is derived from the first
name (see ast.derive_identifier).
"""
from lark import Lark, Transformer
from lark.exceptions import UnexpectedInput, UnexpectedToken, UnexpectedCharacters

from . import ast


GRAMMAR = r"""
start: names (COLON IDENTIFIER)?
names: STRING (COMMA STRING)*

STRING: /"[^"]*"/
IDENTIFIER: /[A-Za-z_][A-Za-z0-9_]*/
COMMA: ","
COLON: ":"

%ignore /[ \t\f\v\r]+/
"""


class DefinitionError(Exception):
    """Error in a register definition file, with its source location."""

    def __init__(self, filename, line, column, message):
        super().__init__(message)
        self.filename = filename
        self.line = line
        self.column = column
        self.message = message

    def __str__(self):
        return f"{self.filename}:{self.line}:{self.column}: error: {self.message}"


class MalformedSyntax(DefinitionError):
    """Unexpected token where a name, identifier, separator or end of line was expected."""
    pass


class DuplicateName(DefinitionError):
    """Register name already used by an earlier definition."""
    pass


class DefinitionBuilder(Transformer):
    """Turns one parsed line into (name tokens, identifier or None)."""

    def start(self, items):
        identifier = None
        for item in items[1:]:
            if item.type == 'IDENTIFIER':
                identifier = str(item)
        return items[0], identifier

    def names(self, items):
        # Keep the tokens so duplicates can be reported at their column
        return [tok for tok in items if tok.type == 'STRING']


def _expected_message(expected):
    if 'STRING' in expected:
        return "expected register name"
    if 'IDENTIFIER' in expected:
        return "expected identifier"
    if 'COMMA' in expected:
        return 'expected ",", ":", or end of line'
    return "expected end of line"


def _syntax_error(e, text, filename, lineno):
    """Convert a lark error on one line into a MalformedSyntax."""
    if isinstance(e, UnexpectedToken):
        expected = set(e.expected)
        if e.token.type == '$END':
            # lark places $END on the last token; point past the line instead
            column = len(text.rstrip()) + 1
        else:
            column = e.column
        message = _expected_message(expected)
    elif isinstance(e, UnexpectedCharacters):
        expected = set(e.allowed or ())
        column = e.column
        if e.char == '"' and 'STRING' in expected:
            message = "unterminated string"
        else:
            message = _expected_message(expected)
    else:
        column = getattr(e, 'column', 1)
        message = "syntax error"
    return MalformedSyntax(filename, lineno, column, message)


def is_skipped(text):
    """Blank lines and lines starting with '#' carry no definition."""
    stripped = text.strip()
    return not stripped or stripped.startswith('#')


def parse(text, filename="<input>"):
    """Parse register definitions from text.

    Returns an ast.RegisterFile whose registers are numbered in declaration
    order. Raises MalformedSyntax or DuplicateName on the first error.
    """
    parser = Lark(GRAMMAR, parser="lalr")
    builder = DefinitionBuilder()
    regfile = ast.RegisterFile(filename=filename)
    seen = {}  # name -> index of the register that declared it

    for lineno, line in enumerate(text.split('\n'), 1):
        if is_skipped(line):
            continue
        try:
            tree = parser.parse(line)
        except UnexpectedInput as e:
            raise _syntax_error(e, line, filename, lineno) from None

        tokens, identifier = builder.transform(tree)
        index = len(regfile.registers)
        names = []
        for tok in tokens:
            name = tok.value[1:-1]
            if name in seen:
                raise DuplicateName(filename, lineno, tok.column,
                                    f'duplicate register name "{name}"')
            seen[name] = index
            names.append(name)

        if identifier is None:
            identifier = ast.derive_identifier(names[0])
        regfile.registers.append(
            ast.Register(names=names, identifier=identifier, index=index, line=lineno))

    return regfile


def parse_file(path):
    """Read and parse a definition file. OSError propagates to the caller."""
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    return parse(text, filename=str(path))
