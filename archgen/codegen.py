import sys

from . import ast
from . import codegen_utils
from .trie import TrieNode, build_trie


class CodeGen:
    """Renders a RegisterFile as C: the register table, a name lookup
    function built from a trie of all register names, and a macro that
    bundles them for the architecture definition.

    The external symbols are only referenced by name.
    """

    def __init__(self, regfile: ast.RegisterFile,
                 regno_macro="DRGN_REGISTER_NUMBER",
                 macro_name="DRGN_ARCHITECTURE_REGISTERS",
                 register_layout="register_layout",
                 dwarf_regno_to_internal="dwarf_regno_to_internal"):
        self.print_debug = False  # Set to True to trace trie rendering on stderr
        self.regfile = regfile
        self.regno_macro = regno_macro
        self.macro_name = macro_name
        self.register_layout = register_layout
        self.dwarf_regno_to_internal = dwarf_regno_to_internal
        self.lines = []
        # The lookup function walks a char *, so branch on encoded bytes
        self.trie = build_trie(regfile.registers, encoding="utf-8")

    def emit(self, s=""):
        self.lines.append(s)

    def _emit_registers(self):
        registers = self.regfile.registers
        if not registers:
            self.emit("static const struct drgn_register registers[] = {};")
            return
        self.emit("static const struct drgn_register registers[] = {")
        for reg in registers:
            names = " ".join(codegen_utils.c_string_literal(name) + "," for name in reg.names)
            self.emit(f"\t/* {reg.index} */")
            self.emit("\t{")
            self.emit(f"\t\t.names = (const char * const []){{ {names} }},")
            self.emit(f"\t\t.num_names = {len(reg.names)},")
            self.emit(f"\t\t.regno = {self.regno_macro}({reg.identifier}),")
            self.emit("\t},")
        self.emit("};")

    def _emit_switch(self, node: TrieNode, depth: int, prefix: str = ""):
        """Emit a switch on the next character of p for one trie node."""
        indent = "\t" * depth
        if self.print_debug:
            print(f"DEBUG: node {prefix!r} terminal={node.terminal} "
                  f"children={[c for c, _ in node.sorted_children()]}", file=sys.stderr)
        self.emit(indent + "switch (*(p++)) {")
        # '\0' sorts before every other byte
        if node.terminal is not None:
            self.emit(indent + "case '\\0':")
            self.emit(indent + f"\treturn &registers[{node.terminal}];")
        for c, child in node.sorted_children():
            self.emit(indent + f"case {codegen_utils.c_char_literal(c)}:")
            self._emit_switch(child, depth + 1, prefix + c)
        self.emit(indent + "default:")
        self.emit(indent + "\treturn NULL;")
        self.emit(indent + "}")

    def _emit_lookup(self):
        self.emit("static const struct drgn_register *register_by_name(const char *p)")
        self.emit("{")
        self._emit_switch(self.trie, 1)
        self.emit("}")

    def _emit_macro(self):
        members = [
            ".registers = registers",
            f".num_registers = {len(self.regfile.registers)}",
            ".register_by_name = register_by_name",
            f".register_layout = {self.register_layout}",
            f".dwarf_regno_to_internal = {self.dwarf_regno_to_internal}",
        ]
        self.emit(f"#define {self.macro_name} \\")
        for member in members[:-1]:
            self.emit(f"\t{member}, \\")
        self.emit(f"\t{members[-1]}")

    def gen(self) -> str:
        self.lines = []
        self.emit("/* Generated by archgen. Do not edit. */")
        self.emit()
        self._emit_registers()
        self.emit()
        self._emit_lookup()
        self.emit()
        self._emit_macro()
        return "\n".join(self.lines) + "\n"
