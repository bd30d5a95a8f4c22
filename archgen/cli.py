import argparse
import sys
from . import parser, codegen


def main(argv=None):
    ap = argparse.ArgumentParser(
        prog="archgen",
        description="Generate a register table and name lookup function from register definitions")
    ap.add_argument("input", help="Input register definition file")
    ap.add_argument("-o", "--output", help="Output file (default: standard output)")
    ap.add_argument("--regno-macro", default="DRGN_REGISTER_NUMBER",
                    help="Macro applied to register identifiers")
    ap.add_argument("--macro-name", default="DRGN_ARCHITECTURE_REGISTERS",
                    help="Name of the generated aggregation macro")
    ap.add_argument("--register-layout", default="register_layout",
                    help="Register layout symbol referenced by the macro")
    ap.add_argument("--dwarf-regno-to-internal", default="dwarf_regno_to_internal",
                    help="DWARF register number translation symbol referenced by the macro")
    ap.add_argument("-v", "--verbose", action="store_true", help="Print a summary to stderr")
    args = ap.parse_args(argv)

    try:
        regfile = parser.parse_file(args.input)
    except parser.DefinitionError as e:
        print(e, file=sys.stderr)
        sys.exit(1)
    except UnicodeDecodeError as e:
        print(f"{args.input}: error: {e}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"{args.input}: error: {e.strerror or e}", file=sys.stderr)
        sys.exit(1)

    if args.verbose:
        print(f"Parsed {len(regfile.registers)} registers ({regfile.num_names} names) from {args.input}",
              file=sys.stderr)

    cg = codegen.CodeGen(
        regfile,
        regno_macro=args.regno_macro,
        macro_name=args.macro_name,
        register_layout=args.register_layout,
        dwarf_regno_to_internal=args.dwarf_regno_to_internal,
    )
    out = cg.gen()

    if args.output:
        try:
            with open(args.output, "w", encoding="utf-8") as f:
                f.write(out)
        except OSError as e:
            print(f"{args.output}: error: {e.strerror or e}", file=sys.stderr)
            sys.exit(1)
        if args.verbose:
            print(f"Wrote {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(out)


if __name__ == "__main__":
    main()
