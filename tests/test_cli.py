import pytest

from archgen.cli import main


X86_DEFS = '"rax", "eax" : RAX\n"rbx" : RBX\n'


def _write(tmp_path, text, name="arch.defs"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_writes_to_stdout(tmp_path, capsys):
    path = _write(tmp_path, X86_DEFS)
    main([str(path)])
    captured = capsys.readouterr()
    assert captured.out.startswith("/* Generated by archgen. Do not edit. */\n")
    assert "DRGN_REGISTER_NUMBER(RAX)" in captured.out
    assert "\t.num_registers = 2, \\\n" in captured.out
    assert captured.err == ""


def test_same_input_same_output(tmp_path, capsys):
    first = _write(tmp_path, X86_DEFS, "a.defs")
    second = _write(tmp_path, X86_DEFS, "b.defs")
    main([str(first)])
    out_first = capsys.readouterr().out
    main([str(second)])
    assert capsys.readouterr().out == out_first


def test_output_file(tmp_path, capsys):
    path = _write(tmp_path, X86_DEFS)
    out = tmp_path / "arch.inc"
    main([str(path), "-o", str(out), "-v"])
    captured = capsys.readouterr()
    assert captured.out == ""
    assert f"Parsed 2 registers (3 names) from {path}" in captured.err
    assert f"Wrote {out}" in captured.err
    assert "register_by_name" in out.read_text(encoding="utf-8")


def test_symbol_options(tmp_path, capsys):
    path = _write(tmp_path, '"r0"\n')
    main([str(path), "--regno-macro", "REGNO", "--macro-name", "REGS",
          "--register-layout", "layout", "--dwarf-regno-to-internal", "dwarf_map"])
    out = capsys.readouterr().out
    assert "REGNO(r0)" in out
    assert "#define REGS \\\n" in out
    assert "\t.register_layout = layout, \\\n" in out
    assert out.endswith("\t.dwarf_regno_to_internal = dwarf_map\n")


def test_syntax_error_exits_nonzero(tmp_path, capsys):
    path = _write(tmp_path, '"rax" : RAX\n"rbx" : RBX junk\n')
    with pytest.raises(SystemExit) as excinfo:
        main([str(path)])
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == f"{path}:2:13: error: expected end of line\n"


def test_duplicate_name_writes_nothing(tmp_path, capsys):
    path = _write(tmp_path, '"rax"\n"rax"\n')
    out = tmp_path / "arch.inc"
    with pytest.raises(SystemExit) as excinfo:
        main([str(path), "-o", str(out)])
    assert excinfo.value.code == 1
    assert not out.exists()
    assert capsys.readouterr().err == f'{path}:2:1: error: duplicate register name "rax"\n'


def test_missing_input(tmp_path, capsys):
    path = tmp_path / "missing.defs"
    with pytest.raises(SystemExit) as excinfo:
        main([str(path)])
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith(f"{path}: error: ")


def test_invalid_utf8(tmp_path, capsys):
    path = tmp_path / "bad.defs"
    path.write_bytes(b'"r\xff"\n')
    with pytest.raises(SystemExit) as excinfo:
        main([str(path)])
    assert excinfo.value.code == 1
    assert capsys.readouterr().err.startswith(f"{path}: error: ")
