import pytest

from instakod.parser import (
    Add,
    CommandSyntaxError,
    Comp,
    Condition,
    IfJump,
    Jump,
    JumpDest,
    JumpKind,
    Newline,
    ParseError,
    PrintText,
    PrintVar,
    ReadVar,
    Set,
    Sub,
    Variable,
    parse_command,
    parse_comp,
    parse_condition,
    parse_file,
    parse_jump_dest,
    parse_lines,
    parse_text_literal,
    parse_var_or_num,
    parse_variable,
)


@pytest.mark.parametrize("name", ["A", "B", "C", "D"])
def test_parse_variable_valid(name):
    assert parse_variable(name).value == name


@pytest.mark.parametrize("name", ["a", "E", "", " A", "AB"])
def test_parse_variable_invalid(name):
    with pytest.raises(CommandSyntaxError, match="variable"):
        parse_variable(name)


def test_parse_var_or_num():
    assert parse_var_or_num("C") is Variable.C
    assert parse_var_or_num("17") == 17
    assert parse_var_or_num("+8") == 8
    assert parse_var_or_num("4294967295") == 4294967295


@pytest.mark.parametrize("text", ["4294967296", "-1", "x", "", "1 2"])
def test_parse_var_or_num_invalid(text):
    with pytest.raises(CommandSyntaxError, match="variable or number"):
        parse_var_or_num(text)


@pytest.mark.parametrize("text", ["NXT", "NEXT"])
def test_parse_jump_dest_next(text):
    assert parse_jump_dest(text) == JumpDest(JumpKind.NEXT)


def test_parse_jump_dest_end_and_number():
    assert parse_jump_dest("END") == JumpDest(JumpKind.END)
    assert parse_jump_dest("12") == JumpDest(JumpKind.NTH, 12)


def test_parse_jump_dest_zero():
    with pytest.raises(CommandSyntaxError, match="zero"):
        parse_jump_dest("0")


@pytest.mark.parametrize("text", ["-3", "end", "abc", ""])
def test_parse_jump_dest_invalid(text):
    with pytest.raises(CommandSyntaxError, match="jump destination"):
        parse_jump_dest(text)


@pytest.mark.parametrize(
    "symbol, word",
    [("<", "LT"), ("<=", "LE"), ("=", "EQ"), ("!=", "NE"), (">", "GT"), (">=", "GE")],
)
def test_parse_comp_aliases(symbol, word):
    assert parse_comp(symbol) is parse_comp(word)
    assert parse_comp(symbol).value == symbol


def test_parse_comp_invalid():
    with pytest.raises(CommandSyntaxError, match="comparison"):
        parse_comp("==")


def test_parse_condition():
    assert parse_condition("A >= B") == Condition(Variable.A, Comp.GE, Variable.B)
    assert parse_condition("D NE 5") == Condition(Variable.D, Comp.NE, 5)


@pytest.mark.parametrize("text", ["A", "A <"])
def test_parse_condition_too_short(text):
    with pytest.raises(CommandSyntaxError, match="Not enough segments"):
        parse_condition(text)


def test_parse_text_literal_escapes():
    assert parse_text_literal(' "say \\"hi\\" \\\\ ok"') == 'say "hi" \\ ok'


def test_parse_text_literal_ignores_trailing_text():
    assert parse_text_literal('"x" trailing') == "x"


@pytest.mark.parametrize("text", ["hello", '"unterminated', '"ends in escape\\'])
def test_parse_text_literal_missing_quote(text):
    with pytest.raises(CommandSyntaxError, match="quotation"):
        parse_text_literal(text)


def test_parse_text_literal_bad_escape():
    with pytest.raises(CommandSyntaxError, match="escape"):
        parse_text_literal('"a\\nb"')


def test_parse_simple_commands():
    assert parse_command("NLN") == Newline()
    assert parse_command("PVR B") == PrintVar(Variable.B)
    assert parse_command("LTV D") == ReadVar(Variable.D)
    assert parse_command('PTX "hi there"') == PrintText("hi there")


def test_parse_arithmetic_commands():
    assert parse_command("SET A B") == Set(Variable.A, Variable.B)
    assert parse_command("ADD C 7") == Add(Variable.C, 7)
    assert parse_command("SUB D 0") == Sub(Variable.D, 0)


@pytest.mark.parametrize("text, word", [("SET A", "set"), ("ADD B", "add"), ("SUB C", "sub")])
def test_parse_arithmetic_missing_operand(text, word):
    with pytest.raises(CommandSyntaxError, match=f"Invalid {word} invocation"):
        parse_command(text)


def test_parse_ifj():
    expected = IfJump(
        Condition(Variable.A, Comp.LT, 5),
        JumpDest(JumpKind.NTH, 3),
        JumpDest(JumpKind.END),
    )
    assert parse_command("IFJ A < 5 3 END") == expected
    assert parse_command("IF A LT 5 3 END") == expected


def test_parse_ifj_missing_parts():
    with pytest.raises(CommandSyntaxError, match="ifj invocation"):
        parse_command("IFJ NXT END")


def test_parse_jmp():
    assert parse_command("JMP NEXT") == Jump(JumpDest(JumpKind.NEXT))
    with pytest.raises(CommandSyntaxError, match="zero"):
        parse_command("JMP 0")


@pytest.mark.parametrize("text", ["", "NLN extra", "set A 1", "FOO A", "PVR"])
def test_parse_command_invalid_name(text):
    with pytest.raises(CommandSyntaxError):
        parse_command(text)


def test_parse_lines_strips_comments():
    commands = parse_lines(["  SET A 1   # start", "NLN#done"])
    assert commands == [Set(Variable.A, 1), Newline()]


def test_parse_lines_reports_line_number():
    with pytest.raises(ParseError) as info:
        parse_lines(["NLN", "# only a comment"])
    assert info.value.line == 2
    assert isinstance(info.value.__cause__, CommandSyntaxError)
    assert "line 2" in str(info.value)


def test_parse_file_handles_crlf(tmp_path):
    path = tmp_path / "prog.ik"
    path.write_bytes(b'PTX "a"\r\nJMP END\r\n')
    assert parse_file(path) == [PrintText("a"), Jump(JumpDest(JumpKind.END))]


def test_parse_file_empty(tmp_path):
    path = tmp_path / "empty.ik"
    path.write_text("", encoding="utf-8")
    assert parse_file(path) == []


def test_parse_file_missing(tmp_path):
    with pytest.raises(OSError):
        parse_file(tmp_path / "nope.ik")