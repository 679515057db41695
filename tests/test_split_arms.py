from nscfg.core.errors import ExpansionError
from nscfg.core.parse.arms import split_arms


def _code(text: str) -> str:
    try:
        split_arms(text)
    except ExpansionError as e:
        return e.code
    assert False, "expected ExpansionError"


def test_split_two_braced_arms_keeps_order():
    arms = split_arms(
        """
        x86_64:ar => {
            pub fn foo1() {}
        },
        x86:ar => {
            pub fn foo3() {}
        }
        """
    )
    assert [a.condition for a in arms] == ["x86_64:ar", "x86:ar"]
    assert [a.index for a in arms] == [0, 1]
    assert arms[0].content == "pub fn foo1() {}"
    assert arms[0].braced is True


def test_trailing_comma_is_optional():
    with_comma = split_arms("linux => {}, _ => {},")
    without = split_arms("linux => {}, _ => {}")
    assert with_comma == without
    assert len(with_comma) == 2


def test_separators_inside_groups_and_strings_are_ignored():
    arms = split_arms(
        '#[cfg(any(unix, windows))] => { let a = (1, 2); let s = "x, y => z"; }, '
        '_ => match v { 1 => a, _ => b }'
    )
    assert len(arms) == 2
    assert arms[0].condition == "#[cfg(any(unix, windows))]"
    assert arms[1].content == "match v { 1 => a, _ => b }"
    assert arms[1].braced is False


def test_comments_do_not_split():
    arms = split_arms("linux => {\n    // a, b => c\n    pub fn f() {}\n}")
    assert len(arms) == 1
    assert "pub fn f() {}" in arms[0].content


def test_empty_input_has_no_arms():
    assert split_arms("   \n") == []


def test_missing_content_separator():
    assert _code("linux {}, #[cfg(unix)] => {}") == "ContentSeparatorMissing"


def test_malformed_content_separator():
    assert _code("linux = > {}") == "ContentSeparatorError"
    assert _code("linux =>") == "ContentSeparatorError"
    assert _code("linux => a => b") == "ContentSeparatorError"


def test_missing_arm_separator():
    assert _code("x86_64:ar => { fn a() {} } x86:ar => { fn b() {} }") == "ArmSeparatorMissing"


def test_empty_arm():
    assert _code("=> {}") == "EmptyArm"
    assert _code("linux => {},, unix => {}") == "EmptyArm"


def test_escaped_char_literals_do_not_shift_depth():
    arms = split_arms(
        "linux => { fn f() -> [char; 2] { ['\\'', '{'] } }, "
        "windows => { fn g() -> char { '\\u{7d}' } }, "
        "unix => { fn h() -> u8 { b'\\x7b' } }"
    )
    assert [a.condition for a in arms] == ["linux", "windows", "unix"]
    assert arms[0].content == "fn f() -> [char; 2] { ['\\'', '{'] }"


def test_content_keeps_inner_indentation():
    arms = split_arms('linux => {\n    const S: &str = "x\n    y";\n}')
    assert arms[0].content == 'const S: &str = "x\n    y";'
