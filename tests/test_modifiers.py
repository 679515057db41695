from nscfg.core.config.provider import Settings
from nscfg.core.errors import ExpansionError
from nscfg.core.model import Arm, Modifier
from nscfg.core.parse.modifiers import apply_release_policy, check_match_modifiers, split_modifier


def _arm(modifier: Modifier, wildcard: bool = False) -> Arm:
    return Arm(
        index=0,
        modifier=modifier,
        expression=None,
        content="",
        is_wildcard=wildcard,
        condition="_" if wildcard else "linux",
    )


def test_split_modifier_glyphs():
    assert split_modifier("+ foo1:os") == (Modifier.ACTIVATE, "foo1:os")
    assert split_modifier("- !doc & linux") == (Modifier.DEACTIVATE, "!doc & linux")
    assert split_modifier("@linux") == (Modifier.PANIC_ON_RELEASE, "linux")
    assert split_modifier("linux") == (Modifier.NONE, "linux")


def test_dash_inside_label_is_not_a_modifier():
    assert split_modifier("my-feature:ft") == (Modifier.NONE, "my-feature:ft")


def test_modifier_must_be_first():
    for cond in ("linux +", "linux & @unix", "+ - linux", "++linux"):
        try:
            split_modifier(cond)
            assert False, f"expected ModifierNotFirst for {cond!r}"
        except ExpansionError as e:
            assert e.code == "ModifierNotFirst"


def test_modifier_glyph_in_legacy_string_is_fine():
    assert split_modifier('#[cfg(feature = "c++")]') == (Modifier.NONE, '#[cfg(feature = "c++")]')


def test_modifier_alone_is_an_empty_arm():
    try:
        split_modifier("+")
        assert False, "expected EmptyArm"
    except ExpansionError as e:
        assert e.code == "EmptyArm"


def test_release_policy():
    debug = Settings(debug=True)
    release = Settings(debug=False)
    ignore = Settings(debug=False, release_behaviour="ignore")

    assert apply_release_policy(Modifier.ACTIVATE, debug) is Modifier.ACTIVATE
    assert apply_release_policy(Modifier.NONE, release) is Modifier.NONE
    assert apply_release_policy(Modifier.PANIC_ON_RELEASE, ignore) is Modifier.NONE
    for m in (Modifier.ACTIVATE, Modifier.DEACTIVATE, Modifier.PANIC_ON_RELEASE):
        try:
            apply_release_policy(m, release)
            assert False, "expected ModifierPanicRelease"
        except ExpansionError as e:
            assert e.code == "ModifierPanicRelease"
            assert "nscfg_release_modifier_behaviour" in e.message


def test_match_modifier_rules():
    check_match_modifiers([_arm(Modifier.ACTIVATE), _arm(Modifier.DEACTIVATE), _arm(Modifier.NONE, True)])

    try:
        check_match_modifiers([_arm(Modifier.ACTIVATE), _arm(Modifier.ACTIVATE), _arm(Modifier.NONE, True)])
        assert False, "expected MatchModifierMoreThanOneActivate"
    except ExpansionError as e:
        assert e.code == "MatchModifierMoreThanOneActivate"

    try:
        check_match_modifiers([_arm(Modifier.NONE), _arm(Modifier.DEACTIVATE, True)])
        assert False, "expected MatchDeactivatedWildArm"
    except ExpansionError as e:
        assert e.code == "MatchDeactivatedWildArm"
