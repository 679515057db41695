from nscfg.core.config.provider import MappingConfigProvider
from nscfg.core.config.tables import ALIASES, PREDICATES
from nscfg.core.errors import ExpansionError
from nscfg.core.resolve.resolver import Resolver


def test_builtin_tables_are_complete():
    assert len(ALIASES) == 12
    assert len(PREDICATES) == 12
    assert PREDICATES[-1] == ("_", "{}")
    assert dict(ALIASES)["desktop"] == "linux:os | windows:_ | macos:os"
    assert dict(ALIASES)["debug"] == "debug_assertions:_"


def test_resolve_builtin_predicates():
    r = Resolver()
    assert r.resolve_predicate("x86_64:ar") == 'target_arch = "x86_64"'
    assert r.resolve_predicate(" 64 : pw ") == 'target_pointer_width = "64"'
    assert r.resolve_predicate("unix:_") == "unix"


def test_config_overrides_take_precedence():
    r = Resolver(
        MappingConfigProvider(
            {
                "nscfg-linux": "unix:_",
                "nscfg_predicate-os": 'os = "{}"',
                "nscfg_predicate-sn": 'sanitize = "{}"',
            }
        )
    )
    assert r.resolve_alias("linux") == "unix:_"
    assert r.resolve_alias("macos") == "macos:os"
    assert r.resolve_predicate("linux:os") == 'os = "linux"'
    assert r.resolve_predicate("address:sn") == 'sanitize = "address"'


def test_unknown_lookups():
    r = Resolver()
    try:
        r.resolve_alias("beos")
        assert False, "expected AliasNotFound"
    except ExpansionError as e:
        assert e.code == "AliasNotFound"
        assert e.token == "beos"

    try:
        r.resolve_predicate("linux:zz")
        assert False, "expected InvalidConfigurationPredicate"
    except ExpansionError as e:
        assert e.code == "InvalidConfigurationPredicate"


def test_merged_listings_keep_builtin_order_then_additions():
    r = Resolver(MappingConfigProvider({"nscfg-nix": "linux | macos", "nscfg_predicate-sn": 'sanitize = "{}"'}))
    aliases = list(r.aliases().items())
    assert aliases[0] == ("linux", "linux:os")
    assert aliases[-1] == ("nix", "linux | macos")
    assert "nix" not in r.predicates()
    assert r.predicates()["sn"] == 'sanitize = "{}"'
