from __future__ import annotations

# Configuration keys.
ENV_KEY_ALIAS = "nscfg-"
ENV_KEY_PREDICATE = "nscfg_predicate-"
AUTO_DOC_KEY = "nscfg_autodoc"
MODIFIER_BEHAVIOUR_KEY = "nscfg_release_modifier_behaviour"

# Manifest probe.
DOCSRS_CACHE_KEY = "CFG_BOOST_ATTR_DOC_SET"
DOCSRS_TAG = "[package.metadata.docs.rs]"
MANIFEST_DIR_KEY = "CARGO_MANIFEST_DIR"
MANIFEST_NAME = "Cargo.toml"

PREDICATE_PLACEHOLDER = "{}"
DOC_ALIAS = "doc"

# Order matters: listings and error hints follow it.
ALIASES: tuple[tuple[str, str], ...] = (
    ("linux", "linux:os"),
    ("unix", "unix:_"),
    ("windows", "windows:_"),
    ("macos", "macos:os"),
    ("android", "android:os"),
    ("ios", "ios:os"),
    ("wasm", "wasm:_"),
    (DOC_ALIAS, "doc:_"),
    ("test", "test:_"),
    ("debug", "debug_assertions:_"),
    ("desktop", "linux:os | windows:_ | macos:os"),
    ("mobile", "android:os | ios:os"),
)

PREDICATES: tuple[tuple[str, str], ...] = (
    ("ar", 'target_arch = "{}"'),
    ("tf", 'target_feature = "{}"'),
    ("os", 'target_os = "{}"'),
    ("fm", 'target_family = "{}"'),
    ("ev", 'target_env = "{}"'),
    ("ed", 'target_endian = "{}"'),
    ("pw", 'target_pointer_width = "{}"'),
    ("vn", 'target_vendor = "{}"'),
    ("at", 'target_has_atomic = "{}"'),
    ("pn", 'panic = "{}"'),
    ("ft", 'feature = "{}"'),
    ("_", PREDICATE_PLACEHOLDER),
)

DEFAULT_ALIASES: dict[str, str] = dict(ALIASES)
DEFAULT_PREDICATES: dict[str, str] = dict(PREDICATES)
