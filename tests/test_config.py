import pytest

from robopath.config import Settings, resolve_settings


def test_defaults():
    assert resolve_settings([], {}) == Settings()


def test_env_overrides():
    s = resolve_settings([], {"ROBOPATH_HEURISTIC": "octile", "ROBOPATH_GRID_SIZE": "24"})
    assert s.heuristic == "octile"
    assert s.grid_size == 24


def test_argv_beats_env():
    s = resolve_settings(["--heuristic=manhattan"], {"ROBOPATH_HEURISTIC": "octile"})
    assert s.heuristic == "manhattan"


def test_bare_flag_and_dashes():
    s = resolve_settings(["--diagonal-moves", "--max-expansions=500", "--log-level=debug"], {})
    assert s.diagonal_moves is True
    assert s.max_expansions == 500
    assert s.log_level == "DEBUG"


def test_optional_ints_accept_none():
    s = resolve_settings([], {"ROBOPATH_MAX_EXPANSIONS": "none", "ROBOPATH_SEED": "0"})
    assert s.max_expansions is None
    assert s.seed == 0


@pytest.mark.parametrize("argv", [
    ["--grid-size=abc"],
    ["--grid-size=0"],
    ["--heuristic=zigzag"],
    ["--diagonal-moves=maybe"],
    ["--log-level=loud"],
    ["--colour=red"],
])
def test_bad_values(argv):
    with pytest.raises(ValueError):
        resolve_settings(argv, {})


def test_positional_args_ignored():
    assert resolve_settings(["somefile"], {}) == Settings()
