"""
Test configuration and loading it from TOML.
"""

from pathlib import Path

from pytest import raises

from assets.models import Bar, Point
from assets.strategies import PointStrategy
from mapcraft import (
    ConfigError,
    SerializerConfig,
    build_serializer,
    get_type_id,
    load_config,
)

CONFIG_STR = """
type_key = "_type"
items_key = "_items"
datetime_format = "%d.%m.%Y %H:%M"
sort_sets = false
strategies = ["assets.strategies:PointStrategy"]
"""

PYPROJECT_STR = """
[project]
name = "app"

[tool.mapcraft]
type_key = "kind"
strategies = ["assets.strategies:POINT_STRATEGY"]
"""


def write(path: Path, content: str) -> Path:
    path.write_text(content)
    return path


def test_defaults():
    """
    Test default configuration.
    """
    config = SerializerConfig()

    assert config.type_key == "__type"
    assert config.items_key == "items"
    assert config.datetime_format == "%Y-%m-%d %H:%M:%S"
    assert config.use_builtin_strategies
    assert config.sort_sets
    assert config.load_strategies() == ()


def test_load_config(tmp_path: Path):
    """
    Test loading standalone configuration file.
    """
    config = load_config(write(tmp_path / "mapcraft.toml", CONFIG_STR))

    assert config == SerializerConfig(
        type_key="_type",
        items_key="_items",
        datetime_format="%d.%m.%Y %H:%M",
        sort_sets=False,
        strategies=("assets.strategies:PointStrategy",),
    )

    strategies = config.load_strategies()
    assert len(strategies) == 1
    assert isinstance(strategies[0], PointStrategy)

    serializer = build_serializer(config=config)
    assert serializer.serialize(Bar("foobar")) == {
        "foobar": "foobar",
        "_type": get_type_id(Bar),
    }
    assert serializer.serialize(Point(1, 2)) == [1, 2]
    assert serializer.deserialize(
        Bar, {"foobar": "foobar", "_type": get_type_id(Bar)}
    ) == Bar("foobar")


def test_load_pyproject(tmp_path: Path):
    """
    Test loading configuration from the tool table of `pyproject.toml`.
    """
    config = load_config(write(tmp_path / "pyproject.toml", PYPROJECT_STR))

    assert config.type_key == "kind"
    assert config.items_key == "items"
    assert isinstance(config.load_strategies()[0], PointStrategy)

    # without tool table
    config = load_config(write(tmp_path / "pyproject.toml", '[project]\nname = "a"\n'))
    assert config == SerializerConfig()


def test_load_config_fail(tmp_path: Path):
    """
    Test loading invalid configuration files.
    """
    with raises(ConfigError, match="Could not load configuration"):
        _ = load_config(tmp_path / "missing.toml")

    with raises(ConfigError, match="Could not load configuration"):
        _ = load_config(write(tmp_path / "invalid.toml", "type_key = "))

    with raises(ConfigError, match=r"Unknown configuration keys .*: \['typekey'\]"):
        _ = load_config(write(tmp_path / "unknown.toml", 'typekey = "_type"\n'))

    with raises(ConfigError, match="Expected str for 'type_key', got 1"):
        _ = load_config(write(tmp_path / "type.toml", "type_key = 1\n"))

    with raises(ConfigError, match="Expected bool for 'sort_sets'"):
        _ = load_config(write(tmp_path / "bool.toml", 'sort_sets = "no"\n'))

    with raises(ConfigError, match="Expected list of import paths for 'strategies'"):
        _ = load_config(write(tmp_path / "list.toml", 'strategies = "a:b"\n'))

    with raises(ConfigError, match="must differ"):
        _ = load_config(write(tmp_path / "keys.toml", 'items_key = "__type"\n'))


def test_load_strategies_fail():
    """
    Test configured strategies which can't be imported.
    """
    for path, match in [
        ("assets.strategies.PointStrategy", "Invalid strategy path"),
        ("assets.nonexistent:PointStrategy", "Could not import strategy"),
        ("assets.strategies:Nonexistent", "Could not import strategy"),
        ("assets.models:Bar", "Not a strategy"),
    ]:
        config = SerializerConfig(strategies=(path,))
        with raises(ConfigError, match=match):
            _ = config.load_strategies()
        with raises(ConfigError, match=match):
            _ = build_serializer(config=config)
