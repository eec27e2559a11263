import logging

import pytest

from py_gnuballistics import Calculator, EngineConfig, basicConfig, create_engine_config

pytestmark = pytest.mark.usefixtures("clean_engine_defaults")


def _write(path, text):
    path.write_text(text, encoding="utf-8")
    return str(path)


class TestConfigLoader:

    def test_defaults(self):
        assert create_engine_config() == EngineConfig()
        config = create_engine_config()
        assert config.cGravityConstant == -32.194
        assert config.cMaxSamples == 50000
        assert config.cZeroInitialStepDeg == 14
        assert config.cZeroAccuracyMOA == 0.01
        assert config.cZeroMaxAngleDeg == 45
        assert config.cSteepnessRatio == 3

    def test_interface_overrides(self):
        config = create_engine_config({'cStepMultiplier': 0.5})
        assert config.cStepMultiplier == 0.5
        assert config.cMaxSamples == 50000

    def test_unknown_field(self):
        with pytest.raises(TypeError):
            create_engine_config({'cMinimumVelocity': 50})  # type: ignore[typeddict-unknown-key]

    def test_load_file(self, tmp_path):
        filename = _write(tmp_path / "custom.toml", "[pygb.engine]\ncMaxSamples = 123\ncStepMultiplier = 2.0\n")
        basicConfig(filename)
        config = create_engine_config()
        assert config.cMaxSamples == 123
        assert config.cStepMultiplier == 2.0
        # Explicit engine configuration still wins
        assert create_engine_config({'cMaxSamples': 7}).cMaxSamples == 7
        assert Calculator().get_calc_step() == pytest.approx(1.0)

    def test_discovers_file_upward(self, tmp_path, monkeypatch):
        _write(tmp_path / ".pygb.toml", "[pygb.engine]\ncZeroMaxAngleDeg = 30.0\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        basicConfig()
        assert create_engine_config().cZeroMaxAngleDeg == 30.0

    def test_reload_clears_previous_defaults(self, tmp_path):
        basicConfig(engine_config={'cMaxSamples': 10})
        assert create_engine_config().cMaxSamples == 10
        basicConfig(_write(tmp_path / "empty.toml", "[pygb.engine]\ncSteepnessRatio = 4.0\n"))
        assert create_engine_config().cMaxSamples == 50000
        assert create_engine_config().cSteepnessRatio == 4.0

    def test_manual(self):
        basicConfig(engine_config={'cZeroAccuracyMOA': 0.1})
        assert create_engine_config().cZeroAccuracyMOA == 0.1

    def test_manual_unknown_field(self):
        with pytest.raises(TypeError):
            basicConfig(engine_config={'bogus': 1})  # type: ignore[typeddict-unknown-key]

    def test_file_and_mapping_conflict(self, tmp_path):
        filename = _write(tmp_path / "x.toml", "[pygb.engine]\n")
        with pytest.raises(ValueError):
            basicConfig(filename, engine_config={'cMaxSamples': 10})

    @pytest.mark.parametrize(
        "text, message",
        [
            ("[other]\nkey = 1\n", "no `pygb` section"),
            ("[pygb]\nname = 'x'\n", "no `pygb.engine` section"),
        ],
    )
    def test_missing_sections_warn(self, tmp_path, caplog, text, message):
        filename = _write(tmp_path / "partial.toml", text)
        with caplog.at_level(logging.WARNING, logger="py_gnuballistics"):
            basicConfig(filename)
        assert message in caplog.text
        assert create_engine_config() == EngineConfig()

    def test_suppress_warnings(self, tmp_path, caplog):
        filename = _write(tmp_path / "partial.toml", "[other]\n")
        with caplog.at_level(logging.WARNING, logger="py_gnuballistics"):
            basicConfig(filename, suppress_warnings=True)
        assert "section" not in caplog.text
