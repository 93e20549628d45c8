import pytest

from salahtimes.config import DEFAULT_USER_AGENT, AppConfig, ConfigError, load_config
from salahtimes.methods import CalculationMethod
from salahtimes.models import HighLatitudeRule, Madhab, Shafaq


class TestLoadConfig:
    def test_defaults(self):
        config = load_config({})
        assert config == AppConfig()
        assert config.method is CalculationMethod.MUSLIM_WORLD_LEAGUE
        assert config.madhab is Madhab.SHAFI
        assert config.high_latitude_rule is None
        assert config.user_agent == DEFAULT_USER_AGENT
        assert config.http_timeout == 10.0

    def test_reads_every_variable(self):
        config = load_config(
            {
                "SALAHTIMES_METHOD": "Moonsighting_Committee",
                "SALAHTIMES_MADHAB": " hanafi ",
                "SALAHTIMES_HIGH_LATITUDE_RULE": "twilight_angle",
                "SALAHTIMES_SHAFAQ": "ABYAD",
                "SALAHTIMES_USER_AGENT": "my-mosque-display/1.0",
                "SALAHTIMES_HTTP_TIMEOUT": "2.5",
            }
        )
        assert config.method is CalculationMethod.MOONSIGHTING_COMMITTEE
        assert config.madhab is Madhab.HANAFI
        assert config.high_latitude_rule is HighLatitudeRule.TWILIGHT_ANGLE
        assert config.shafaq is Shafaq.ABYAD
        assert config.user_agent == "my-mosque-display/1.0"
        assert config.http_timeout == 2.5

    def test_empty_values_are_ignored(self):
        assert load_config({"SALAHTIMES_METHOD": "", "SALAHTIMES_HTTP_TIMEOUT": ""}) == AppConfig()

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("SALAHTIMES_METHOD", "karachi")
        assert load_config().method is CalculationMethod.KARACHI

    @pytest.mark.parametrize(
        "env",
        [
            {"SALAHTIMES_METHOD": "isna"},
            {"SALAHTIMES_MADHAB": "maliki"},
            {"SALAHTIMES_HIGH_LATITUDE_RULE": "nearest_city"},
            {"SALAHTIMES_SHAFAQ": "blue"},
            {"SALAHTIMES_HTTP_TIMEOUT": "soon"},
            {"SALAHTIMES_HTTP_TIMEOUT": "0"},
            {"SALAHTIMES_HTTP_TIMEOUT": "-3"},
        ],
    )
    def test_invalid_values(self, env):
        with pytest.raises(ConfigError):
            load_config(env)

    def test_error_lists_choices(self):
        with pytest.raises(ValueError, match="shafi, hanafi"):
            load_config({"SALAHTIMES_MADHAB": "maliki"})


class TestAppConfigParameters:
    def test_overrides_preset(self):
        config = AppConfig(
            method=CalculationMethod.MOONSIGHTING_COMMITTEE,
            madhab=Madhab.HANAFI,
            high_latitude_rule=HighLatitudeRule.SEVENTH_OF_THE_NIGHT,
            shafaq=Shafaq.AHMER,
        )
        parameters = config.parameters()
        assert parameters.moonsighting_committee
        assert parameters.madhab is Madhab.HANAFI
        assert parameters.high_latitude_rule is HighLatitudeRule.SEVENTH_OF_THE_NIGHT
        assert parameters.shafaq is Shafaq.AHMER
        assert parameters.fajr_angle == 18
