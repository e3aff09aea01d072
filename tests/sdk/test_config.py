import logging

import pytest
from pydantic import ValidationError

from restbuilder import Config, RestClient
from restbuilder._config import ENV_BASE_URL, ENV_DEBUG, ENV_TIMEOUT


class TestConfig:
    def test_defaults(self) -> None:
        config = Config()
        assert config.base_url == ""
        assert config.timeout == 30.0
        assert config.debug is False

    def test_valid_base_url(self) -> None:
        assert Config(base_url="https://api.example.com/v1/").base_url == (
            "https://api.example.com/v1/"
        )

    def test_invalid_base_url(self) -> None:
        with pytest.raises(ValidationError):
            Config(base_url="not a url")

    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Config(timeout=0)

    class TestFromEnv:
        def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
            monkeypatch.setenv(ENV_BASE_URL, "https://env.example.com/")
            monkeypatch.setenv(ENV_TIMEOUT, "2.5")
            monkeypatch.setenv(ENV_DEBUG, "true")

            config = Config.from_env()

            assert config.base_url == "https://env.example.com/"
            assert config.timeout == 2.5
            assert config.debug is True

        def test_overrides_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
            monkeypatch.setenv(ENV_BASE_URL, "https://env.example.com/")

            config = Config.from_env(base_url="https://arg.example.com/", timeout=None)

            assert config.base_url == "https://arg.example.com/"
            assert config.timeout == 30.0

        @pytest.mark.parametrize("value", ["0", "false", "no", ""])
        def test_debug_falsy_values(
            self, monkeypatch: pytest.MonkeyPatch, value: str
        ) -> None:
            monkeypatch.setenv(ENV_DEBUG, value)
            assert Config.from_env().debug is False

    def test_client_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ENV_BASE_URL, "https://env.example.com/api/")

        rest = RestClient.from_env().get("items")

        assert rest.url == "https://env.example.com/api/items"

    def test_debug_enables_logging(self) -> None:
        RestClient(config=Config(debug=True))
        assert logging.getLogger("restbuilder").level == logging.DEBUG
