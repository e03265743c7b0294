import pytest

ASANAK_ENV = ("ASANAK_USERNAME", "ASANAK_PASSWORD", "ASANAK_SOURCE_NUMBER", "ASANAK_WEBSERVICE")


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    # No ambient credentials or stray .env file leak into a test.
    for name in ASANAK_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
