import pytest

from storefront.config import AppConfig, get_config, set_config_for_test

@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    for var in [
        "GITHUB_TOKEN", "GITHUB_OWNER", "GITHUB_REPO", "GITHUB_BRANCH",
        "ORDERS_DOCUMENT_PATH", "ORDERS_API_URL", "LOG_LEVEL",
    ]:
        monkeypatch.delenv(var, raising=False)

def test_defaults():
    """Server defaults match the storefront deployment layout."""
    config = AppConfig(_env_file=None)
    assert config.github_branch == "main"
    assert config.orders_document_path == "data/store-data.json"
    assert config.github_api_url == "https://api.github.com"
    assert config.github_configured is False

def test_reads_environment(monkeypatch):
    """Secrets come from the environment."""
    monkeypatch.setenv("GITHUB_TOKEN", "token-123")
    monkeypatch.setenv("GITHUB_OWNER", "acme")
    monkeypatch.setenv("GITHUB_REPO", "shop")
    monkeypatch.setenv("GITHUB_BRANCH", "orders")
    config = AppConfig(_env_file=None)
    assert config.github_token == "token-123"
    assert config.github_branch == "orders"
    assert config.github_configured is True

@pytest.mark.parametrize("branch", ["", "   ", None])
def test_blank_branch_means_main(branch):
    """A blank branch falls back to main."""
    assert AppConfig(_env_file=None, github_branch=branch).github_branch == "main"

def test_partial_credentials_are_not_configured():
    """Owner and repo without a token is still unconfigured."""
    assert AppConfig(_env_file=None, github_owner="acme", github_repo="shop").github_configured is False

def test_set_config_for_test():
    """Overrides replace the singleton."""
    config = set_config_for_test(_env_file=None, orders_api_url="https://api.example.com/orders")
    assert get_config() is config
    assert get_config().orders_api_url == "https://api.example.com/orders"
