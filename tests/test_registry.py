"""Tests for service discovery and the environment loader."""

import pytest

from homeserver import environment, registry


def test_discover_lists_directories_alphabetically(services_dir):
    for name in ("traefik", "nextcloud", "adguard"):
        (services_dir / name).mkdir()

    names = [service.name for service in registry.discover(services_dir)]

    assert names == ["adguard", "nextcloud", "traefik"]


def test_discover_ignores_files_and_hidden_entries(services_dir):
    (services_dir / "gitea").mkdir()
    (services_dir / ".cache").mkdir()
    (services_dir / "README.md").write_text("notes\n")

    assert [service.name for service in registry.discover(services_dir)] == ["gitea"]


def test_discover_missing_directory(tmp_path):
    assert registry.discover(tmp_path / "services") == []


def test_disabled_marker(services_dir):
    (services_dir / "plex").mkdir()
    (services_dir / "jellyfin").mkdir()
    (services_dir / "plex" / registry.DISABLED_MARKER).write_text("")

    services = {service.name: service for service in registry.discover(services_dir)}

    assert services["jellyfin"].enabled
    assert not services["plex"].enabled


class TestLoadConfig:
    def test_defaults(self, tmp_path):
        config = environment.load_config(tmp_path)

        assert config.services_dir == tmp_path / "services"
        assert config.network == "traefik-network"
        assert [req.minimum for req in config.requirements] == ["19.03", "1.25", "4.2"]

    def test_dotenv_overrides(self, tmp_path):
        (tmp_path / ".env").write_text(
            "DOCKER_NETWORK=proxy\nMINIMUM_DOCKER_VERSION=20.10\nMINIMUM_MAKE_VERSION=4.3\n"
        )

        config = environment.load_config(tmp_path)

        assert config.network == "proxy"
        assert [req.minimum for req in config.requirements] == ["20.10", "1.25", "4.3"]

    def test_invalid_minimum(self, tmp_path):
        (tmp_path / ".env").write_text("MINIMUM_MAKE_VERSION=latest\n")

        with pytest.raises(RuntimeError, match="MINIMUM_MAKE_VERSION"):
            environment.load_config(tmp_path)

    def test_load_discovers_services(self, tmp_path):
        (tmp_path / "services" / "vaultwarden").mkdir(parents=True)

        ctx = environment.load(tmp_path)

        assert [service.name for service in ctx.services] == ["vaultwarden"]
        assert ctx.make.services_dir == tmp_path / "services"
