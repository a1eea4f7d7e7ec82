"""Tests for the Host model."""

from sshdeck.types import ID_EMPTY, Host, StorageKind


class TestHost:
    def test_clone_drops_identity(self):
        host = Host(id=7, title="web", address="web.example.com", storage=StorageKind.SSH_CONFIG)

        clone = host.clone()

        assert clone.id == ID_EMPTY
        assert clone.storage is None
        assert clone.title == "web"
        assert clone.address == "web.example.com"

    def test_to_yaml_dict_omits_empty(self):
        host = Host(id=3, title="web", address="web.example.com", remote_port="22")

        assert host.to_yaml_dict() == {
            "title": "web",
            "address": "web.example.com",
            "network_port": "22",
        }

    def test_to_yaml_dict_keeps_required_keys(self):
        assert Host().to_yaml_dict() == {"title": "", "address": ""}

    def test_from_yaml_dict(self):
        host = Host.from_yaml_dict(
            {
                "title": "db",
                "description": "Database",
                "group": "data",
                "address": "db.example.com",
                "network_port": 5432,
                "username": "postgres",
                "identity_file_path": "~/.ssh/db",
            }
        )

        assert host.remote_port == "5432"
        assert host.login_name == "postgres"
        assert host.group == "data"
        assert host.id == ID_EMPTY

    def test_from_yaml_dict_none(self):
        assert Host.from_yaml_dict(None) == Host()

    def test_yaml_dict_round_trip(self):
        host = Host(title="a", description="b", group="c", address="d", login_name="e")
        assert Host.from_yaml_dict(host.to_yaml_dict()) == host
