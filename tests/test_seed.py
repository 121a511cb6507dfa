"""Tests for the YAML seed file and seeder."""

import pytest

from doi_registry.core.config import ServersFile
from doi_registry.core.exceptions import ValidationError
from doi_registry.db.seed import seed_groups, seed_servers
from doi_registry.services.doi_server_service import DoiServerService

SEED_YAML = """
groups:
  - name: editors
  - reviewers
servers:
  - name: datacite-test
    api_url: https://mds.test.datacite.org
    landing_page_template: https://catalog.example.org/records/{{uuid}}
    prefix: "10.5072"
    publication_groups: [editors, reviewers]
"""


@pytest.fixture
def servers_file(tmp_path) -> ServersFile:
    path = tmp_path / "doiservers.yaml"
    path.write_text(SEED_YAML)
    return ServersFile(str(path))


def test_servers_file(servers_file: ServersFile):
    assert servers_file.groups == ["editors", "reviewers"]
    assert servers_file.servers[0]["name"] == "datacite-test"
    assert servers_file.servers[0]["prefix"] == "10.5072"


def test_servers_file_missing(tmp_path):
    servers_file = ServersFile(str(tmp_path / "missing.yaml"))

    assert servers_file.groups == []
    assert servers_file.servers == []


@pytest.mark.asyncio
async def test_seed(db_session, cipher, servers_file: ServersFile):
    """Test groups and servers are created once."""
    group_ids = await seed_groups(db_session, servers_file.groups)
    created = await seed_servers(db_session, servers_file.servers, group_ids)

    assert created == 1

    service = DoiServerService(db_session, cipher=cipher)
    server = await service.get_server_by_name("datacite-test")
    assert server.public_url == "https://doi.org/"
    assert server.pattern == "{{uuid}}"
    assert server.landing_page_template == (
        "https://catalog.example.org/records/{{uuid}}"
    )
    assert [g.name for g in server.publication_groups] == ["editors", "reviewers"]

    # Second run is a no-op
    group_ids = await seed_groups(db_session, servers_file.groups)
    assert await seed_servers(db_session, servers_file.servers, group_ids) == 0


@pytest.mark.asyncio
async def test_seed_unknown_group(db_session, servers_file: ServersFile):
    with pytest.raises(ValidationError):
        await seed_servers(db_session, servers_file.servers, {"editors": 1})
