from __future__ import annotations

import pytest

from conftest import FakeSwarm, api_node
from swarm_prune.config import resolve_config
from swarm_prune.domain.models import CommandOptions
from swarm_prune.jobs.commands import run_command


@pytest.mark.e2e
def test_system_prune_with_one_unreachable_node(capsys: pytest.CaptureFixture[str]) -> None:
    swarm = FakeSwarm(
        [
            api_node("n1", "node-a", "manager", manager=True),
            api_node("n2", "node-b", "worker"),
        ]
    )
    swarm.set_response(
        "tcp://node-a:2375",
        "prune_containers",
        {"ContainersDeleted": ["0f1e2d3c"], "SpaceReclaimed": 1_048_576},
    )
    swarm.unreachable.add("tcp://node-b:2375")

    code = run_command(
        "system",
        resolve_config(),
        CommandOptions(force=True),
        client_factory=swarm.factory,
    )

    assert code == 0
    lines = capsys.readouterr().out.splitlines()
    assert "######  node-a  manager" in lines
    assert "        0f1e2d3c" in lines
    assert "    No Images Deleted" in lines
    assert "    No Networks Deleted" in lines
    assert "    No Volumes Deleted" in lines

    node_totals = [line for line in lines if line.startswith("  Node reclaimed space:")]
    assert node_totals == ["  Node reclaimed space: 1.0 MB", "  Node reclaimed space: 0 B"]
    assert "  Total Swarm reclaimed space: 1.0 MB" in lines

    node_b_errors = [line for line in lines if line.startswith("  ERROR:") and "node-b" in line]
    assert len(node_b_errors) == 4
    assert {host for host, _, _ in swarm.destructive_calls()} == {"tcp://node-a:2375"}


@pytest.mark.e2e
def test_verbose_df_on_single_node(capsys: pytest.CaptureFixture[str]) -> None:
    swarm = FakeSwarm([api_node("n1", "node-a", "manager", manager=True)])
    swarm.set_response(
        "tcp://node-a:2375",
        "df",
        {
            "LayersSize": 600,
            "Images": [
                {"Id": "sha256:aaaaaaaaaaaa0001", "RepoTags": ["nginx:1.25"], "Size": 300, "SharedSize": 0, "Containers": 1},
                {"Id": "sha256:bbbbbbbbbbbb0002", "RepoTags": ["redis:7"], "Size": 200, "SharedSize": 0, "Containers": 1},
                {"Id": "sha256:cccccccccccc0003", "RepoTags": None, "Size": 100, "SharedSize": 0, "Containers": 0},
            ],
            "Containers": [
                {"Id": "dddddddddddd0004", "Names": ["/web"], "Image": "nginx:1.25", "SizeRw": 10, "State": "running", "Status": "Up 1 hour"},
                {"Id": "eeeeeeeeeeee0005", "Names": ["/cache"], "Image": "redis:7", "SizeRw": 20, "State": "exited", "Status": "Exited (0)"},
            ],
            "Volumes": [{"Name": "pgdata", "UsageData": {"Size": 4096, "RefCount": 1}}],
        },
    )

    code = run_command(
        "df",
        resolve_config(),
        CommandOptions(verbose=True),
        client_factory=swarm.factory,
        input_fn=lambda _prompt: pytest.fail("df must not ask for confirmation"),
    )

    assert code == 0
    out = capsys.readouterr().out
    assert out.splitlines()[0] == "##########  node-a  manager"
    for token in ("aaaaaaaaaaaa", "bbbbbbbbbbbb", "cccccccccccc", "web", "cache", "pgdata"):
        assert token in out
    assert out.rstrip().endswith("#" * 45)


@pytest.mark.e2e
def test_df_transport_failure_still_exits_zero(capsys: pytest.CaptureFixture[str]) -> None:
    swarm = FakeSwarm([api_node("n1", "node-a", "manager", manager=True)])
    swarm.unreachable.add("tcp://node-a:2375")

    code = run_command("df", resolve_config(), CommandOptions(verbose=True), client_factory=swarm.factory)

    assert code == 0
    assert "ERROR: disk-usage report failed on node-a: cannot build client" in capsys.readouterr().out
