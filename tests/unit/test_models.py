"""Unit tests for the JSON forms of entities and request bodies."""

import json

import pytest

from rest_gateway.models import (
    Child,
    ChildState,
    CreatePool,
    CreatePoolBody,
    CreateReplicaBody,
    CreateVolume,
    CreateVolumeBody,
    Nexus,
    NexusState,
    Node,
    NodeState,
    Protocol,
    Volume,
)
from rest_gateway.services.utils import dumps


class TestEntities:
    def test_camel_case_keys(self):
        """Test the JSON keys of fields declared with a different name."""
        node = Node(id="n1", grpc_endpoint="n1:10124", state=NodeState.ONLINE)
        assert node.to_dict() == {"id": "n1", "grpcEndpoint": "n1:10124", "state": "online"}

        nexus = Nexus(node="n1", uuid="x1", device_uri="nvmf://h/x1")
        assert nexus.to_dict()["deviceUri"] == "nvmf://h/x1"
        assert "device_uri" not in nexus.to_dict()

    def test_nested_decode(self):
        data = {
            "uuid": "v1",
            "size": 1024,
            "state": "degraded",
            "children": [{
                "node": "n1",
                "uuid": "v1",
                "size": 1024,
                "state": "degraded",
                "children": [{"uri": "bdev:///r1", "state": "degraded", "rebuildProgress": 40}],
                "deviceUri": "",
                "rebuilds": 1,
            }],
        }
        volume = Volume.from_dict(data)
        assert volume.state == NexusState.DEGRADED
        child = volume.children[0].children[0]
        assert child == Child(uri="bdev:///r1", state=ChildState.DEGRADED, rebuild_progress=40)
        assert volume.to_dict() == data

    def test_serializer_handles_lists_of_models(self):
        text = dumps([Child(uri="aio:///dev/sda")])
        assert json.loads(text) == [{"uri": "aio:///dev/sda", "state": "unknown", "rebuildProgress": None}]

    def test_enum_values(self):
        assert Protocol("nvmf") is Protocol.NVMF
        with pytest.raises(ValueError):
            Protocol("smb")


class TestBodies:
    def test_pool_body_round_trip(self):
        create = CreatePool(node="n1", name="p1", disks=["/dev/sdb"])
        body = CreatePoolBody.from_request(create)
        assert body.to_dict() == {"disks": ["/dev/sdb"]}
        assert body.bus_request("n1", "p1") == create

    def test_replica_body_defaults(self):
        body = CreateReplicaBody.from_dict({"size": 4096})
        assert body.thin is False
        assert body.share == Protocol.NONE
        create = body.bus_request("n1", "p1", "r1")
        assert (create.node, create.pool, create.uuid, create.size) == ("n1", "p1", "r1", 4096)

    def test_volume_body(self):
        create = CreateVolume(uuid="v1", size=1024, replicas=2, allowed_nodes=["n1", "n2"])
        body = CreateVolumeBody.from_request(create)
        assert body.bus_request("v1") == create

    @pytest.mark.parametrize("data", [
        [],
        "disks",
        {},
        {"disks": "/dev/sdb"},
        {"disks": [1]},
    ])
    def test_invalid_pool_body(self, data):
        with pytest.raises(ValueError):
            CreatePoolBody.from_dict(data)

    def test_invalid_replica_body(self):
        with pytest.raises(ValueError):
            CreateReplicaBody.from_dict({"size": "big"})
        with pytest.raises(ValueError):
            CreateReplicaBody.from_dict({"size": 1, "share": "smb"})
