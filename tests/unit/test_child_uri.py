"""Unit tests for nexus child URI canonicalization."""

import pytest

from rest_gateway.bus import NotFound
from rest_gateway.models import Child, Nexus
from rest_gateway.services.child_uri import build_child_uri, find_child, is_absolute_url


class TestBuildChildUri:
    def test_url_without_query(self):
        assert build_child_uri("nvmf://h:8420/nqn.x:r1") == "nvmf://h:8420/nqn.x:r1"

    def test_url_with_query(self):
        """Test that the request query is appended verbatim to a URL id."""
        assert build_child_uri("bdev:///r1", "uuid=abc&blk=512") == "bdev:///r1?uuid=abc&blk=512"

    def test_legacy_device_path(self):
        """Test that a bare device path gets the aio scheme."""
        assert build_child_uri("/dev/sda") == "aio:///dev/sda"
        assert build_child_uri("dev/sda") == "aio://dev/sda"

    def test_legacy_path_drops_query(self):
        """Test that the query is not carried over to a legacy device path."""
        assert build_child_uri("/dev/sda", "blk_size=4096") == "aio:///dev/sda"

    def test_bad_port_is_legacy(self):
        """Test that an id with an invalid port is not taken as a URL."""
        assert build_child_uri("nvmf://h:99999/x", "") == "aio://nvmf://h:99999/x"

    @pytest.mark.parametrize("value,expected", [
        ("nvmf://host:8420/nqn", True),
        ("bdev:///r1", True),
        ("aio:///dev/sda", True),
        ("file:///dev/nbd0", True),
        ("/dev/sda", False),
        ("sda", False),
        ("", False),
        ("1abc://x", False),
        ("http://", False),
        ("http://:80/x", False),
        ("http:foo", True),
        ("http:///nohost", True),
        ("nvmf://h:99999/x", False),
        ("nvmf://h:port/x", False),
    ])
    def test_is_absolute_url(self, value, expected):
        assert is_absolute_url(value) is expected


class TestFindChild:
    def test_exact_match(self):
        nexus = Nexus(node="n1", uuid="x1", children=[Child(uri="bdev:///a"), Child(uri="bdev:///b")])
        assert find_child(nexus, "bdev:///b").uri == "bdev:///b"

    def test_no_match(self):
        """Test that matching is exact, not by prefix."""
        nexus = Nexus(node="n1", uuid="x1", children=[Child(uri="bdev:///a?x=1")])
        with pytest.raises(NotFound):
            find_child(nexus, "bdev:///a")
