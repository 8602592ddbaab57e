"""Unit tests for the filter algebra and the URN table."""

import pytest

from rest_gateway.models import filters
from rest_gateway.models.filters import InvalidFilter
from rest_gateway.urns import (
    URN_TEMPLATES,
    ResourceKind,
    check_filter,
    filtered_urn,
    route_path,
    segment,
)


class TestFilters:
    def test_params_follow_declaration_order(self):
        """Test that a filter exposes its ids by field name."""
        f = filters.NodePoolReplica("n1", "p1", "r1")
        assert f.params() == {"node_id": "n1", "pool_id": "p1", "replica_id": "r1"}
        assert filters.All().params() == {}

    def test_filters_are_values(self):
        """Test equality and hashing of filters."""
        assert filters.NodePool("n1", "p1") == filters.NodePool("n1", "p1")
        assert filters.Node("n1") != filters.Pool("n1")
        assert len({filters.Nexus("x"), filters.Nexus("x")}) == 1

    def test_build_picks_variant_fields(self):
        """Test building a filter from route parameters with extra keys."""
        params = {"node_id": "n1", "nexus_id": "x1", "child_id": "aio:///dev/sda"}
        assert filters.build(filters.NodeNexus, params) == filters.NodeNexus("n1", "x1")
        assert filters.build(filters.All, params) == filters.All()

    def test_build_missing_id(self):
        with pytest.raises(KeyError):
            filters.build(filters.NodePool, {"node_id": "n1"})

    def test_variants_are_closed(self):
        assert len(filters.VARIANTS) == 12
        assert all(issubclass(v, filters.Filter) for v in filters.VARIANTS)


class TestUrns:
    @pytest.mark.parametrize("kind,filter,expected", [
        (ResourceKind.NODES, filters.All(), "/v0/nodes"),
        (ResourceKind.NODES, filters.Node("n1"), "/v0/nodes/n1"),
        (ResourceKind.POOLS, filters.Node("n1"), "/v0/nodes/n1/pools"),
        (ResourceKind.POOLS, filters.Pool("p1"), "/v0/pools/p1"),
        (ResourceKind.REPLICAS, filters.PoolReplica("p1", "r1"), "/v0/pools/p1/replicas/r1"),
        (ResourceKind.REPLICAS, filters.NodePoolReplica("n1", "p1", "r1"),
         "/v0/nodes/n1/pools/p1/replicas/r1"),
        (ResourceKind.NEXUSES, filters.NodeNexus("n1", "x1"), "/v0/nodes/n1/nexuses/x1"),
        (ResourceKind.CHILDREN, filters.Nexus("x1"), "/v0/nexuses/x1/children"),
        (ResourceKind.VOLUMES, filters.NodeVolume("n1", "v1"), "/v0/nodes/n1/volumes/v1"),
    ])
    def test_filtered_urn(self, kind, filter, expected):
        """Test the path built for each accepted filter."""
        assert filtered_urn(kind, filter) == expected

    def test_ids_stay_in_their_segment(self):
        """Test that ids with reserved characters are percent-encoded."""
        assert segment("a/b c") == "a%2Fb%20c"
        assert filtered_urn(ResourceKind.NODES, filters.Node("a/b")) == "/v0/nodes/a%2Fb"

    @pytest.mark.parametrize("kind,filter", [
        (ResourceKind.NODES, filters.Pool("p1")),
        (ResourceKind.POOLS, filters.Replica("r1")),
        (ResourceKind.NEXUSES, filters.Volume("v1")),
        (ResourceKind.CHILDREN, filters.All()),
        (ResourceKind.CHILDREN, filters.Node("n1")),
        (ResourceKind.VOLUMES, filters.Nexus("x1")),
    ])
    def test_unsupported_variant(self, kind, filter):
        """Test that an unsupported filter is rejected before building a path."""
        with pytest.raises(InvalidFilter) as exc_info:
            filtered_urn(kind, filter)
        assert exc_info.value.filter == filter
        assert exc_info.value.resource == kind.value

    def test_accepted_sets(self):
        """Test the filter variants accepted by each resource type."""
        accepted = {kind: set(table) for kind, table in URN_TEMPLATES.items()}
        assert accepted[ResourceKind.NODES] == {filters.All, filters.Node}
        assert accepted[ResourceKind.POOLS] == {
            filters.All, filters.Node, filters.Pool, filters.NodePool}
        assert len(accepted[ResourceKind.REPLICAS]) == 8
        assert accepted[ResourceKind.NEXUSES] == {
            filters.All, filters.Node, filters.Nexus, filters.NodeNexus}
        assert accepted[ResourceKind.CHILDREN] == {filters.Nexus, filters.NodeNexus}
        assert accepted[ResourceKind.VOLUMES] == {
            filters.All, filters.Node, filters.Volume, filters.NodeVolume}

    def test_check_filter_accepts(self):
        check_filter(ResourceKind.REPLICAS, filters.NodeReplica("n1", "r1"))

    def test_route_path(self):
        assert route_path(ResourceKind.POOLS, filters.NodePool) == "/v0/nodes/{node_id}/pools/{pool_id}"
