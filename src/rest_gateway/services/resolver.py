"""Resolution of partially addressed mutations.

Destroying a pool or a nexus needs the owning node, but both can be
addressed by their own id alone. The pure ``*_request`` functions build the
destroy request from a filter and, for partial filters, the owner found by
a prior lookup; the ``resolve_*`` coroutines perform that lookup.

The lookup and the destroy are two separate bus calls. Nothing prevents
another caller from changing the resource in between; the destroy call's
own error is then what the caller sees.
"""
import logging
from typing import Optional

from ..bus.interfaces import MessageBus
from ..models import filters
from ..models.filters import Filter, InvalidFilter
from ..models.requests import DestroyNexus, DestroyPool, DestroyReplica

logger = logging.getLogger(__name__)


def destroy_pool_request(filter: Filter, node_id: Optional[str] = None) -> DestroyPool:
    """DestroyPool addressed by filter; ``node_id`` completes a Pool filter."""
    if isinstance(filter, filters.NodePool):
        return DestroyPool(node=filter.node_id, name=filter.pool_id)
    if isinstance(filter, filters.Pool) and node_id is not None:
        return DestroyPool(node=node_id, name=filter.pool_id)
    raise InvalidFilter(filter, "pool destruction")


def destroy_nexus_request(filter: Filter, node_id: Optional[str] = None) -> DestroyNexus:
    """DestroyNexus addressed by filter; ``node_id`` completes a Nexus filter."""
    if isinstance(filter, filters.NodeNexus):
        return DestroyNexus(node=filter.node_id, uuid=filter.nexus_id)
    if isinstance(filter, filters.Nexus) and node_id is not None:
        return DestroyNexus(node=node_id, uuid=filter.nexus_id)
    raise InvalidFilter(filter, "nexus destruction")


def destroy_replica_request(filter: Filter, node_id: Optional[str] = None) -> DestroyReplica:
    """DestroyReplica addressed by filter; ``node_id`` completes a PoolReplica filter."""
    if isinstance(filter, filters.NodePoolReplica):
        return DestroyReplica(node=filter.node_id, pool=filter.pool_id, uuid=filter.replica_id)
    if isinstance(filter, filters.PoolReplica) and node_id is not None:
        return DestroyReplica(node=node_id, pool=filter.pool_id, uuid=filter.replica_id)
    raise InvalidFilter(filter, "replica destruction")


async def resolve_destroy_pool(bus: MessageBus, filter: Filter) -> DestroyPool:
    if isinstance(filter, filters.Pool):
        pool = await bus.get_pool(filter)
        logger.info(f"Resolved pool {filter.pool_id} to node {pool.node}")
        return destroy_pool_request(filter, pool.node)
    return destroy_pool_request(filter)


async def resolve_destroy_nexus(bus: MessageBus, filter: Filter) -> DestroyNexus:
    if isinstance(filter, filters.Nexus):
        nexus = await bus.get_nexus(filter)
        logger.info(f"Resolved nexus {filter.nexus_id} to node {nexus.node}")
        return destroy_nexus_request(filter, nexus.node)
    return destroy_nexus_request(filter)


async def resolve_pool_node(bus: MessageBus, pool_id: str) -> str:
    """Node owning the pool, for replica requests addressed through the pool."""
    pool = await bus.get_pool(filters.Pool(pool_id))
    logger.info(f"Resolved pool {pool_id} to node {pool.node}")
    return pool.node


async def resolve_destroy_replica(bus: MessageBus, filter: Filter) -> DestroyReplica:
    if isinstance(filter, filters.PoolReplica):
        node_id = await resolve_pool_node(bus, filter.pool_id)
        return destroy_replica_request(filter, node_id)
    return destroy_replica_request(filter)
