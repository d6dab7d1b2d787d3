"""Connector identifiers registered with the job runtime's sink-factory registry."""

from __future__ import annotations

# Factory identifier of the sink that accepts rows without writing them anywhere.
MOCK_SINK_CONNECTOR: str = "dinky-mock"
